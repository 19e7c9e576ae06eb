"""
In-process request throttling for the login and public form endpoints.

Each key (scope + client address) keeps the timestamps of its recent hits;
a hit is refused once ``limit`` hits already fall inside the trailing window.
"""
from __future__ import annotations

from collections import deque
from typing import Deque, Dict, Optional
import threading
import time

from fastapi import Request

from .errors import RateLimitedError


class RateLimiter:
    """Sliding-window counter shared by every worker thread of one process."""

    def __init__(self, clock=time.monotonic) -> None:
        self._clock = clock
        self._hits: Dict[str, Deque[float]] = {}
        self._lock = threading.Lock()

    def check(self, key: str, limit: int, window_seconds: int, *, now: Optional[float] = None) -> None:
        if limit <= 0:
            return
        now = self._clock() if now is None else now
        cutoff = now - window_seconds
        with self._lock:
            hits = self._hits.setdefault(key, deque())
            while hits and hits[0] <= cutoff:
                hits.popleft()
            if len(hits) >= limit:
                raise RateLimitedError()
            hits.append(now)
            if len(self._hits) > 1024:
                self._forget_idle(cutoff)

    def _forget_idle(self, cutoff: float) -> None:
        for key in [key for key, hits in self._hits.items() if not hits or hits[-1] <= cutoff]:
            del self._hits[key]

    def reset(self) -> None:
        with self._lock:
            self._hits.clear()


def client_ip(request: Request) -> str:
    forwarded = request.headers.get("x-forwarded-for")
    if forwarded:
        return forwarded.split(",")[0].strip()
    return request.client.host if request.client and request.client.host else "unknown"


def rate_limit_ip(limiter: RateLimiter, request: Request, scope: str, *, limit: int, window_seconds: int) -> None:
    limiter.check(f"{scope}:{client_ip(request)}", limit, window_seconds)
