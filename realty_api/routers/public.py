"""Unauthenticated submission forms of the public site."""
from __future__ import annotations

from typing import Any, Dict, Optional

from fastapi import APIRouter, Body, Depends, Request

from realty_api.dependencies import get_content_service, limit_public

router = APIRouter(prefix="/api", tags=["public"], dependencies=[Depends(limit_public)])


@router.post("/testimonials/public")
def submit_testimonial(request: Request, payload: Optional[Dict[str, Any]] = Body(None)):
    return {"id": get_content_service(request).submit_testimonial(payload)}


@router.post("/messages/public")
def submit_message(request: Request, payload: Optional[Dict[str, Any]] = Body(None)):
    return {"id": get_content_service(request).submit_message(payload)}
