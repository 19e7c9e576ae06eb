from __future__ import annotations

from typing import Any, Optional

from fastapi import APIRouter, Depends, Request
from pydantic import BaseModel

from realty_api.dependencies import get_auth_service, limit_login, require_admin

router = APIRouter(prefix="/api/auth", tags=["auth"])


class LoginPayload(BaseModel):
    username: Optional[str] = None
    password: Optional[str] = None


@router.post("/login", dependencies=[Depends(limit_login)])
def login(request: Request, payload: Optional[LoginPayload] = None):
    payload = payload or LoginPayload()
    result = get_auth_service(request).login(payload.username, payload.password)
    return {"token": result.token}


@router.get("/me")
def me(claims: dict[str, Any] = Depends(require_admin)):
    return {"id": claims["id"], "username": claims["username"], "exp": claims["exp"]}
