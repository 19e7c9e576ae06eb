from __future__ import annotations

from fastapi import APIRouter, Depends, Request

from realty_api.dependencies import get_content_service, require_admin

router = APIRouter(prefix="/api/seed", tags=["seed"], dependencies=[Depends(require_admin)])


@router.post("/demo")
def seed_demo(request: Request):
    seeded = get_content_service(request).seed_demo()
    return {"ok": True, "seeded": seeded}
