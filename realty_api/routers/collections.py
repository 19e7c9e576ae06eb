"""Generic CRUD routes, one router per content collection."""
from __future__ import annotations

from typing import Any, Dict

from fastapi import APIRouter, Body, Depends, Request

from realty_api.dependencies import get_content_service, require_admin


def build_collection_router(collection: str) -> APIRouter:
    """GET is public; every mutation requires a valid session token."""
    router = APIRouter(prefix=f"/api/{collection}", tags=[collection])
    admin = [Depends(require_admin)]

    @router.get("")
    def list_items(request: Request):
        return get_content_service(request).list(collection)

    @router.post("", dependencies=admin)
    def create_item(request: Request, payload: Dict[str, Any] = Body(...)):
        return {"id": get_content_service(request).create(collection, payload)}

    @router.put("/{record_id}", dependencies=admin)
    def update_item(record_id: int, request: Request, payload: Dict[str, Any] = Body(...)):
        return {"changes": get_content_service(request).update(collection, record_id, payload)}

    @router.delete("/{record_id}", dependencies=admin)
    def delete_item(record_id: int, request: Request):
        return {"changes": get_content_service(request).delete(collection, record_id)}

    @router.delete("", dependencies=admin)
    def delete_all_items(request: Request):
        get_content_service(request).delete_all(collection)
        return {"ok": True}

    return router
