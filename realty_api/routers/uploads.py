from __future__ import annotations

from dataclasses import asdict
from typing import Optional

from fastapi import APIRouter, Depends, File, Request, UploadFile

from realty_api.core.errors import ValidationError
from realty_api.dependencies import get_upload_service, require_admin

router = APIRouter(prefix="/api", tags=["uploads"])


@router.post("/upload", dependencies=[Depends(require_admin)])
def upload(request: Request, file: Optional[UploadFile] = File(None)):
    if file is None or not file.filename:
        raise ValidationError("No file uploaded")
    stored = get_upload_service(request).save(file.file, file.filename)
    return asdict(stored)
