from typing import Optional

from fastapi import APIRouter, Depends, File, UploadFile

from clubhouse.services.auth_service import require_admin
from clubhouse.services.upload_service import upload_image

router = APIRouter(prefix="/api/upload", tags=["upload"])


@router.post("", dependencies=[Depends(require_admin)])
async def upload(file: Optional[UploadFile] = File(None)):
    filename = file.filename if file else ""
    content = await file.read() if file else b""
    return {"url": upload_image(filename, content, file.content_type if file else None)}
