"""
Media upload endpoint backed by Supabase Storage.
"""

import logging
from typing import Optional

from fastapi import APIRouter, File, Form, HTTPException, UploadFile, status
from pydantic import BaseModel

from travloger.api.deps import CurrentUser
from travloger.services.storage import StorageError, delete_media, upload_media

logger = logging.getLogger(__name__)

router = APIRouter()


class UploadResponse(BaseModel):
    url: str
    path: str


@router.post("", response_model=UploadResponse, status_code=status.HTTP_201_CREATED)
async def upload_file(
    user: CurrentUser,
    file: UploadFile = File(...),
    folder: str = Form("uploads"),
    slug: Optional[str] = Form(None),
):
    """
    Upload an image (max 4MB) or a video (max 20MB).

    The file lands at {folder}/{slug}/{timestamp}-{name} and its public URL
    is returned.
    """
    content = await file.read()
    try:
        path, url = await upload_media(
            file_content=content,
            original_filename=file.filename or "file",
            folder=folder,
            slug=slug or "",
            mime_type=file.content_type,
        )
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except StorageError as e:
        logger.error(f"Upload of {file.filename} failed: {e}")
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=str(e))

    logger.info(f"Uploaded {path}")
    return UploadResponse(url=url, path=path)


@router.delete("", status_code=status.HTTP_204_NO_CONTENT)
async def delete_file(path: str, user: CurrentUser):
    try:
        await delete_media(path)
    except StorageError as e:
        logger.error(f"Delete of {path} failed: {e}")
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=str(e))
