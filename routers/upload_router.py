import logging
import os
import time
import uuid
from typing import Optional

from fastapi import APIRouter, Depends, File, UploadFile

from core.auth import get_current_user
from core.config import Settings, get_app_settings
from core.errors import InvalidInput
from schemas.asset_schema import UploadResponse
from schemas.auth_schema import TokenIdentity

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Upload"])

CHUNK_SIZE = 1024 * 1024


def _generate_filename(original_name: str | None) -> str:
    """Unique on-disk name that keeps the client's extension.
    The client-supplied stem is discarded so it can never collide or escape UPLOAD_DIR.
    """
    ext = os.path.splitext(os.path.basename(original_name or ""))[1].lower()
    if not ext[1:].isalnum():
        ext = ""
    return f"{int(time.time() * 1000)}-{uuid.uuid4().hex}{ext}"


def _store_file(media: UploadFile, upload_dir: str) -> tuple[str, int]:
    os.makedirs(upload_dir, exist_ok=True)
    filename = _generate_filename(media.filename)
    file_path = os.path.join(upload_dir, filename)

    # Stream to disk to avoid high memory usage
    size_bytes = 0
    with open(file_path, "wb") as out:
        while True:
            chunk = media.file.read(CHUNK_SIZE)
            if not chunk:
                break
            out.write(chunk)
            size_bytes += len(chunk)
    return filename, size_bytes


@router.post("/upload", response_model=UploadResponse)
def upload_file(
    file: Optional[UploadFile] = File(None),
    settings: Settings = Depends(get_app_settings),
    current_user: TokenIdentity = Depends(get_current_user),
):
    if file is None or not file.filename:
        raise InvalidInput("No file uploaded")

    filename, size_bytes = _store_file(file, settings.UPLOAD_DIR)
    logger.info("User %s uploaded %s (%d bytes)", current_user.id, filename, size_bytes)

    return UploadResponse(url=f"{settings.UPLOAD_URL_PATH.rstrip('/')}/{filename}")
