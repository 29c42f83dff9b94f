import base64
import binascii
import io
import logging
import os
import uuid

from fastapi import HTTPException
from PIL import Image, UnidentifiedImageError

from ...core.clock import utc_now
from ...core.config import settings
from ...application.ports.media_store import MediaStore

logger = logging.getLogger(__name__)

EXTENSIONS = {
    "JPEG": ".jpg",
    "PNG": ".png",
    "WEBP": ".webp",
}


class LocalMediaStore(MediaStore):
    """Stores uploads under ``UPLOAD_DIR`` and returns URLs served from ``/uploads``."""

    def __init__(self, upload_dir: str = None, base_url: str = None) -> None:
        self.upload_dir = upload_dir or settings.UPLOAD_DIR
        self.base_url = (base_url if base_url is not None else settings.BASE_URL).rstrip("/")
        self.max_file_size = settings.MAX_FILE_SIZE
        self.allowed_types = settings.ALLOWED_IMAGE_TYPES

    def _image_format(self, data: bytes) -> str:
        try:
            with Image.open(io.BytesIO(data)) as image:
                image.verify()
                return image.format
        except (UnidentifiedImageError, OSError, SyntaxError):
            raise HTTPException(status_code=400, detail="Uploaded file is not a valid image")

    def save_bytes(self, folder: str, data: bytes, filename: str, content_type: str) -> str:
        if content_type and content_type not in self.allowed_types:
            raise HTTPException(status_code=400, detail=f"Unsupported file type. Allowed: {self.allowed_types}")
        if len(data) > self.max_file_size:
            raise HTTPException(status_code=413, detail="File too large")

        image_format = self._image_format(data)
        ext = EXTENSIONS.get(image_format) or os.path.splitext(filename or "")[1] or ".jpg"
        stored_name = f"{int(utc_now().timestamp() * 1000)}_{uuid.uuid4().hex}{ext}"

        dest_dir = os.path.join(self.upload_dir, folder) if folder else self.upload_dir
        os.makedirs(dest_dir, exist_ok=True)
        with open(os.path.join(dest_dir, stored_name), "wb") as f:
            f.write(data)

        path = f"/uploads/{folder}/{stored_name}" if folder else f"/uploads/{stored_name}"
        logger.info(f"Stored {len(data)} bytes at {path}")
        return f"{self.base_url}{path}"

    def save_base64(self, folder: str, base64_data: str, filename: str = "upload.jpg") -> str:
        # Accept both raw base64 and data URLs
        if base64_data.startswith("data:"):
            _, _, base64_data = base64_data.partition(",")
        try:
            data = base64.b64decode(base64_data, validate=True)
        except (binascii.Error, ValueError):
            raise HTTPException(status_code=400, detail="Invalid base64 image data")
        image_format = self._image_format(data)
        content_type = f"image/{image_format.lower()}" if image_format else "image/jpeg"
        return self.save_bytes(folder, data, filename, content_type)
