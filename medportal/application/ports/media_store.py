from typing import Protocol


class MediaStore(Protocol):
    def save_bytes(self, folder: str, data: bytes, filename: str, content_type: str) -> str:
        ...

    def save_base64(self, folder: str, base64_data: str, filename: str = "upload.jpg") -> str:
        ...
