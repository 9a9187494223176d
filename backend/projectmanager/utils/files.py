# backend/projectmanager/utils/files.py
from pathlib import Path
from typing import Iterable
from urllib.parse import quote
from uuid import uuid4
from fastapi import UploadFile
from ..services.exceptions import UploadRejectedError

async def read_upload_file(upload_file: UploadFile, max_bytes: int) -> bytes:
    """Read an uploaded file into memory, rejecting anything above max_bytes"""
    content = await upload_file.read(max_bytes + 1)
    if len(content) > max_bytes:
        raise UploadRejectedError(f"File exceeds the maximum size of {max_bytes} bytes.")
    if not content:
        raise UploadRejectedError("Uploaded file is empty.")
    return content

def check_content_type(upload_file: UploadFile, allowed: Iterable[str]) -> str:
    """Return the upload's MIME type if it is on the allow-list"""
    content_type = (upload_file.content_type or "").split(";")[0].strip().lower()
    if content_type not in {t.lower() for t in allowed}:
        raise UploadRejectedError(f"File type '{content_type or 'unknown'}' is not allowed.")
    return content_type

def save_file(content: bytes, directory: Path, original_name: str | None) -> Path:
    """Save file content with a unique name and return the path"""
    directory.mkdir(parents=True, exist_ok=True)

    # Create unique filename
    file_extension = Path(original_name or "").suffix
    file_path = directory / f"{uuid4()}{file_extension}"

    with file_path.open("wb") as buffer:
        buffer.write(content)

    return file_path

def delete_file(file_path: Path) -> None:
    """Delete a file if it exists"""
    if file_path.exists():
        file_path.unlink()

def get_relative_path(absolute_path: Path, base_path: Path) -> str:
    """Convert absolute path to relative path for database storage"""
    # Ensure both paths are absolute
    absolute_path = Path(absolute_path).absolute()
    base_path = Path(base_path).absolute()

    return absolute_path.relative_to(base_path).as_posix()

def content_disposition(file_name: str, disposition: str = "inline") -> str:
    """Content-Disposition value that stays latin-1 safe for any file name"""
    quoted = quote(file_name)
    if quoted != file_name:
        return f"{disposition}; filename*=utf-8''{quoted}"
    return f'{disposition}; filename="{file_name}"'
