import os
from config import ALLOWED_EXTENSIONS, MAX_UPLOAD_MB
from services.errors import UnsupportedFileError


def validate_upload(file_name: str, content: bytes) -> None:
    """
    Accept only non-empty Excel payloads below the configured size limit.
    """
    ext = os.path.splitext(file_name or "")[1]
    if ext.lower() not in ALLOWED_EXTENSIONS:
        raise UnsupportedFileError("Only Excel files (.xlsx, .xls) are supported.")

    if not content:
        raise UnsupportedFileError(f"File '{file_name}' is empty.")

    if len(content) > MAX_UPLOAD_MB * 1024 * 1024:
        raise UnsupportedFileError(f"File '{file_name}' exceeds the {MAX_UPLOAD_MB:g} MB upload limit.")
