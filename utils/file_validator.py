from fastapi import UploadFile, HTTPException, Header
from fastapi.responses import JSONResponse
from typing import Any, Optional
from config.settings import settings
from core.data_processor import make_transport_safe

# Room for multipart boundaries and part headers on top of the file itself
MULTIPART_OVERHEAD = 64 * 1024

async def valid_content_length(content_length: Optional[int] = Header(None)) -> Optional[int]:
    """
    Checks the content header before the body is read.
    Requests announcing clearly more than the maximum upload size are rejected with 413,
    the exact limit is enforced while reading the file.
    """
    if content_length is not None and content_length > settings.files.max_file_size + MULTIPART_OVERHEAD:
        raise HTTPException(
            status_code=413,
            detail=f"File too large. Max size is {settings.files.max_file_size_mb}MB"
        )
    return content_length

def require_upload(file: Optional[UploadFile]) -> UploadFile:
    """A multipart part without a filename counts as no file at all"""
    if file is None or not file.filename:
        raise HTTPException(status_code=400, detail="No file uploaded.")
    return file

def error_response(status_code: int, message: Any) -> JSONResponse:
    """Build the {"error": ...} envelope, sanitized like any other payload"""
    return JSONResponse(
        status_code=status_code,
        content=make_transport_safe({"error": str(message)})
    )
