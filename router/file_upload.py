import asyncio
from typing import Optional
from fastapi import APIRouter, UploadFile, File, Depends, HTTPException
from fastapi.responses import JSONResponse

from core.file_manager import read_upload_securely, temporary_upload
from core.data_processor import ParquetProcessor
from core.logger import get_logger
from utils.file_validator import valid_content_length, require_upload, error_response
from schemas.upload import UploadResponse, ErrorResponse

router = APIRouter(prefix="/api", tags=["upload"])
processor = ParquetProcessor()
logger = get_logger(__name__)

@router.post(
    "/upload",
    response_model=UploadResponse,
    responses={
        400: {"model": ErrorResponse},
        413: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
    },
)
async def upload_parquet(
    file: Optional[UploadFile] = File(None),
    content_length: Optional[int] = Depends(valid_content_length)
):
    """
    Decode an uploaded Parquet file into rows and column metadata.
    The upload only lives on disk for the duration of this request.
    """
    upload = require_upload(file)
    logger.info("Upload received: %s (content-length: %s)", upload.filename, content_length)

    try:
        # 1. Buffer the upload, enforcing the size limit while reading
        contents = await read_upload_securely(upload)

        # 2. Write it to a unique temp file, removed when the block exits
        async with temporary_upload(contents, upload.filename) as temp_path:
            # 3. Decode, describe and sanitize off the event loop
            result = await asyncio.to_thread(processor.process, temp_path)

    except HTTPException:
        raise
    except Exception as e:
        logger.exception("Processing failed for %s", upload.filename)
        message = str(e) or e.__class__.__name__
        return error_response(500, f"Server-side processing failed: {message}")

    logger.info(
        "Decoded %s: %d rows, %d columns",
        upload.filename, len(result["data"]), len(result["columns"])
    )
    return JSONResponse(content=result)
