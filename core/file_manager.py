import asyncio
import re
import uuid
from contextlib import asynccontextmanager
from pathlib import Path
from typing import AsyncIterator, Optional
from fastapi import UploadFile, HTTPException
from config.settings import settings
from core.logger import get_logger

logger = get_logger(__name__)

UNSAFE_FILENAME_CHARS = re.compile(r"[^a-zA-Z0-9_.-]")

# Keeps "<uuid>-<name>" well under the usual 255-byte filename limit
MAX_FILENAME_SUFFIX = 100


def sanitize_filename(filename: Optional[str]) -> str:
    """Replace every character outside [A-Za-z0-9_.-] with an underscore."""
    return UNSAFE_FILENAME_CHARS.sub("_", filename or "upload")


def unique_temp_path(filename: Optional[str], temp_dir: Optional[str] = None) -> Path:
    directory = Path(temp_dir or settings.files.temp_dir)
    directory.mkdir(parents=True, exist_ok=True)
    suffix = sanitize_filename(filename)[-MAX_FILENAME_SUFFIX:]
    return directory / f"{uuid.uuid4().hex}-{suffix}"


async def read_upload_securely(file: UploadFile) -> bytes:
    """
    Reads the upload in chunks into memory.
    Stops as soon as the size limit is exceeded, nothing reaches the disk in that case.
    """
    max_size = settings.files.max_file_size
    buffer = bytearray()

    while True:
        chunk = await file.read(settings.files.chunk_size)
        if not chunk:
            break

        if len(buffer) + len(chunk) > max_size:
            raise HTTPException(
                status_code=413,
                detail=f"File too large. Max size is {settings.files.max_file_size_mb}MB"
            )

        buffer.extend(chunk)

    return bytes(buffer)


def remove_temp_file(path: Path) -> None:
    """Delete a transient file. Failures are logged, never raised."""
    try:
        path.unlink()
        logger.debug("Temp file %s removed", path)
    except FileNotFoundError:
        logger.debug("Temp file %s already gone", path)
    except OSError as e:
        logger.warning("Failed to clean up temp file %s: %s", path, e)


@asynccontextmanager
async def temporary_upload(contents: bytes, filename: Optional[str]) -> AsyncIterator[Path]:
    """
    Writes the buffered upload to a uniquely named temp file and yields its path.
    The file is removed when the block exits, whether it succeeded or raised.
    Disk I/O runs in a worker thread.
    """
    path = unique_temp_path(filename)
    try:
        await asyncio.to_thread(path.write_bytes, contents)
        logger.info("Upload written to %s (%d bytes)", path, len(contents))
        yield path
    finally:
        await asyncio.to_thread(remove_temp_file, path)
