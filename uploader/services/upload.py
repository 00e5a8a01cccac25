"""Upload use case: parse the request, then hand the result to storage."""

import asyncio

from uploader.core.logger import LogIcon, logger
from uploader.models.core import RawRequest, StoredUpload
from uploader.multipart.parser import DEFAULT_FIELD_NAME, DEFAULT_FILENAME, handle_upload
from uploader.services.storage import UploadStorage


async def store_upload(
    raw: RawRequest,
    storage: UploadStorage,
    *,
    field_name: str = DEFAULT_FIELD_NAME,
    default_filename: str = DEFAULT_FILENAME,
) -> StoredUpload:
    """Parse ``raw`` and write the file. Parsing errors propagate before any I/O."""
    result = handle_upload(
        raw.content_type,
        raw.body,
        field_name=field_name,
        default_filename=default_filename,
    )
    path = await asyncio.to_thread(storage.write, result.filename, result.payload)
    logger.info("File uploaded successfully", icon=LogIcon.UPLOAD, filename=result.filename, size=result.size)
    return StoredUpload(filename=result.filename, path=path, size=result.size)
