"""Upload storage lifespan event."""

from uploader.core.lifespan import BaseEvent
from uploader.core.logger import LogIcon, logger
from uploader.services.storage import UploadStorage


class UploadStorageEvent(BaseEvent[UploadStorage]):
    """Creates the upload directory and publishes the storage in the app state."""

    name = "storage"

    async def startup(self) -> UploadStorage:
        storage = UploadStorage(self.settings.UPLOAD_DIR)
        if storage.ensure_directory():
            logger.info("Created upload directory", icon=LogIcon.STORAGE, path=str(storage.root))
        logger.info("Uploads will be saved to directory", icon=LogIcon.STORAGE, path=str(storage.root))
        return storage
