"""robyn-file-uploader - multipart file upload service powered by Robyn."""

from robyn import Robyn

from uploader.api.health import router as health_router
from uploader.api.upload import router as upload_router
from uploader.core.lifespan import create_lifespan
from uploader.core.logger import LogIcon, logger
from uploader.core.settings import settings as st
from uploader.events.storage import UploadStorageEvent
from uploader.middlewares.access import RequestLogMiddleware
from uploader.middlewares.base import MiddlewareHandler
from uploader.middlewares.files import FileUploadOpenAPIMiddleware

app = Robyn(__file__)

# Lifespan events
lifespan = create_lifespan(app, st)
lifespan.register(UploadStorageEvent).attach()

# Routers
app.include_router(upload_router)
app.include_router(health_router)

# Middlewares
middlewares = MiddlewareHandler(app)
middlewares.register(RequestLogMiddleware(endpoints=["/", "/upload", "/health"]))
middlewares.register(FileUploadOpenAPIMiddleware())


def main() -> None:
    logger.info("Server running | NAME=%s | URL=%s", st.API_NAME, st.api_url, icon=LogIcon.START)
    app.start(host=st.API_HOST, port=st.API_PORT)


if __name__ == "__main__":
    main()
