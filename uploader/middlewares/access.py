"""Request logging middleware."""

from uuid import uuid4

from robyn import Request

from uploader.core.logger import REQUEST_ID_HEADER, LogIcon, bind_correlation_id, logger
from uploader.middlewares.base import BaseMiddleware


class RequestLogMiddleware(BaseMiddleware):
    """Assigns each request a correlation id and logs method and path.

    The id is written back to the ``X-Request-ID`` header so the route
    wrapper can bind it again around the handler call.
    """

    def before(self, request: Request) -> Request:
        request_id = request.headers.get(REQUEST_ID_HEADER) or uuid4().hex
        request.headers.set(REQUEST_ID_HEADER, request_id)
        with bind_correlation_id(request_id):
            logger.info("Request received", icon=LogIcon.NETWORK, method=request.method, path=request.url.path)
        return request
