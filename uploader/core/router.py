"""Router with response conversion and upload error mapping."""

import inspect
from collections.abc import Callable
from functools import wraps
from typing import Any

import orjson
from pydantic import BaseModel
from robyn import Response, SubRouter, status_codes
from robyn.robyn import HttpMethod

from uploader.core.errors import StorageError, UploadError
from uploader.core.logger import REQUEST_ID_HEADER, LogIcon, bind_correlation_id, logger

# endpoint path -> multipart form field it expects
UPLOAD_ENDPOINTS: dict[str, str] = {}

TEXT_PLAIN = {"content-type": "text/plain"}


def parse_response(result: Any) -> Response:
    """Convert handler result to Response."""
    match result:
        case Response():
            return result
        case BaseModel():
            return Response(
                status_code=status_codes.HTTP_200_OK,
                headers={"content-type": "application/json"},
                description=result.model_dump_json(indent=4),
            )
        case dict():
            return Response(
                status_code=status_codes.HTTP_200_OK,
                headers={"content-type": "application/json"},
                description=orjson.dumps(result).decode(),
            )
        case _:
            return Response(
                status_code=status_codes.HTTP_200_OK,
                headers=dict(TEXT_PLAIN),
                description=str(result),
            )


def error_response(error: UploadError | StorageError) -> Response:
    """Map an upload or storage failure to a plain-text response."""
    return Response(status_code=error.status_code, headers=dict(TEXT_PLAIN), description=error.message)


def request_id_of(args: tuple, kwargs: dict) -> str | None:
    """Return the X-Request-ID of the request a handler was called with, if any."""
    for candidate in (kwargs.get("request"), *args):
        headers = getattr(candidate, "headers", None)
        if headers is not None:
            return headers.get(REQUEST_ID_HEADER)
    return None


HTTP_METHODS = (
    HttpMethod.GET,
    HttpMethod.POST,
    HttpMethod.PUT,
    HttpMethod.DELETE,
    HttpMethod.PATCH,
)


def _create_method_wrapper(original_method: Callable, router_prefix: str = "") -> Callable:
    @wraps(original_method)
    def method_wrapper(*args, upload_field: str | None = None, **kwargs) -> Callable:
        endpoint = args[0] if args else kwargs.get("endpoint", "")
        decorator = original_method(*args, **kwargs)

        def handler_decorator(handler: Callable) -> Callable:
            if upload_field:
                full_path = f"{router_prefix}{endpoint}".replace("//", "/")
                UPLOAD_ENDPOINTS[full_path] = upload_field

            @wraps(handler)
            async def wrapped_handler(*h_args, **h_kwargs):
                with bind_correlation_id(request_id_of(h_args, h_kwargs)):
                    try:
                        result = await handler(*h_args, **h_kwargs)
                    except UploadError as ex:
                        logger.warning(f"Rejected upload: {ex.kind}", icon=LogIcon.FORBIDDEN, reason=ex.message)
                        return error_response(ex)
                    except StorageError as ex:
                        logger.error("Error writing file", icon=LogIcon.ERROR, detail=ex.detail)
                        return error_response(ex)
                return parse_response(result)

            wrapped_handler.__signature__ = inspect.signature(handler)  # type: ignore[attr-defined]
            return decorator(wrapped_handler)

        return handler_decorator

    return method_wrapper


class Router(SubRouter):
    """SubRouter whose handlers may return plain values and raise upload errors."""

    def __init__(self, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self._prefix = kwargs.get("prefix", "")
        self._wrap_methods()

    def _wrap_methods(self) -> None:
        """Wrap HTTP methods with response handling."""
        for method in HTTP_METHODS:
            method_name = str(method).split(".")[-1].lower()
            if hasattr(self, method_name):
                original_method = getattr(self, method_name)
                wrapped_method = _create_method_wrapper(original_method, self._prefix)
                setattr(self, method_name, wrapped_method)
