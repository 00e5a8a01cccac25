"""File upload middleware for OpenAPI multipart/form-data patching."""

import orjson
from robyn import Response

from uploader.core.logger import LogIcon, logger
from uploader.core.router import UPLOAD_ENDPOINTS
from uploader.middlewares.base import BaseMiddleware


def upload_request_body(field_name: str) -> dict:
    """OpenAPI requestBody for a single-file multipart upload."""
    return {
        "content": {
            "multipart/form-data": {
                "schema": {
                    "type": "object",
                    "properties": {
                        field_name: {
                            "type": "string",
                            "format": "binary",
                            "description": "File to upload",
                        }
                    },
                    "required": [field_name],
                }
            }
        },
        "required": True,
    }


class FileUploadOpenAPIMiddleware(BaseMiddleware):
    """Patches OpenAPI responses to use multipart/form-data for file upload endpoints."""

    endpoints = frozenset(["/openapi.json"])

    def after(self, response: Response) -> Response:
        """Patch OpenAPI spec with multipart/form-data for file upload endpoints."""
        if not UPLOAD_ENDPOINTS:
            return response

        try:
            spec = orjson.loads(response.description)
        except orjson.JSONDecodeError:
            logger.warning("OpenAPI document is not valid JSON, leaving it untouched", icon=LogIcon.WARNING)
            return response

        paths = spec.get("paths", {})
        for endpoint, field_name in UPLOAD_ENDPOINTS.items():
            for operation in paths.get(endpoint, {}).values():
                operation["requestBody"] = upload_request_body(field_name)

        response.description = orjson.dumps(spec).decode()
        return response
