"""Tests for custom router response handling and error mapping."""

import inspect

import pytest
from asgi_correlation_id import correlation_id
from pydantic import BaseModel
from robyn import Response

from uploader.core.errors import BoundaryNotFound, MissingBoundary, NotMultipart, StorageError
from uploader.core.router import UPLOAD_ENDPOINTS, _create_method_wrapper, error_response, parse_response


class SampleModel(BaseModel):
    """Sample Pydantic model for testing."""

    name: str
    value: int


def _register_only(*args, **kwargs):
    """Stand-in for a Robyn route method: the decorator returns the handler unchanged."""
    return lambda handler: handler


@pytest.fixture(autouse=True)
def clean_upload_endpoints():
    yield
    UPLOAD_ENDPOINTS.clear()


# -----------------------------------------------------------------------------
# parse_response Tests
# -----------------------------------------------------------------------------


class TestParseResponse:
    """Tests for parse_response function."""

    def test_response_passthrough(self) -> None:
        """Verify Response objects pass through unchanged."""
        original = Response(status_code=201, headers={}, description="created")
        assert parse_response(original) is original

    def test_pydantic_model_to_json(self) -> None:
        """Verify Pydantic models are serialized to JSON."""
        result = parse_response(SampleModel(name="test", value=123))

        assert result.status_code == 200
        assert result.headers["content-type"] == "application/json"
        assert "123" in result.description

    def test_dict_to_json(self) -> None:
        """Verify dicts are serialized to JSON."""
        result = parse_response({"key": "value"})
        assert result.headers["content-type"] == "application/json"
        assert "value" in result.description

    def test_other_to_plain_text(self) -> None:
        """Verify strings become text/plain responses."""
        result = parse_response('File "a.txt" uploaded successfully!')

        assert result.status_code == 200
        assert result.headers["content-type"] == "text/plain"
        assert result.description == 'File "a.txt" uploaded successfully!'


# -----------------------------------------------------------------------------
# error_response Tests
# -----------------------------------------------------------------------------


class TestErrorResponse:
    """Tests for error_response function."""

    @pytest.mark.parametrize(
        ("error", "description"),
        [
            (NotMultipart(), "Bad Request: Expected multipart/form-data"),
            (MissingBoundary(), "Bad Request: Missing boundary in Content-Type"),
            (BoundaryNotFound(), "Error: Could not find multipart boundary."),
        ],
    )
    def test_upload_errors_are_400(self, error, description: str) -> None:
        """Verify parse failures map to 400 with their message."""
        response = error_response(error)

        assert response.status_code == 400
        assert response.description == description

    def test_storage_error_hides_detail(self) -> None:
        """Verify storage failures are 500 without leaking paths."""
        response = error_response(StorageError("cannot write /srv/uploads/a.txt"))

        assert response.status_code == 500
        assert response.description == "Error saving file."


# -----------------------------------------------------------------------------
# Method wrapper Tests
# -----------------------------------------------------------------------------


class TestMethodWrapper:
    """Tests for the handler wrapping applied to route methods."""

    async def test_result_is_converted(self) -> None:
        """Verify plain return values become Responses."""

        async def handler() -> str:
            return "ok"

        wrapped = _create_method_wrapper(_register_only)("/ping")(handler)
        response = await wrapped()

        assert isinstance(response, Response)
        assert response.description == "ok"

    async def test_upload_error_is_mapped(self) -> None:
        """Verify UploadError raised by a handler becomes a 400."""

        async def handler(request) -> str:
            raise NotMultipart()

        wrapped = _create_method_wrapper(_register_only)("/upload")(handler)
        response = await wrapped(request=object())

        assert response.status_code == 400

    async def test_storage_error_is_mapped(self) -> None:
        """Verify StorageError raised by a handler becomes a 500."""

        async def handler() -> str:
            raise StorageError("disk full")

        wrapped = _create_method_wrapper(_register_only)("/upload")(handler)
        assert (await wrapped()).status_code == 500

    async def test_other_errors_propagate(self) -> None:
        """Verify unexpected exceptions are not swallowed."""

        async def handler() -> str:
            raise RuntimeError("boom")

        wrapped = _create_method_wrapper(_register_only)("/upload")(handler)
        with pytest.raises(RuntimeError):
            await wrapped()

    def test_upload_field_registers_endpoint(self) -> None:
        """Verify upload routes are recorded with their field name."""

        async def handler() -> str:
            return ""

        _create_method_wrapper(_register_only, "/files")("/upload", upload_field="myFile")(handler)
        assert UPLOAD_ENDPOINTS == {"/files/upload": "myFile"}

    async def test_handler_sees_request_correlation_id(self, make_upload_request) -> None:
        """Verify logs emitted by the handler carry the X-Request-ID of its request."""
        request = make_upload_request(b"")
        request.headers.set("x-request-id", "req-7")

        async def handler(request) -> str:
            return correlation_id.get()

        previous = correlation_id.get()
        wrapped = _create_method_wrapper(_register_only)("/upload")(handler)
        response = await wrapped(request=request)

        assert response.description == "req-7"
        assert correlation_id.get() == previous

    async def test_error_log_is_bound_to_request(self, make_upload_request) -> None:
        """Verify the correlation id is bound while an upload error is logged."""
        request = make_upload_request(b"")
        request.headers.set("x-request-id", "req-8")
        seen = []

        async def handler(request) -> str:
            seen.append(correlation_id.get())
            raise NotMultipart()

        wrapped = _create_method_wrapper(_register_only)("/upload")(handler)
        assert (await wrapped(request)).status_code == 400
        assert seen == ["req-8"]

    def test_signature_is_preserved(self) -> None:
        """Verify Robyn sees the original parameters for injection."""
        async def handler(request, global_dependencies) -> str:
            return ""

        wrapped = _create_method_wrapper(_register_only)("/upload")(handler)
        assert list(inspect.signature(wrapped).parameters) == ["request", "global_dependencies"]
