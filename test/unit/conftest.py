"""Test fixtures for robyn-file-uploader unit tests."""

from dataclasses import dataclass, field
from pathlib import Path

import pytest

from uploader.core.lifespan import State
from uploader.services.storage import UploadStorage

BOUNDARY = "----WebKitFormBoundary7MA4YWxkTrZu0gW"
CONTENT_TYPE = f"multipart/form-data; boundary={BOUNDARY}"


# -----------------------------------------------------------------------------
# Multipart body builder
# -----------------------------------------------------------------------------


def make_multipart_body(
    payload: bytes,
    *,
    boundary: str = BOUNDARY,
    field_name: str = "myFile",
    filename: str | None = "example.txt",
    content_type: str | None = "text/plain",
) -> bytes:
    disposition = f'form-data; name="{field_name}"'
    if filename is not None:
        disposition += f'; filename="{filename}"'

    lines = [f"--{boundary}", f"Content-Disposition: {disposition}"]
    if content_type:
        lines.append(f"Content-Type: {content_type}")
    head = ("\r\n".join(lines) + "\r\n\r\n").encode()
    return head + payload + f"\r\n--{boundary}--\r\n".encode()


# -----------------------------------------------------------------------------
# Mock classes for Robyn Request
# -----------------------------------------------------------------------------


@dataclass
class MockHeaders:
    """Mock Headers object for Robyn Request."""

    _data: dict = field(default_factory=dict)

    def get(self, key: str, default: str | None = None) -> str | None:
        return self._data.get(key.lower(), default)

    def __getitem__(self, key: str) -> str:
        return self._data[key.lower()]

    def set(self, key: str, value: str) -> None:
        self._data[key.lower()] = value


@dataclass
class MockUrl:
    path: str = "/"


@dataclass
class MockRequest:
    """Mock Request object for Robyn."""

    body: bytes | str = b""
    headers: MockHeaders = field(default_factory=MockHeaders)
    method: str = "GET"
    url: MockUrl = field(default_factory=MockUrl)


# -----------------------------------------------------------------------------
# Fixtures
# -----------------------------------------------------------------------------


@pytest.fixture
def upload_dir(tmp_path: Path) -> Path:
    return tmp_path / "uploads"


@pytest.fixture
def storage(upload_dir: Path) -> UploadStorage:
    """Storage over a fresh, existing upload directory."""
    storage = UploadStorage(upload_dir)
    storage.ensure_directory()
    return storage


@pytest.fixture
def global_dependencies(storage: UploadStorage) -> dict:
    """Global dependencies as Robyn injects them after startup."""
    state = State()
    state.storage = storage
    yield {"state": state}
    state.clear()


@pytest.fixture
def make_upload_request():
    """Factory fixture to create mock upload requests."""

    def _make(body: bytes, content_type: str | None = CONTENT_TYPE) -> MockRequest:
        headers = MockHeaders({"content-type": content_type} if content_type else {})
        return MockRequest(body=body, headers=headers, method="POST", url=MockUrl("/upload"))

    return _make


@pytest.fixture
def make_body():
    """Factory fixture for single-part multipart bodies."""
    return make_multipart_body


@pytest.fixture
def content_type() -> str:
    return CONTENT_TYPE
