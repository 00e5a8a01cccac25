"""Filesystem storage for uploaded files."""

from pathlib import Path

from uploader.core.errors import StorageError


class UploadStorage:
    """Writes uploads into a single flat directory."""

    def __init__(self, upload_dir: Path) -> None:
        self._root = Path(upload_dir)

    @property
    def root(self) -> Path:
        return self._root

    def ensure_directory(self) -> bool:
        """Create the upload directory. Returns True if it did not exist yet."""
        if self._root.is_dir():
            return False
        try:
            self._root.mkdir(parents=True, exist_ok=True)
        except OSError as ex:
            raise StorageError(f"cannot create upload directory {self._root}: {ex}") from ex
        return True

    def resolve(self, filename: str) -> Path:
        """Return the target path for ``filename``; it must sit directly inside the root."""
        root = self._root.resolve()
        target = (root / filename).resolve()
        if target.parent != root:
            raise StorageError(f"refusing to write {filename!r} outside {root}")
        return target

    def write(self, filename: str, payload: bytes) -> Path:
        """Write ``payload`` under ``filename``, replacing any existing file."""
        target = self.resolve(filename)
        try:
            target.write_bytes(payload)
        except OSError as ex:
            raise StorageError(f"cannot write {target}: {ex}") from ex
        return target
