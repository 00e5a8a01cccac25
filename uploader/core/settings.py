"""Unified settings for robyn-file-uploader."""

import importlib.metadata
import tomllib
from pathlib import Path
from typing import ClassVar, Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


def read_pyproject(pyproject_path: Path) -> dict:
    """Read pyproject.toml into a dict, empty when the file is not shipped."""
    if not pyproject_path.is_file():
        return {}
    with pyproject_path.open("rb") as file_handle:
        return tomllib.load(file_handle)


def get_version(project: dict) -> str:
    """Get version from installed package metadata or fallback to pyproject."""
    name = project.get("name", "robyn-file-uploader")
    try:
        return importlib.metadata.version(name)
    except importlib.metadata.PackageNotFoundError:
        return project.get("version", "0.0.0")


class Settings(BaseSettings):
    """Unified settings for robyn-file-uploader service."""

    DEBUG: bool = True
    ENVIRONMENT: Literal["DEV", "PROD"] = "DEV"
    LOG_LEVEL: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"

    # ClassVar to prevent Pydantic from trying to load from env
    BASE_DIR: ClassVar[Path] = Path(__file__).parent.parent.parent
    PROJECT: ClassVar[dict] = read_pyproject(BASE_DIR / "pyproject.toml").get("project", {})
    API_NAME: ClassVar[str] = PROJECT.get("name", "robyn-file-uploader")
    API_DESCRIPTION: ClassVar[str] = PROJECT.get("description", "Multipart file upload service")
    API_VERSION: ClassVar[str] = get_version(PROJECT)

    # Server
    API_HOST: str = "0.0.0.0"
    API_PORT: int = 3000

    # Uploads
    UPLOAD_DIR: Path = BASE_DIR / "uploads"
    FORM_FIELD_NAME: str = "myFile"
    DEFAULT_FILENAME: str = "untitled"

    @property
    def api_url(self) -> str:
        return f"http://{self.API_HOST}:{self.API_PORT}"

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")


settings = Settings()  # type: ignore
