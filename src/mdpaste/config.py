"""Paste-image configuration.

PasteSettings is loaded from environment with prefix MDPASTE_ (optional .env).
Override via env vars, e.g.:
  MDPASTE_FOLDER=assets/img
  MDPASTE_MARKUP_EXTENSIONS='[".md", ".markdown", ".mdx"]'  (JSON array)
  MDPASTE_PROCESS_TIMEOUT=30
  MDPASTE_DIAGNOSTIC_LOG=/tmp/mdpaste.jsonl

Extensions are normalized to lowercase for case-insensitive matching.
All extensions must start with a dot (e.g. .md).
"""

from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


def folder_escapes_workspace(folder: str) -> bool:
    """True when folder is absolute or climbs out of the workspace root."""
    parts = folder.replace("\\", "/").split("/")
    return ".." in parts or folder.startswith(("/", "\\")) or Path(folder).is_absolute()


class PasteSettings(BaseSettings):
    """Settings for the paste-image command. Loaded from env with prefix MDPASTE_."""

    model_config = SettingsConfigDict(
        env_prefix="MDPASTE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    folder: str = Field(
        default="images",
        min_length=1,
        description="Folder under the workspace root where images are stored.",
    )
    markup_extensions: list[str] = [".md", ".markdown"]
    image_extension: str = Field(
        default=".png", description="Extension appended to entered filenames."
    )
    default_name_prefix: str = Field(
        default="img_", description="Prefix of the generated default filename."
    )
    default_name_length: int = Field(
        default=6,
        ge=1,
        le=32,
        description="Number of random alphanumerics in the default filename.",
    )
    clipboard_marker: str = Field(
        default="«class PNGf»",
        description="Substring of `clipboard info` output that signals image data.",
    )
    osascript_path: str = Field(
        default="osascript", description="AppleScript runner executable."
    )
    process_timeout: float | None = Field(
        default=None,
        gt=0,
        description="Optional timeout in seconds for clipboard subprocesses.",
    )
    diagnostic_log: Path | None = Field(
        default=None, description="Optional JSONL file receiving pipeline events."
    )

    @field_validator("markup_extensions", mode="before")
    @classmethod
    def normalize_extensions(cls, v: list[str] | None) -> list[str] | None:
        """Normalize extensions to lowercase for case-insensitive matching."""
        if v is None:
            return v
        return [ext.lower() if isinstance(ext, str) else ext for ext in v]

    @field_validator("markup_extensions")
    @classmethod
    def validate_extension_format(cls, v: list[str]) -> list[str]:
        """Ensure all extensions start with a dot."""
        for ext in v:
            if not ext.startswith("."):
                raise ValueError(f"Extension must start with '.': {ext!r}")
        return v

    @field_validator("image_extension")
    @classmethod
    def validate_image_extension(cls, v: str) -> str:
        if not v.startswith(".") or len(v) < 2:
            raise ValueError(f"Image extension must start with '.': {v!r}")
        return v

    @field_validator("folder")
    @classmethod
    def validate_folder(cls, v: str) -> str:
        """Keep the image folder inside the workspace."""
        if folder_escapes_workspace(v):
            raise ValueError(f"Folder must be relative to the workspace: {v!r}")
        return v
