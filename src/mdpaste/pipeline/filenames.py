"""Filename validation, destination paths and markdown references.

Validation order (enforced):
  1. Dismissed prompt (None) -> UserCancelled.
  2. Trimmed value empty -> EMPTY_FILENAME.
  3. Value contains ".." or is absolute -> UNSAFE_FILENAME.
  4. Append the image extension when missing (case-insensitive).

Separators are allowed so a filename may target a sub-folder of the image folder.
"""

import logging
import os
import random
import string
from pathlib import Path

from mdpaste.config import folder_escapes_workspace
from mdpaste.utils.exceptions import (
    DUPLICATE_FILENAME,
    EMPTY_FILENAME,
    UNSAFE_FILENAME,
    PasteError,
    UserCancelled,
)

logger = logging.getLogger(__name__)

NAME_ALPHABET = string.digits + string.ascii_uppercase + string.ascii_lowercase


def generate_default_name(prefix: str = "img_", length: int = 6, extension: str = ".png") -> str:
    """Return a default image name such as img_a8Xk2P.png."""
    suffix = "".join(random.choices(NAME_ALPHABET, k=length))
    return f"{prefix}{suffix}{extension}"


def validate_filename(value: str | None, extension: str = ".png") -> str:
    """Validate a user-entered filename and normalize its extension.

    Raises:
        UserCancelled: If the prompt was dismissed.
        PasteError: EMPTY_FILENAME or UNSAFE_FILENAME.
    """
    if value is None:
        raise UserCancelled()

    filename = value.strip()
    if not filename:
        raise PasteError("you entered an empty filename", EMPTY_FILENAME)

    if ".." in filename:
        raise PasteError('invalid filename (cannot contain "..")', UNSAFE_FILENAME)

    if filename.startswith(("/", "\\")) or Path(filename).is_absolute():
        raise PasteError("invalid filename (must be relative)", UNSAFE_FILENAME)

    if filename.replace("\\", "/").rsplit("/", 1)[-1] in ("", "."):
        raise PasteError("invalid filename (missing name after folder)", UNSAFE_FILENAME)

    if not filename.lower().endswith(extension.lower()):
        filename += extension

    return filename


def resolve_image_path(workspace_root: Path, folder: str, filename: str) -> Path:
    """Build the absolute destination path and create its parent folders.

    Directory creation is idempotent and is not undone when the file exists.

    Raises:
        PasteError: UNSAFE_FILENAME if folder leaves the workspace,
            DUPLICATE_FILENAME if the destination already exists.
        OSError: If a parent directory cannot be created.
    """
    if folder_escapes_workspace(folder):
        raise PasteError(
            f"invalid image folder {folder!r} (must stay inside the workspace)",
            UNSAFE_FILENAME,
        )

    image_path = (workspace_root / folder / filename).absolute()
    image_path.parent.mkdir(parents=True, exist_ok=True)

    if image_path.exists():
        logger.info("duplicate_filename", extra={"path": str(image_path)})
        raise PasteError("duplcate filename", DUPLICATE_FILENAME)

    return image_path


def build_reference(image_path: Path, document_path: Path) -> str:
    """Return the markdown image line for image_path, relative to the document."""
    rel_path = os.path.relpath(image_path, document_path.parent)
    rel_path = Path(rel_path).as_posix().replace(" ", "%20")
    return f"![image]({rel_path})\n"
