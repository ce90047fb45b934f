"""Clipboard capabilities consumed by the paste pipeline."""

from pathlib import Path
from typing import Protocol


class ClipboardInspector(Protocol):
    """Reports what the system clipboard currently holds."""

    def inspect(self) -> str:
        """Return the raw textual clipboard description.

        Raises:
            PasteError: CLIPBOARD_INSPECTION_FAILED if the query cannot run.
        """
        ...


class ClipboardWriter(Protocol):
    """Transfers clipboard image data to a file."""

    def write_png(self, path: Path) -> Path:
        """Write the clipboard image to path as PNG and return path.

        Raises:
            PasteError: SPAWN_FAILED, WRITE_ERROR or WRITE_FAILED.
        """
        ...


class Clipboard(ClipboardInspector, ClipboardWriter, Protocol):
    """Both capabilities; what a platform implementation provides."""
