"""Apply a text edit to a document stored on disk.

Encoding is UTF-8. Every line keeps its own ending (LF or CRLF); newlines in
the inserted text take the ending of the line at the start of the selection.
Positions past the end of a line or of the document are clamped to that end.
"""

import logging
from pathlib import Path

from mdpaste.editor.state import Position, Selection

logger = logging.getLogger(__name__)


def _split_lines(content: str) -> list[tuple[str, str]]:
    """Split content into (text, ending) pairs; the last ending may be empty."""
    parts = content.split("\n")
    lines = []
    for part in parts[:-1]:
        if part.endswith("\r"):
            lines.append((part[:-1], "\r\n"))
        else:
            lines.append((part, "\n"))
    lines.append((parts[-1], ""))
    return lines


def _offset(lines: list[tuple[str, str]], position: Position) -> int:
    """Convert a position to an offset into the raw content."""
    if position.line < 0 or position.character < 0:
        raise ValueError(f"Position must not be negative: {position}")

    if position.line >= len(lines):
        return sum(len(text) + len(ending) for text, ending in lines)

    offset = sum(len(text) + len(ending) for text, ending in lines[: position.line])
    return offset + min(position.character, len(lines[position.line][0]))


def _line_ending(lines: list[tuple[str, str]], line: int) -> str:
    """Ending of the given line, or of the nearest line above that has one."""
    for _, ending in reversed(lines[: min(line, len(lines) - 1) + 1]):
        if ending:
            return ending
    return "\n"


def replace_range(content: str, selection: Selection, text: str) -> str:
    """Replace the selected range of content with text.

    An empty selection inserts text at the caret.
    """
    selection = selection.ordered()
    lines = _split_lines(content)
    start = _offset(lines, selection.start)
    end = _offset(lines, selection.end)

    ending = _line_ending(lines, selection.start.line)
    text = text.replace("\r\n", "\n").replace("\n", ending)
    return content[:start] + text + content[end:]


def apply_text_edit(path: Path, selection: Selection, text: str) -> None:
    """Rewrite the file at path with text placed at the selection.

    Raises:
        OSError: If the file cannot be read or written.
        UnicodeDecodeError: If the file is not UTF-8.
    """
    content = path.read_bytes().decode("utf-8")
    new_content = replace_range(content, selection, text)
    path.write_bytes(new_content.encode("utf-8"))

    logger.info(
        "document_edited",
        extra={
            "path": str(path),
            "mode": "insert" if selection.is_empty else "replace",
        },
    )
