"""Editor-side types: documents, selections, host services."""

from mdpaste.editor.host import EditorHost, TerminalHost
from mdpaste.editor.state import Position, Selection, TextDocument

__all__ = ["EditorHost", "Position", "Selection", "TerminalHost", "TextDocument"]
