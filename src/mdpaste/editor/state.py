"""Document and selection dataclasses."""

from dataclasses import dataclass, field
from pathlib import Path


@dataclass(frozen=True)
class Position:
    """Zero-based line and character offset."""

    line: int = 0
    character: int = 0


@dataclass(frozen=True)
class Selection:
    """A range in a document; empty when collapsed to a caret."""

    start: Position = field(default_factory=Position)
    end: Position = field(default_factory=Position)

    @property
    def is_empty(self) -> bool:
        return self.start == self.end

    def ordered(self) -> "Selection":
        """Return the selection with start before end."""
        if (self.end.line, self.end.character) < (self.start.line, self.start.character):
            return Selection(start=self.end, end=self.start)
        return self


@dataclass
class TextDocument:
    """The document being edited. path is None until it has been saved."""

    path: Path | None = None
    selection: Selection = field(default_factory=Selection)

    @property
    def is_untitled(self) -> bool:
        return self.path is None
