"""Shared fixtures: in-memory clipboard, recording editor host, workspace."""

from __future__ import annotations

from pathlib import Path

import pytest

from mdpaste.config import PasteSettings
from mdpaste.editor.edits import apply_text_edit
from mdpaste.editor.state import Position, Selection, TextDocument
from mdpaste.utils.exceptions import CLIPBOARD_INSPECTION_FAILED, PasteError

PNG_BYTES = b"\x89PNG\r\n\x1a\nfake-image-data"
IMAGE_INFO = "«class PNGf», 41234, «class 8BPS», 188562, GIF picture, 9342"
TEXT_INFO = "«class utf8», 12, «class ut16», 26, string, 12, Unicode text, 24"


class FakeClipboard:
    """Clipboard capability that never leaves the process."""

    def __init__(
        self,
        info: str = IMAGE_INFO,
        data: bytes = PNG_BYTES,
        write_error: PasteError | None = None,
        inspect_error: bool = False,
    ) -> None:
        self.info = info
        self.data = data
        self.write_error = write_error
        self.inspect_error = inspect_error
        self.inspect_calls = 0
        self.written: list[Path] = []

    def inspect(self) -> str:
        self.inspect_calls += 1
        if self.inspect_error:
            raise PasteError("clipboard inspection failed: boom", CLIPBOARD_INSPECTION_FAILED)
        return self.info

    def write_png(self, path: Path) -> Path:
        if self.write_error is not None:
            raise self.write_error
        path.write_bytes(self.data)
        self.written.append(path)
        return path


class FakeHost:
    """EditorHost that records every interaction and answers from scripts."""

    def __init__(
        self,
        workspace_root: Path | None = None,
        document: TextDocument | None = None,
        answers: list[str | None] | None = None,
        choice: str | None = "Continue",
    ) -> None:
        self.workspace_root = workspace_root
        self.active_document = document
        self.answers = list(answers or [])
        self.choice = choice
        self.infos: list[str] = []
        self.errors: list[str] = []
        self.choices: list[tuple[str, tuple[str, ...]]] = []
        self.prompts: list[tuple[str, str]] = []
        self.edits: list[tuple[TextDocument, str]] = []

    def show_info(self, message: str) -> None:
        self.infos.append(message)

    def show_error(self, message: str) -> None:
        self.errors.append(message)

    def show_choice(self, message: str, *options: str) -> str | None:
        self.choices.append((message, options))
        return self.choice

    def prompt_input(self, prompt: str, value: str) -> str | None:
        self.prompts.append((prompt, value))
        if not self.answers:
            return value
        return self.answers.pop(0)

    def apply_edit(self, document: TextDocument, text: str) -> None:
        self.edits.append((document, text))
        apply_text_edit(document.path, document.selection, text)


@pytest.fixture
def settings() -> PasteSettings:
    """GIVEN default settings, isolated from the environment."""
    return PasteSettings(_env_file=None)


@pytest.fixture
def workspace(tmp_path: Path) -> Path:
    """GIVEN a project root with a saved markdown document."""
    root = tmp_path / "proj"
    root.mkdir()
    (root / "notes.md").write_text("# Notes\n\nSee below.\n", encoding="utf-8")
    return root


@pytest.fixture
def document(workspace: Path) -> TextDocument:
    """GIVEN notes.md with the caret at the start of line 3."""
    caret = Selection(Position(2, 0), Position(2, 0))
    return TextDocument(path=workspace / "notes.md", selection=caret)


@pytest.fixture
def clipboard() -> FakeClipboard:
    """GIVEN a clipboard holding PNG data."""
    return FakeClipboard()


@pytest.fixture
def make_host():
    """GIVEN a factory for recording hosts."""
    return FakeHost


@pytest.fixture
def make_clipboard():
    """GIVEN a factory for in-memory clipboards."""
    return FakeClipboard
