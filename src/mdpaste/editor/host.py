"""Editor host services used by the paste pipeline, and a terminal host."""

import logging
import sys
from collections.abc import Callable
from pathlib import Path
from typing import Protocol, TextIO

from mdpaste.editor.edits import apply_text_edit
from mdpaste.editor.state import TextDocument

logger = logging.getLogger(__name__)


class EditorHost(Protocol):
    """What the pipeline needs from the editor it runs in."""

    @property
    def workspace_root(self) -> Path | None: ...

    @property
    def active_document(self) -> TextDocument | None: ...

    def show_info(self, message: str) -> None: ...

    def show_error(self, message: str) -> None: ...

    def show_choice(self, message: str, *options: str) -> str | None:
        """Return the chosen option, or None when dismissed."""
        ...

    def prompt_input(self, prompt: str, value: str) -> str | None:
        """Return the entered text (pre-filled with value), or None when dismissed."""
        ...

    def apply_edit(self, document: TextDocument, text: str) -> None:
        """Replace the document selection with text, or insert it at the caret."""
        ...


class TerminalHost:
    """EditorHost backed by the terminal and a document on disk.

    Prompts read from input_fn; pressing Enter on an input prompt keeps the
    pre-filled value. EOF or Ctrl-C at a prompt counts as dismissal.
    """

    def __init__(
        self,
        workspace_root: Path | None,
        document: TextDocument | None,
        input_fn: Callable[[str], str] = input,
        out: TextIO | None = None,
        err: TextIO | None = None,
    ) -> None:
        self._workspace_root = workspace_root
        self._document = document
        self._input = input_fn
        self._out = out or sys.stdout
        self._err = err or sys.stderr

    @property
    def workspace_root(self) -> Path | None:
        return self._workspace_root

    @property
    def active_document(self) -> TextDocument | None:
        return self._document

    def _read(self, prompt: str) -> str | None:
        try:
            return self._input(prompt)
        except (EOFError, KeyboardInterrupt):
            self._out.write("\n")
            return None

    def show_info(self, message: str) -> None:
        print(message, file=self._out)

    def show_error(self, message: str) -> None:
        print(message, file=self._err)

    def show_choice(self, message: str, *options: str) -> str | None:
        print(message, file=self._out)
        for i, option in enumerate(options, start=1):
            print(f"  {i}) {option}", file=self._out)

        answer = self._read("> ")
        if answer is None:
            return None
        answer = answer.strip()

        if answer.isdigit():
            idx = int(answer) - 1
            return options[idx] if 0 <= idx < len(options) else None
        for option in options:
            if answer.lower() == option.lower():
                return option
        return None

    def prompt_input(self, prompt: str, value: str) -> str | None:
        answer = self._read(f"{prompt} [{value}]: ")
        if answer is None:
            return None
        return answer if answer else value

    def apply_edit(self, document: TextDocument, text: str) -> None:
        if document.path is None:
            raise OSError("Cannot edit an unsaved document")
        apply_text_edit(document.path, document.selection, text)
