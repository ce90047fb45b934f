"""mdpaste - paste the clipboard image into a markdown document."""

import argparse
from pathlib import Path

from pydantic import ValidationError

from mdpaste.config import PasteSettings
from mdpaste.editor.host import TerminalHost
from mdpaste.editor.state import Position, Selection, TextDocument
from mdpaste.pipeline.pipeline import paste_image
from mdpaste.utils.logger import configure_logging


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="mdpaste",
        description="Save the clipboard image under the workspace and reference it from a document.",
    )
    parser.add_argument("document", nargs="?", help="Document to insert the reference into")
    parser.add_argument(
        "--workspace", default=".", help="Workspace root folder (default: current directory)"
    )
    parser.add_argument("--line", type=int, default=1, help="Caret line, 1-based (default: 1)")
    parser.add_argument(
        "--column", type=int, default=1, help="Caret column, 1-based (default: 1)"
    )
    parser.add_argument("--end-line", type=int, help="Selection end line, 1-based")
    parser.add_argument("--end-column", type=int, help="Selection end column, 1-based")
    parser.add_argument("--folder", help="Image folder under the workspace (default: images)")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    return parser


def build_selection(args: argparse.Namespace) -> Selection:
    """Convert 1-based command-line positions to a zero-based Selection."""
    start = Position(max(args.line - 1, 0), max(args.column - 1, 0))
    if args.end_line is None and args.end_column is None:
        return Selection(start, start)

    end_line = args.end_line if args.end_line is not None else args.line
    end_column = args.end_column if args.end_column is not None else args.column
    end = Position(max(end_line - 1, 0), max(end_column - 1, 0))
    return Selection(start, end)


def build_document(args: argparse.Namespace) -> TextDocument | None:
    """Return the active document; one missing on disk counts as unsaved."""
    if not args.document:
        return None
    path = Path(args.document).absolute()
    return TextDocument(
        path=path if path.is_file() else None,
        selection=build_selection(args),
    )


def main(argv: list[str] | None = None) -> int:
    """Main entry point for mdpaste."""
    parser = build_parser()
    args = parser.parse_args(argv)

    configure_logging(args.verbose)

    workspace = Path(args.workspace)
    host = TerminalHost(
        workspace_root=workspace.absolute() if workspace.is_dir() else None,
        document=build_document(args),
    )

    try:
        settings = PasteSettings()
    except ValidationError as e:
        host.show_error(f"Invalid mdpaste configuration:\n{e}")
        return 1

    image_path = paste_image(host, settings, folder=args.folder)
    if image_path is None:
        return 1

    host.show_info(f"Saved {image_path}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
