"""Paste-image pipeline: ordered stages, a runner and the command entry point."""

import logging
import sys
import threading
from collections.abc import Callable
from dataclasses import dataclass, field
from pathlib import Path

from mdpaste.clipboard.base import Clipboard
from mdpaste.clipboard.macos import MacClipboard
from mdpaste.config import PasteSettings
from mdpaste.editor.host import EditorHost
from mdpaste.editor.state import TextDocument
from mdpaste.pipeline.filenames import (
    build_reference,
    generate_default_name,
    resolve_image_path,
    validate_filename,
)
from mdpaste.utils.exceptions import (
    CLIPBOARD_NOT_IMAGE,
    NO_ACTIVE_DOCUMENT,
    NO_WORKSPACE,
    UNSAVED_DOCUMENT,
    GuardRejection,
    PasteError,
    UnsupportedPlatform,
    UserCancelled,
)
from mdpaste.utils.logger import DiagnosticLog

logger = logging.getLogger(__name__)

SUPPORTED_PLATFORM = "darwin"
FAILURE_BANNER = "Failed to paste image"
FILENAME_PROMPT = "Please specify the filename of the image."


@dataclass
class PasteContext:
    """Values flowing through one pipeline run."""

    host: EditorHost
    clipboard: Clipboard
    settings: PasteSettings
    folder: str
    default_name: str
    diagnostics: DiagnosticLog = field(default_factory=DiagnosticLog)
    workspace_root: Path | None = None
    document: TextDocument | None = None
    filename: str | None = None
    image_path: Path | None = None
    reference: str | None = None


def check_context(ctx: PasteContext) -> None:
    """Require an open workspace and an active, saved document."""
    if ctx.host.workspace_root is None:
        raise GuardRejection("No workspace opened!", NO_WORKSPACE)
    ctx.workspace_root = ctx.host.workspace_root

    document = ctx.host.active_document
    if document is None:
        raise GuardRejection("Please select a document first.", NO_ACTIVE_DOCUMENT)
    if document.is_untitled:
        raise GuardRejection(
            "Please save the document so we can get the path.", UNSAVED_DOCUMENT
        )
    ctx.document = document


def confirm_document_type(ctx: PasteContext) -> None:
    """Ask before pasting into a file that does not look like markdown."""
    suffix = ctx.document.path.suffix.lower()
    if suffix in ctx.settings.markup_extensions:
        return

    listed = " or ".join(ctx.settings.markup_extensions)
    answer = ctx.host.show_choice(
        f"The file extension does not end in {listed}. Do you want to continue?",
        "Continue",
        "Cancel",
    )
    if answer != "Continue":
        raise UserCancelled()


def check_clipboard(ctx: PasteContext) -> None:
    output = ctx.clipboard.inspect()
    if ctx.settings.clipboard_marker not in output:
        raise PasteError("clipboard does not contain an image", CLIPBOARD_NOT_IMAGE)


def negotiate_filename(ctx: PasteContext) -> None:
    value = ctx.host.prompt_input(FILENAME_PROMPT, ctx.default_name)
    ctx.filename = validate_filename(value, ctx.settings.image_extension)


def resolve_path(ctx: PasteContext) -> None:
    ctx.image_path = resolve_image_path(ctx.workspace_root, ctx.folder, ctx.filename)


def persist_image(ctx: PasteContext) -> None:
    """Write the clipboard image; a partial file is left in place on failure."""
    ctx.clipboard.write_png(ctx.image_path)
    ctx.diagnostics.log_event("image_written", path=str(ctx.image_path))


def insert_reference(ctx: PasteContext) -> None:
    ctx.reference = build_reference(ctx.image_path, ctx.document.path)
    ctx.host.apply_edit(ctx.document, ctx.reference)
    ctx.diagnostics.log_event("reference_inserted", reference=ctx.reference.strip())


Stage = Callable[[PasteContext], None]

STAGES: list[tuple[str, Stage]] = [
    ("context", check_context),
    ("document_type", confirm_document_type),
    ("clipboard", check_clipboard),
    ("filename", negotiate_filename),
    ("path", resolve_path),
    ("persist", persist_image),
    ("insert", insert_reference),
]


def run_pipeline(ctx: PasteContext, stages: list[tuple[str, Stage]] | None = None) -> Path | None:
    """Run the stages in order, stopping at the first failure.

    Failures flagged silent (cancellations) show nothing, guard rejections
    are shown as information and every other failure is shown once as an
    error. Diagnostic logging never changes the outcome.

    Returns:
        Path of the written image, or None if the run stopped early.
    """
    stages = STAGES if stages is None else stages
    ctx.diagnostics.log_event("pipeline_started", folder=ctx.folder)
    stage_name = ""

    try:
        for stage_name, stage in stages:
            stage(ctx)
            ctx.diagnostics.log_stage(stage_name)

    except GuardRejection as e:
        logger.info("pipeline_rejected", extra={"stage": stage_name, "code": e.code})
        ctx.diagnostics.log_event("pipeline_rejected", stage=stage_name, code=e.code)
        ctx.host.show_info(e.message)
        return None

    except (PasteError, OSError, UnicodeDecodeError) as e:
        if getattr(e, "silent", False):
            logger.info("pipeline_cancelled", extra={"stage": stage_name, "code": e.code})
            ctx.diagnostics.log_event("pipeline_cancelled", stage=stage_name)
            return None

        code = e.code if isinstance(e, PasteError) else type(e).__name__
        reason = e.message if isinstance(e, PasteError) else str(e)
        logger.error(
            "pipeline_error", extra={"stage": stage_name, "code": code, "error_msg": reason}
        )
        ctx.diagnostics.log_failure(stage_name, code, reason)
        ctx.host.show_error(f"{FAILURE_BANNER}: {reason}.")
        return None

    logger.info("pipeline_complete", extra={"output_path": str(ctx.image_path)})
    return ctx.image_path


def check_platform(platform: str | None = None) -> None:
    """Raise UnsupportedPlatform unless running on macOS."""
    platform = platform or sys.platform
    if platform != SUPPORTED_PLATFORM:
        raise UnsupportedPlatform(platform)


def paste_image(
    host: EditorHost,
    settings: PasteSettings | None = None,
    clipboard: Clipboard | None = None,
    folder: str | None = None,
    platform: str | None = None,
) -> Path | None:
    """Paste the clipboard image into the active document.

    Args:
        host: Editor services.
        settings: Defaults from env when omitted.
        clipboard: Defaults to MacClipboard built from settings.
        folder: Overrides settings.folder for this run.
        platform: Overrides sys.platform for the platform gate.

    Returns:
        Path of the written image, or None if nothing was pasted.
    """
    try:
        check_platform(platform)
    except UnsupportedPlatform as e:
        logger.error("unsupported_platform", extra={"platform": e.platform})
        host.show_error(e.message)
        return None

    settings = settings or PasteSettings()
    ctx = PasteContext(
        host=host,
        clipboard=clipboard
        or MacClipboard(settings.osascript_path, timeout=settings.process_timeout),
        settings=settings,
        folder=folder or settings.folder,
        default_name=generate_default_name(
            settings.default_name_prefix,
            settings.default_name_length,
            settings.image_extension,
        ),
        diagnostics=DiagnosticLog(settings.diagnostic_log),
    )
    return run_pipeline(ctx)


def run_pipeline_in_background(host: EditorHost, **kwargs) -> threading.Thread:
    """Run paste_image in a background thread and return the started thread."""
    thread = threading.Thread(target=paste_image, args=(host,), kwargs=kwargs)
    thread.start()
    return thread
