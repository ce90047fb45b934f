"""macOS clipboard access through AppleScript (osascript)."""

import logging
import shutil
import subprocess
from pathlib import Path

from mdpaste.utils.exceptions import (
    CLIPBOARD_INSPECTION_FAILED,
    SPAWN_FAILED,
    WRITE_ERROR,
    WRITE_FAILED,
    PasteError,
)

logger = logging.getLogger(__name__)

INSPECT_SCRIPT = "clipboard info"

# The destination path is passed as argv so it never needs quoting inside the script.
WRITE_SCRIPT = [
    "on run argv",
    "set imagePath to item 1 of argv",
    "set pngData to the clipboard as «class PNGf»",
    "set fileRef to open for access (POSIX file imagePath) with write permission",
    "try",
    "set eof fileRef to 0",
    "write pngData to fileRef",
    "on error errMsg",
    "close access fileRef",
    "error errMsg",
    "end try",
    "close access fileRef",
    "end run",
]


def _script_args(lines: list[str]) -> list[str]:
    args: list[str] = []
    for line in lines:
        args.extend(["-e", line])
    return args


class MacClipboard:
    """Clipboard inspector and writer backed by osascript.

    Args:
        osascript_path: Executable name or path; resolved through PATH.
        timeout: Optional timeout in seconds for each subprocess. None waits forever.
    """

    def __init__(self, osascript_path: str = "osascript", timeout: float | None = None) -> None:
        self.osascript_path = osascript_path
        self.timeout = timeout

    def _executable(self) -> str | None:
        return shutil.which(self.osascript_path)

    def inspect(self) -> str:
        """Return the output of `clipboard info`.

        Raises:
            PasteError: CLIPBOARD_INSPECTION_FAILED if osascript is missing,
                cannot start, times out or exits non-zero.
        """
        executable = self._executable()
        if executable is None:
            raise PasteError(
                f"clipboard inspection failed: {self.osascript_path} not found",
                CLIPBOARD_INSPECTION_FAILED,
            )

        cmd = [executable, *_script_args([INSPECT_SCRIPT])]
        try:
            result = subprocess.run(
                cmd,
                capture_output=True,
                text=True,
                timeout=self.timeout,
            )
        except (OSError, subprocess.TimeoutExpired) as e:
            logger.error("clipboard_inspect_spawn_failed", extra={"error": str(e)})
            raise PasteError(
                f"clipboard inspection failed: {e}", CLIPBOARD_INSPECTION_FAILED
            ) from e

        if result.returncode != 0:
            error_msg = result.stderr.strip() if result.stderr else "Unknown error"
            logger.error("clipboard_inspect_failed", extra={"error": error_msg})
            raise PasteError(
                f"clipboard inspection failed: {error_msg}", CLIPBOARD_INSPECTION_FAILED
            )

        logger.debug("clipboard_inspected", extra={"output": result.stdout.strip()})
        return result.stdout

    def write_png(self, path: Path) -> Path:
        """Write the clipboard PNG data to path.

        Raises:
            PasteError: SPAWN_FAILED if osascript cannot be launched,
                WRITE_ERROR if it reports an error on stderr,
                WRITE_FAILED if it exits non-zero silently.
        """
        executable = self._executable()
        if executable is None:
            raise PasteError(
                f"failed to start {self.osascript_path}: not found", SPAWN_FAILED
            )

        cmd = [executable, *_script_args(WRITE_SCRIPT), str(path)]
        try:
            result = subprocess.run(
                cmd,
                capture_output=True,
                text=True,
                timeout=self.timeout,
            )
        except (OSError, subprocess.TimeoutExpired) as e:
            logger.error("clipboard_write_spawn_failed", extra={"error": str(e)})
            raise PasteError(f"failed to start {self.osascript_path}: {e}", SPAWN_FAILED) from e

        stderr = result.stderr.strip() if result.stderr else ""
        if stderr:
            logger.error("clipboard_write_error", extra={"error": stderr})
            raise PasteError(stderr, WRITE_ERROR)

        if result.returncode != 0:
            logger.error("clipboard_write_failed", extra={"returncode": result.returncode})
            raise PasteError(
                f"{self.osascript_path} exited with code {result.returncode}", WRITE_FAILED
            )

        logger.info("clipboard_written", extra={"output_path": str(path)})
        return path
