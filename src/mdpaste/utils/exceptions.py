"""Exception types and error codes for the paste-image workflow.

Error codes:
- NO_WORKSPACE, NO_ACTIVE_DOCUMENT, UNSAVED_DOCUMENT: context guard rejections.
- UNSUPPORTED_PLATFORM: host is not running on macOS.
- USER_CANCELLED: user dismissed a prompt; never shown.
- CLIPBOARD_NOT_IMAGE, CLIPBOARD_INSPECTION_FAILED: clipboard check.
- EMPTY_FILENAME, UNSAFE_FILENAME: filename negotiation.
- DUPLICATE_FILENAME: destination already exists.
- WRITE_FAILED, WRITE_ERROR, SPAWN_FAILED: clipboard-to-file transfer.
"""

NO_WORKSPACE = "NO_WORKSPACE"
NO_ACTIVE_DOCUMENT = "NO_ACTIVE_DOCUMENT"
UNSAVED_DOCUMENT = "UNSAVED_DOCUMENT"
UNSUPPORTED_PLATFORM = "UNSUPPORTED_PLATFORM"
USER_CANCELLED = "USER_CANCELLED"
CLIPBOARD_NOT_IMAGE = "CLIPBOARD_NOT_IMAGE"
CLIPBOARD_INSPECTION_FAILED = "CLIPBOARD_INSPECTION_FAILED"
EMPTY_FILENAME = "EMPTY_FILENAME"
UNSAFE_FILENAME = "UNSAFE_FILENAME"
DUPLICATE_FILENAME = "DUPLICATE_FILENAME"
WRITE_FAILED = "WRITE_FAILED"
WRITE_ERROR = "WRITE_ERROR"
SPAWN_FAILED = "SPAWN_FAILED"


class PasteError(Exception):
    """Raised when a pipeline stage fails in a way the user should see.

    Attributes:
        code: Machine-readable code (e.g. DUPLICATE_FILENAME).
        message: Human-readable text shown after the failure banner.
        silent: True when the failure must not produce a notification.
    """

    silent = False

    def __init__(self, message: str, code: str) -> None:
        self.message = message
        self.code = code
        super().__init__(message)


class UserCancelled(PasteError):
    """Raised when the user dismisses a prompt or picks Cancel."""

    silent = True

    def __init__(self, message: str = "cancelled by user") -> None:
        super().__init__(message, USER_CANCELLED)


class GuardRejection(Exception):
    """Raised when the editor context does not allow the command to run.

    Shown as an informational message; not a failure.
    """

    def __init__(self, message: str, code: str) -> None:
        self.message = message
        self.code = code
        super().__init__(message)


class UnsupportedPlatform(GuardRejection):
    """Raised when the clipboard tooling is not available on this platform."""

    def __init__(self, platform: str) -> None:
        self.platform = platform
        super().__init__(f"mdpaste does not work on {platform}.", UNSUPPORTED_PLATFORM)
