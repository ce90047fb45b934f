"""Structured JSONL diagnostic log for paste-image runs."""

import json
import logging
import os
import uuid
from datetime import datetime
from pathlib import Path
from typing import Any

EVENT_TYPE_ALLOWLIST = frozenset(
    [
        "pipeline_started",
        "stage_completed",
        "pipeline_cancelled",
        "pipeline_rejected",
        "pipeline_failed",
        "image_written",
        "reference_inserted",
    ]
)

DEFAULT_LOG_LEVEL = os.getenv("LOG_LEVEL", "WARNING").upper()

# Max message truncation
MAX_MESSAGE_LENGTH = 200

logger = logging.getLogger(__name__)


class DiagnosticLog:
    """Run-scoped JSONL event writer.

    With no log_path the events only go to the module logger at DEBUG level,
    so the workspace never receives extra files unless configured.
    """

    def __init__(self, log_path: Path | None = None, run_id: str | None = None) -> None:
        self.run_id = run_id or uuid.uuid4().hex[:12]
        self._log_path = log_path

    @property
    def log_path(self) -> Path | None:
        return self._log_path

    def _write_line(self, event: dict[str, Any]) -> None:
        """Append a JSON line to the log file with flush.

        An unwritable log file is reported and skipped; it never fails a run.
        """
        try:
            self._log_path.parent.mkdir(parents=True, exist_ok=True)
            with open(self._log_path, "a", encoding="utf-8") as f:
                f.write(json.dumps(event, ensure_ascii=False) + "\n")
                f.flush()
        except OSError as e:
            logger.warning(
                "diagnostic_log_unwritable",
                extra={"log_path": str(self._log_path), "error": str(e)},
            )

    def log_event(self, event_type: str, **kwargs: Any) -> None:
        """Log a structured event.

        Args:
            event_type: Must be in EVENT_TYPE_ALLOWLIST.
            **kwargs: Event-specific fields; values must be JSON-serializable.
        """
        if event_type not in EVENT_TYPE_ALLOWLIST:
            raise ValueError(
                f"Invalid event_type: {event_type}. Must be in {EVENT_TYPE_ALLOWLIST}"
            )

        event = {
            "timestamp": datetime.now().isoformat(),
            "run_id": self.run_id,
            "event_type": event_type,
            **kwargs,
        }
        logger.debug(event_type, extra={"run_id": self.run_id, "fields": kwargs})
        if self._log_path is not None:
            self._write_line(event)

    def log_stage(self, stage: str) -> None:
        self.log_event("stage_completed", stage=stage)

    def log_failure(self, stage: str, code: str, message: str) -> None:
        """Log a reportable failure with its message truncated."""
        self.log_event(
            "pipeline_failed",
            stage=stage,
            code=code,
            message=message[:MAX_MESSAGE_LENGTH],
        )


def configure_logging(verbose: bool = False) -> None:
    """Attach a stderr handler to the package logger.

    Level comes from LOG_LEVEL (default WARNING); verbose forces DEBUG.
    """
    level_map = {
        "DEBUG": logging.DEBUG,
        "INFO": logging.INFO,
        "WARNING": logging.WARNING,
        "ERROR": logging.ERROR,
    }
    level = logging.DEBUG if verbose else level_map.get(DEFAULT_LOG_LEVEL, logging.WARNING)

    package_logger = logging.getLogger("mdpaste")
    if not package_logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(
            logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s")
        )
        package_logger.addHandler(handler)
    package_logger.setLevel(level)
