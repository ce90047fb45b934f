"""Paste-image pipeline."""

from mdpaste.pipeline.pipeline import (
    STAGES,
    PasteContext,
    paste_image,
    run_pipeline,
    run_pipeline_in_background,
)

__all__ = [
    "STAGES",
    "PasteContext",
    "paste_image",
    "run_pipeline",
    "run_pipeline_in_background",
]
