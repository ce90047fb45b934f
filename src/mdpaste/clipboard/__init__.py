"""Clipboard capabilities and the macOS implementation."""

from mdpaste.clipboard.base import Clipboard, ClipboardInspector, ClipboardWriter
from mdpaste.clipboard.macos import MacClipboard

__all__ = ["Clipboard", "ClipboardInspector", "ClipboardWriter", "MacClipboard"]
