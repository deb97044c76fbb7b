"""Delivery of a resolved payload to the clipboard or the keyboard."""

from __future__ import annotations

import subprocess
from enum import Enum

from .clipboard import Clipboard
from .keyboard import Keyboard
from .selection import ResolvedPayload


class Mode(Enum):
    COPY = "copy"
    TYPE = "type"


class DeliveryError(Exception):
    """Base exception for delivery failures."""


class BackendUnavailableError(DeliveryError):
    """Raised when the program needed for a delivery mode is not installed."""

    def __init__(self, backend: str, hint: str = ""):
        self.backend = backend
        self.hint = hint
        message = f"'{backend}' is not available"
        if hint:
            message = f"{message}. {hint}"
        super().__init__(message)


def deliver(
    payload: ResolvedPayload,
    mode: Mode,
    clipboard: Clipboard,
    keyboard: Keyboard,
) -> None:
    """
    Hand the payload text, unmodified, to the backend for the mode.

    Multiline values keep their newlines in both modes. A missing typing
    backend is an error, never a silent switch to the clipboard.
    """
    backend: Clipboard | Keyboard = clipboard if mode is Mode.COPY else keyboard
    if not backend.is_available():
        raise BackendUnavailableError(backend.name, backend.hint)

    try:
        if mode is Mode.COPY:
            clipboard.copy(payload.text)
        else:
            keyboard.type(payload.text)
    except subprocess.CalledProcessError as e:
        raise DeliveryError(
            f"'{backend.name}' exited with status {e.returncode}"
        ) from e
