"""Clipboard backends."""

import base64
import os
import shutil
import subprocess
import sys
from abc import ABC, abstractmethod


class Clipboard(ABC):
    """Places text on the system clipboard."""

    name: str = "base"
    hint: str = ""

    @abstractmethod
    def copy(self, value: str) -> None:
        """Copy a value to the clipboard."""

    def is_available(self) -> bool:
        return True


class CommandClipboard(Clipboard):
    """Clipboard tool that reads the value from stdin."""

    def __init__(self, argv: list[str], hint: str):
        self.argv = argv
        self.name = argv[0]
        self.hint = hint

    def is_available(self) -> bool:
        return shutil.which(self.argv[0]) is not None

    def copy(self, value: str) -> None:
        subprocess.run(self.argv, input=value.encode(), check=True)


class OSC52Clipboard(Clipboard):
    """Copies through the terminal with an OSC 52 escape sequence."""

    name = "osc52"

    def copy(self, value: str) -> None:
        payload = base64.b64encode(value.encode()).decode("ascii")
        print(f"\033]52;c;{payload}\a", end="", flush=True)


WL_COPY = CommandClipboard(["wl-copy"], "Install wl-clipboard.")
XCLIP = CommandClipboard(["xclip", "-selection", "clipboard"], "Install xclip.")
PBCOPY = CommandClipboard(["pbcopy"], "pbcopy ships with macOS.")


SSH_VARIABLES = ("SSH_TTY", "SSH_CONNECTION", "SSH_CLIENT")


def _is_ssh_session() -> bool:
    return any(os.environ.get(var) for var in SSH_VARIABLES)


def _is_wayland_session() -> bool:
    return bool(os.environ.get("WAYLAND_DISPLAY"))


def detect_clipboard() -> Clipboard:
    """
    Pick the clipboard backend for the current session.

    Over SSH the terminal's OSC 52 support is used. Otherwise the first
    installed tool wins; if none is installed the preferred one is returned
    so the caller can report it as missing.
    """
    if _is_ssh_session():
        return OSC52Clipboard()

    if _is_wayland_session():
        candidates = [WL_COPY, XCLIP, PBCOPY]
    elif sys.platform == "darwin":
        candidates = [PBCOPY, WL_COPY, XCLIP]
    else:
        candidates = [XCLIP, WL_COPY, PBCOPY]

    for candidate in candidates:
        if candidate.is_available():
            return candidate
    return candidates[0]
