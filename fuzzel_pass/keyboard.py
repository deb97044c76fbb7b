"""Keystroke injection backends."""

import os
import shutil
import subprocess
from abc import ABC, abstractmethod


class Keyboard(ABC):
    """Types text as simulated key events."""

    name: str = "base"
    hint: str = ""

    @abstractmethod
    def type(self, value: str) -> None:
        """Emit a value as keystrokes, newlines included."""

    def is_available(self) -> bool:
        return True


class CommandKeyboard(Keyboard):
    """Typing tool that reads the text from stdin."""

    def __init__(self, argv: list[str], hint: str):
        self.argv = argv
        self.name = argv[0]
        self.hint = hint

    def is_available(self) -> bool:
        return shutil.which(self.argv[0]) is not None

    def type(self, value: str) -> None:
        subprocess.run(self.argv, input=value.encode(), check=True)


WTYPE = CommandKeyboard(["wtype", "-"], "Install wtype.")
YDOTOOL = CommandKeyboard(["ydotool", "type", "--file", "-"], "Install ydotool.")
XDOTOOL = CommandKeyboard(
    ["xdotool", "type", "--clearmodifiers", "--file", "-"], "Install xdotool."
)


def detect_keyboard() -> Keyboard:
    """Pick the typing backend for the current session."""
    if os.environ.get("WAYLAND_DISPLAY"):
        candidates = [WTYPE, YDOTOOL, XDOTOOL]
    else:
        candidates = [XDOTOOL, YDOTOOL, WTYPE]

    for candidate in candidates:
        if candidate.is_available():
            return candidate
    return candidates[0]
