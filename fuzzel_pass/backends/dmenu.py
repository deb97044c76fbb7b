"""dmenu-style selector backend (fuzzel by default)."""

import os
import shlex
import subprocess

from .base import BackendError, Selector

DEFAULT_SELECTOR = "fuzzel --dmenu --index"
INDEX_FLAG = "--index"


class DmenuSelector(Selector):
    """
    Pipes newline-separated labels into a dmenu-compatible program.

    When the command prints the index of the choice (fuzzel's `--index`)
    duplicate labels stay distinguishable; otherwise the printed label is
    matched against the list and the first match wins.
    """

    def __init__(self, command: str | None = None):
        command = command or os.environ.get("FUZZEL_PASS_SELECTOR") or DEFAULT_SELECTOR
        self.argv = shlex.split(command) or shlex.split(DEFAULT_SELECTOR)
        self.index_output = INDEX_FLAG in self.argv
        self.name = self.argv[0]

    def choose(self, labels: list[str], prompt: str | None = None) -> int | None:
        argv = list(self.argv)
        if prompt and self.name == "fuzzel":
            argv.extend(["--prompt", prompt])

        try:
            result = subprocess.run(
                argv,
                input="\n".join(labels),
                stdout=subprocess.PIPE,
                text=True,
            )
        except FileNotFoundError as e:
            raise BackendError(
                f"Failed to spawn '{self.name}'. Maybe {self.name} is not installed?"
            ) from e

        selection = result.stdout.strip("\n")
        if result.returncode != 0 or not selection:
            return None

        if self.index_output:
            try:
                index = int(selection)
            except ValueError as e:
                raise BackendError(
                    f"'{self.name}' returned a non-numeric index: {selection!r}"
                ) from e
            if not 0 <= index < len(labels):
                return None
            return index

        try:
            return labels.index(selection)
        except ValueError:
            return None
