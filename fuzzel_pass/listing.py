"""Parsing of the tree printed by `pass ls`."""

from __future__ import annotations

import re

DIRECTORY_COLOR = "\033[01;34m"
ANSI_ESCAPE = re.compile(r"\033\[[0-9;]*m")
NBSP = "\u00a0"
TREE_CHARS = "├└─│"
INDENT_WIDTH = 4


def _strip_colors(line: str) -> str:
    return ANSI_ESCAPE.sub("", line).replace(NBSP, " ")


def _depth(line: str) -> int:
    plain = _strip_colors(line)
    prefix = plain[: len(plain) - len(plain.lstrip(" " + TREE_CHARS))]
    return sum(1 for char in prefix if char in " │") // INDENT_WIDTH


def _is_directory(line: str) -> bool:
    return DIRECTORY_COLOR in line


def _node_name(line: str) -> str:
    return _strip_colors(line).lstrip(" " + TREE_CHARS).strip()


def parse_pass_list(output: str) -> list[str]:
    """
    Turn `pass ls` output into full entry names.

    `pass ls` prints a `tree -C` rendering: a header line, then one line per
    node indented with box-drawing characters, directories coloured blue.
    Only entries (non-directories) are returned, as `dir/sub/name` paths in
    the order they appear.
    """
    names: list[str] = []
    stack: list[str] = []

    for line in output.splitlines()[1:]:
        name = _node_name(line)
        if not name:
            continue
        del stack[_depth(line) :]
        stack.append(name)
        if not _is_directory(line):
            names.append("/".join(stack))

    return names
