"""Parser for the text body of a pass (password-store) entry."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import NamedTuple

OTPAUTH_PREFIX = "otpauth://"


class WarningKind(str, Enum):
    UNTERMINATED_MULTILINE = "unterminated-multiline"
    UNRECOGNIZED_LINE = "unrecognized-line"
    MISSING_FENCE_MARKER = "missing-fence-marker"


@dataclass(frozen=True)
class ParseWarning:
    """A non-fatal deviation from the entry format."""

    kind: WarningKind
    line: int
    message: str


@dataclass(frozen=True)
class Field:
    key: str
    value: str

    @property
    def is_multiline(self) -> bool:
        return "\n" in self.value


@dataclass
class Entry:
    """Decoded content of a single password-store entry."""

    password: str
    fields: list[Field] = field(default_factory=list)
    otpauth: str | None = None


class RawLine(NamedTuple):
    number: int
    text: str


class _State(Enum):
    SCANNING = "scanning"
    IN_MULTILINE = "in-multiline"


def _split_lines(raw: str) -> list[RawLine]:
    if raw.endswith("\n"):
        raw = raw[:-1]
    return [RawLine(number, text) for number, text in enumerate(raw.split("\n"), 1)]


def _split_key(text: str) -> tuple[str, str] | None:
    """Split `key: rest` on the first colon. Returns None without a usable key."""
    key, sep, rest = text.partition(":")
    key = key.strip()
    if not sep or not key:
        return None
    return key, rest


def parse_entry(raw: str) -> tuple[Entry, list[ParseWarning]]:
    """
    Parse the decrypted text of an entry.

    The first line is always the password. Remaining lines are flat
    `key: value` fields or multiline fields of the form::

        key:
        MARKER
        ...value lines...
        MARKER

    Parsing never fails: malformed lines are skipped and reported as
    warnings alongside the partially built entry.
    """
    lines = _split_lines(raw)
    entry = Entry(password=lines[0].text)
    # pass-otp entries may hold nothing but the URI, on the password line
    if entry.password.startswith(OTPAUTH_PREFIX):
        entry.otpauth = entry.password.strip()
    warnings: list[ParseWarning] = []

    state = _State.SCANNING
    key = ""
    marker = ""
    start = 0
    buffer: list[str] = []

    rest = lines[1:]
    i = 0
    while i < len(rest):
        line = rest[i]
        i += 1

        if state is _State.IN_MULTILINE:
            if line.text == marker:
                entry.fields.append(Field(key, "\n".join(buffer)))
                state = _State.SCANNING
            else:
                buffer.append(line.text)
            continue

        if not line.text.strip():
            continue

        if line.text.startswith(OTPAUTH_PREFIX):
            if entry.otpauth is None:
                entry.otpauth = line.text.strip()
            continue

        parts = _split_key(line.text)
        if parts is None:
            warnings.append(
                ParseWarning(
                    WarningKind.UNRECOGNIZED_LINE,
                    line.number,
                    "not a 'key: value' field, skipped",
                )
            )
            continue

        key, value = parts
        if value.strip():
            if value.startswith(" "):
                value = value[1:]
            entry.fields.append(Field(key, value))
            continue

        # `key:` opens a multiline field, the next line is the fence marker
        if i >= len(rest) or not rest[i].text.strip():
            entry.fields.append(Field(key, ""))
            warnings.append(
                ParseWarning(
                    WarningKind.MISSING_FENCE_MARKER,
                    line.number,
                    f"'{key}:' is not followed by a fence marker line",
                )
            )
            continue

        marker = rest[i].text
        start = line.number
        buffer = []
        state = _State.IN_MULTILINE
        i += 1

    if state is _State.IN_MULTILINE:
        entry.fields.append(Field(key, "\n".join(buffer)))
        warnings.append(
            ParseWarning(
                WarningKind.UNTERMINATED_MULTILINE,
                start,
                f"multiline field '{key}' is missing its closing '{marker}' line",
            )
        )

    return entry, warnings
