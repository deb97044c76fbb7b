"""Building the list of selectable items and resolving a choice to a payload."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from .backends import OtpError, OtpGenerator
from .entry import Entry

PASSWORD_LABEL = "password"
OTP_LABEL = "otp"


class Source(Enum):
    PASSWORD = "password"
    FIELD = "field"
    OTP = "otp"


class PayloadKind(Enum):
    PASSWORD = "password"
    PLAIN_FIELD = "plain-field"
    MULTILINE_FIELD = "multiline-field"
    OTP = "otp"


class ResolveError(Exception):
    """Base exception for selections that cannot be turned into a payload."""


class IndexOutOfRangeError(ResolveError):
    """Raised when a field item points past the entry's fields."""


class OtpGenerationError(ResolveError):
    """Raised when the OTP collaborator fails to produce a code."""

    def __init__(self, cause: Exception | str):
        self.cause = cause
        super().__init__(f"OTP generation failed: {cause}")


@dataclass(frozen=True)
class SelectableItem:
    """One option shown in the selector."""

    label: str
    source: Source
    index: int | None = None


@dataclass(frozen=True)
class ResolvedPayload:
    text: str
    kind: PayloadKind


def build_selectable_items(entry: Entry, otp_available: bool) -> list[SelectableItem]:
    """
    List everything that can be selected from an entry.

    The password always comes first, then every field in parse order
    (duplicate keys included), then the OTP item when available.
    """
    items = [SelectableItem(PASSWORD_LABEL, Source.PASSWORD)]
    items.extend(
        SelectableItem(f.key, Source.FIELD, index) for index, f in enumerate(entry.fields)
    )
    if otp_available:
        items.append(SelectableItem(OTP_LABEL, Source.OTP))
    return items


def resolve(
    entry: Entry,
    item: SelectableItem,
    name: str,
    otp: OtpGenerator | None = None,
) -> ResolvedPayload:
    """Turn a selected item into the text to deliver."""
    if item.source is Source.PASSWORD:
        return ResolvedPayload(entry.password, PayloadKind.PASSWORD)

    if item.source is Source.FIELD:
        if item.index is None or not 0 <= item.index < len(entry.fields):
            raise IndexOutOfRangeError(
                f"Field index {item.index} out of range for '{item.label}'"
            )
        selected = entry.fields[item.index]
        kind = (
            PayloadKind.MULTILINE_FIELD if selected.is_multiline else PayloadKind.PLAIN_FIELD
        )
        return ResolvedPayload(selected.value, kind)

    if otp is None:
        raise OtpGenerationError("no OTP generator configured")
    try:
        code = otp.generate(name)
    except OtpError as e:
        raise OtpGenerationError(e) from e
    return ResolvedPayload(code, PayloadKind.OTP)
