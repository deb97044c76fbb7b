"""Store, selector and OTP backends."""

from .base import (
    BackendError,
    EntryNotFoundError,
    OtpError,
    OtpGenerator,
    Selector,
    Store,
)
from .dmenu import DmenuSelector
from .pass_backend import PassOtp, PassStore

__all__ = [
    "BackendError",
    "EntryNotFoundError",
    "OtpError",
    "OtpGenerator",
    "Selector",
    "Store",
    "DmenuSelector",
    "PassOtp",
    "PassStore",
]
