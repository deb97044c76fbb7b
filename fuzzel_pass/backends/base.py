"""Abstract interfaces for the external programs fuzzel-pass drives."""

from abc import ABC, abstractmethod


class BackendError(Exception):
    """Base exception for backend errors."""


class EntryNotFoundError(BackendError):
    """Raised when an entry is not in the password store."""


class OtpError(BackendError):
    """Raised when an OTP code cannot be generated."""


class Store(ABC):
    """Source of decrypted entries."""

    name: str = "base"

    @abstractmethod
    def show(self, name: str) -> str:
        """Return the decrypted text of an entry."""

    @abstractmethod
    def list(self) -> list[str]:
        """List all entry names."""


class Selector(ABC):
    """Interactive chooser over a list of labels."""

    name: str = "base"

    @abstractmethod
    def choose(self, labels: list[str], prompt: str | None = None) -> int | None:
        """Return the index of the chosen label, or None if cancelled."""


class OtpGenerator(ABC):
    """Generates one-time codes for an entry."""

    name: str = "base"

    @abstractmethod
    def generate(self, name: str) -> str:
        """Generate the current code for an entry."""
