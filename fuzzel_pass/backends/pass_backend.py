"""Linux pass (password-store) backend for reading entries and OTP codes."""

import subprocess

from ..listing import parse_pass_list
from .base import BackendError, EntryNotFoundError, OtpError, OtpGenerator, Store

NOT_IN_STORE = "is not in the password store"


def _run_pass(*args: str) -> tuple[int, str, str]:
    """Run the pass command and return (returncode, stdout, stderr)."""
    try:
        result = subprocess.run(
            ["pass", *args],
            capture_output=True,
            text=True,
        )
    except FileNotFoundError as e:
        raise BackendError(
            "Failed to run 'pass'. Maybe pass is not installed?"
        ) from e
    return result.returncode, result.stdout, result.stderr


class PassStore(Store):
    """Reads entries through `pass show` and `pass ls`."""

    name = "pass"

    def show(self, name: str) -> str:
        code, stdout, stderr = _run_pass("show", name)
        if code == 0:
            return stdout
        if NOT_IN_STORE in stderr:
            raise EntryNotFoundError(f"{name} is not in the password store")
        raise BackendError(f"Failed to show {name}: {stderr.strip()}")

    def list(self) -> list[str]:
        code, stdout, stderr = _run_pass("ls")
        if code != 0:
            raise BackendError(f"Failed to list passwords: {stderr.strip()}")
        return parse_pass_list(stdout)


class PassOtp(OtpGenerator):
    """Generates codes with the pass-otp extension."""

    name = "pass-otp"

    def generate(self, name: str) -> str:
        try:
            code, stdout, stderr = _run_pass("otp", name)
        except BackendError as e:
            raise OtpError(str(e)) from e
        if code != 0:
            raise OtpError(stderr.strip() or f"pass otp exited with status {code}")
        return stdout.rstrip("\n")
