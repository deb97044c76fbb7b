"""End-to-end tests running the fuzzel-pass CLI against fake external programs."""

import json
import os
import subprocess
import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).parent

TOTP_URI = "otpauth://totp/Example:alice?secret=JBSWY3DPEHPK3PXP&issuer=Example"

ENTRIES = {
    "email/work": f"hunter2\nuser: alice\nurl: https://mail.example.com\n{TOTP_URI}\n",
    "ssh/server": "pw\nkey:\nEOF\n-----BEGIN KEY-----\nabc\n-----END KEY-----\nEOF\n",
    "messy": "pw\nnot a field\nuser: bob\n",
    "totp-only": f"{TOTP_URI}\n",
}

LISTING = (
    "Password Store\n"
    "├── \033[01;34memail\033[0m\n"
    "│   └── work\n"
    "├── messy\n"
    "└── \033[01;34mssh\033[0m\n"
    "    └── server\n"
)

FAKE_PASS = """
import json, sys
entries = json.loads({entries!r})
args = sys.argv[1:]
if args == ["ls"]:
    sys.stdout.write({listing!r})
elif args[0] == "show" and args[1] in entries:
    sys.stdout.write(entries[args[1]])
elif args[0] == "otp" and "otpauth://" in entries.get(args[1], ""):
    print("492039")
else:
    sys.stderr.write("Error: %s is not in the password store.\\n" % args[-1])
    sys.exit(1)
"""

FAKE_FUZZEL = """
import sys
from pathlib import Path
labels = sys.stdin.read().split("\\n")
with open({shown!r}, "a") as f:
    f.write(" | ".join(labels) + "\\n")
choices = Path({choices!r})
lines = choices.read_text().splitlines()
choices.write_text("".join(line + "\\n" for line in lines[1:]))
if not lines or lines[0] == "<cancel>":
    sys.exit(1)
print(labels.index(lines[0]))
"""

FAKE_SINK = """
import sys
with open({output!r}, "w") as f:
    f.write(sys.stdin.read())
"""


def write_executable(path: Path, body: str) -> None:
    path.write_text(f"#!{sys.executable}\n{body}", encoding="utf-8")
    path.chmod(0o755)


@pytest.fixture
def fakes(tmp_path: Path) -> Path:
    """Install fake pass, fuzzel, wl-copy and wtype into tmp_path/bin."""
    bin_dir = tmp_path / "bin"
    bin_dir.mkdir()
    write_executable(
        bin_dir / "pass",
        FAKE_PASS.format(entries=json.dumps(ENTRIES), listing=LISTING),
    )
    write_executable(
        bin_dir / "fuzzel",
        FAKE_FUZZEL.format(
            shown=str(tmp_path / "shown.txt"), choices=str(tmp_path / "choices.txt")
        ),
    )
    write_executable(
        bin_dir / "wl-copy", FAKE_SINK.format(output=str(tmp_path / "clipboard.txt"))
    )
    write_executable(
        bin_dir / "wtype", FAKE_SINK.format(output=str(tmp_path / "typed.txt"))
    )
    return tmp_path


def run_command(
    tmp_path: Path, args: list[str], choices: list[str] | None = None
) -> tuple[int, str, str]:
    """Run fuzzel-pass and return (exit_code, stdout, stderr)."""
    (tmp_path / "choices.txt").write_text("".join(c + "\n" for c in choices or []))

    env = {
        "PATH": str(tmp_path / "bin"),
        "HOME": str(tmp_path),
        "WAYLAND_DISPLAY": "wayland-1",
        "COLUMNS": "200",
        "PYTHONUTF8": "1",
    }
    result = subprocess.run(
        [sys.executable, "-m", "fuzzel_pass", *args],
        capture_output=True,
        text=True,
        cwd=ROOT,
        env=env,
    )
    return result.returncode, result.stdout, result.stderr


def read_output(tmp_path: Path, name: str) -> str | None:
    path = tmp_path / name
    return path.read_text() if path.exists() else None


class TestCopy:
    """Test copying to the clipboard."""

    def test_copy_password(self, fakes: Path) -> None:
        code, _, stderr = run_command(fakes, ["email/work"], choices=["password"])

        assert code == 0
        assert read_output(fakes, "clipboard.txt") == "hunter2"
        assert "Copied password to clipboard" in stderr

    def test_copy_field(self, fakes: Path) -> None:
        code, _, _ = run_command(fakes, ["email/work"], choices=["url"])

        assert code == 0
        assert read_output(fakes, "clipboard.txt") == "https://mail.example.com"

    def test_selector_shows_fields_in_order_with_otp(self, fakes: Path) -> None:
        run_command(fakes, ["email/work"], choices=["user"])

        shown = read_output(fakes, "shown.txt")
        assert shown == "password | user | url | otp\n"

    def test_copy_multiline_field(self, fakes: Path) -> None:
        code, _, _ = run_command(fakes, ["ssh/server"], choices=["key"])

        assert code == 0
        assert read_output(fakes, "clipboard.txt") == (
            "-----BEGIN KEY-----\nabc\n-----END KEY-----"
        )

    def test_copy_otp(self, fakes: Path) -> None:
        code, _, _ = run_command(fakes, ["email/work"], choices=["otp"])

        assert code == 0
        assert read_output(fakes, "clipboard.txt") == "492039"


class TestEntrySelection:
    """Test choosing the entry from the store listing."""

    def test_entry_chosen_from_listing(self, fakes: Path) -> None:
        code, _, _ = run_command(fakes, [], choices=["ssh/server", "password"])

        assert code == 0
        assert read_output(fakes, "clipboard.txt") == "pw"
        shown = read_output(fakes, "shown.txt")
        assert shown is not None
        assert shown.splitlines()[0] == "email/work | messy | ssh/server"

    def test_cancel_entry_selection(self, fakes: Path) -> None:
        code, _, _ = run_command(fakes, [], choices=["<cancel>"])

        assert code == 0
        assert read_output(fakes, "clipboard.txt") is None

    def test_cancel_field_selection(self, fakes: Path) -> None:
        code, _, _ = run_command(fakes, ["email/work"], choices=["<cancel>"])

        assert code == 0
        assert read_output(fakes, "clipboard.txt") is None


class TestType:
    """Test typing the selection."""

    def test_type_multiline_field_keeps_newlines(self, fakes: Path) -> None:
        code, _, stderr = run_command(fakes, ["ssh/server", "--type"], choices=["key"])

        assert code == 0
        assert read_output(fakes, "typed.txt") == (
            "-----BEGIN KEY-----\nabc\n-----END KEY-----"
        )
        assert read_output(fakes, "clipboard.txt") is None
        assert "Typed key" in stderr

    def test_missing_typing_backend_fails(self, fakes: Path) -> None:
        (fakes / "bin" / "wtype").unlink()

        code, _, stderr = run_command(fakes, ["email/work", "-t"], choices=["user"])

        assert code == 1
        assert "wtype" in stderr
        assert read_output(fakes, "clipboard.txt") is None


class TestOtp:
    """Test OTP mode."""

    def test_otp_flag_skips_selector(self, fakes: Path) -> None:
        code, _, _ = run_command(fakes, ["email/work", "--otp"])

        assert code == 0
        assert read_output(fakes, "clipboard.txt") == "492039"
        assert read_output(fakes, "shown.txt") is None

    def test_otp_flag_on_uri_only_entry(self, fakes: Path) -> None:
        code, _, _ = run_command(fakes, ["totp-only", "--otp"])

        assert code == 0
        assert read_output(fakes, "clipboard.txt") == "492039"

    def test_uri_only_entry_offers_otp(self, fakes: Path) -> None:
        code, _, _ = run_command(fakes, ["totp-only"], choices=["otp"])

        assert code == 0
        assert read_output(fakes, "shown.txt") == "password | otp\n"
        assert read_output(fakes, "clipboard.txt") == "492039"

    def test_otp_flag_without_configuration_fails(self, fakes: Path) -> None:
        code, _, stderr = run_command(fakes, ["messy", "-o"])

        assert code == 1
        assert "no OTP configuration" in stderr
        assert read_output(fakes, "clipboard.txt") is None


class TestErrors:
    """Test error reporting."""

    def test_missing_entry_fails(self, fakes: Path) -> None:
        code, _, stderr = run_command(fakes, ["nope"])

        assert code == 1
        assert "not in the password store" in stderr

    def test_parse_warnings_are_reported(self, fakes: Path) -> None:
        code, _, stderr = run_command(fakes, ["messy"], choices=["user"])

        assert code == 0
        assert "Warning: messy: line 2" in stderr
        assert read_output(fakes, "clipboard.txt") == "bob"

    def test_missing_selector_fails(self, fakes: Path) -> None:
        os.remove(fakes / "bin" / "fuzzel")

        code, _, stderr = run_command(fakes, ["email/work"])

        assert code == 1
        assert "fuzzel is not installed" in stderr


class TestHelp:
    """Test help output."""

    def test_help_flag(self, fakes: Path) -> None:
        code, stdout, _ = run_command(fakes, ["--help"])

        assert code == 0
        assert "Type the selection instead of copying" in stdout

    def test_short_help_flag(self, fakes: Path) -> None:
        code, stdout, _ = run_command(fakes, ["-h"])

        assert code == 0
        assert "--otp" in stdout
