"""Command-line interface for fuzzel-pass."""

from __future__ import annotations

from typing import NoReturn

import click
from rich.console import Console
from rich.markup import escape

from .backends import (
    BackendError,
    DmenuSelector,
    OtpGenerator,
    PassOtp,
    PassStore,
    Selector,
    Store,
)
from .clipboard import Clipboard, detect_clipboard
from .delivery import DeliveryError, Mode, deliver
from .entry import ParseWarning, parse_entry
from .keyboard import Keyboard, detect_keyboard
from .selection import (
    OTP_LABEL,
    ResolveError,
    SelectableItem,
    Source,
    build_selectable_items,
    resolve,
)

error_console = Console(stderr=True)


def report_warnings(name: str, warnings: list[ParseWarning]) -> None:
    for warning in warnings:
        error_console.print(
            f"[yellow]Warning: {escape(name)}: line {warning.line}: "
            f"{escape(warning.message)}[/yellow]",
            highlight=False,
        )


def _fail(message: str) -> NoReturn:
    error_console.print(f"[red]Error: {escape(message)}[/red]", highlight=False)
    raise SystemExit(1)


def select_entry(store: Store, selector: Selector) -> str | None:
    """Offer every entry in the store and return the chosen name."""
    names = store.list()
    if not names:
        _fail("No passwords found")
    index = selector.choose(names, prompt="pass> ")
    return None if index is None else names[index]


def select_item(
    items: list[SelectableItem], selector: Selector, name: str
) -> SelectableItem | None:
    index = selector.choose([item.label for item in items], prompt=f"{name}> ")
    return None if index is None else items[index]


def run(
    name: str | None,
    mode: Mode,
    otp_only: bool,
    store: Store,
    selector: Selector,
    otp: OtpGenerator,
    clipboard: Clipboard,
    keyboard: Keyboard,
) -> str | None:
    """
    Select and deliver one credential.

    Returns the label that was delivered, or None when the user cancelled
    one of the selectors.
    """
    if name is None:
        name = select_entry(store, selector)
        if name is None:
            return None

    entry, warnings = parse_entry(store.show(name))
    report_warnings(name, warnings)

    items = build_selectable_items(entry, otp_available=entry.otpauth is not None)
    if otp_only:
        if items[-1].source is not Source.OTP:
            _fail(f"{name} has no OTP configuration")
        item: SelectableItem | None = items[-1]
    else:
        item = select_item(items, selector, name)
    if item is None:
        return None

    payload = resolve(entry, item, name, otp)
    deliver(payload, mode, clipboard, keyboard)
    return item.label


@click.command(context_settings={"help_option_names": ["-h", "--help"]})
@click.argument("name", required=False)
@click.option(
    "-t",
    "--type",
    "type_",
    is_flag=True,
    help="Type the selection instead of copying to the clipboard",
)
@click.option(
    "-o", "--otp", "otp_only", is_flag=True, help=f"Deliver the {OTP_LABEL} code directly"
)
@click.option("--debug", is_flag=True, help="Enable debug output")
def cli(name: str | None, type_: bool, otp_only: bool, debug: bool) -> None:
    """Copy or type a password, OTP code or field from pass using fuzzel."""
    mode = Mode.TYPE if type_ else Mode.COPY
    selector = DmenuSelector()
    clipboard = detect_clipboard()
    keyboard = detect_keyboard()

    if debug:
        error_console.print(
            f"[dim]selector: {' '.join(selector.argv)}, "
            f"clipboard: {clipboard.name}, keyboard: {keyboard.name}[/dim]",
            highlight=False,
        )

    try:
        label = run(
            name,
            mode,
            otp_only,
            store=PassStore(),
            selector=selector,
            otp=PassOtp(),
            clipboard=clipboard,
            keyboard=keyboard,
        )
    except (BackendError, ResolveError, DeliveryError) as e:
        _fail(str(e))

    if label is None:
        if debug:
            error_console.print("[dim]Selection cancelled[/dim]")
        return

    if mode is Mode.COPY:
        error_console.print(
            f"[green]Copied {escape(label)} to clipboard[/green]", highlight=False
        )
    else:
        error_console.print(f"[green]Typed {escape(label)}[/green]", highlight=False)


def main() -> None:
    """Entry point for the fuzzel-pass CLI."""
    cli()


if __name__ == "__main__":
    main()
