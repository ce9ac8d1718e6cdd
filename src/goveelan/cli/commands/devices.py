from __future__ import annotations

import typer
from rich.console import Console

from goveelan.cli.common import build_database, exit_with_error, load_settings_or_exit

from .output import print_devices_json, print_devices_table


def list_devices(
    as_json: bool = typer.Option(False, "--json", help="Print devices as JSON"),
    redact: bool = typer.Option(
        False,
        "--redact",
        help="Redact sensitive values in output",
    ),
) -> None:
    """List devices from the last saved discovery."""
    settings = load_settings_or_exit()
    db = build_database(settings)
    try:
        scan = db.load_current_scan()
    except ValueError as exc:
        exit_with_error(exc)

    console = Console()
    if scan is None:
        console.print("No saved discovery yet. Run 'goveelan discover' first.")
        return

    if as_json:
        print_devices_json(scan.devices)
        return

    console.print(f"Last discovery: {scan.scan_timestamp}")
    print_devices_table(console, scan.devices, redact)


def register(app: typer.Typer) -> None:
    app.command("devices")(list_devices)
