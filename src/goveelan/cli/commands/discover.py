from __future__ import annotations

import logging

import typer
from rich.console import Console

from goveelan.cli.common import build_database, exit_with_error, load_settings_or_exit
from goveelan.core import DeviceRegistry, discover
from goveelan.errors import GoveeLanError

from .output import print_devices_json, print_devices_table

logger = logging.getLogger(__name__)


def discover_devices(
    timeout_ms: int | None = typer.Option(
        None, "--timeout-ms", "-t", min=1, help="Listen window in milliseconds"
    ),
    as_json: bool = typer.Option(False, "--json", help="Print devices as JSON"),
    save: bool = typer.Option(True, help="Save discovered devices to data directory"),
    redact: bool = typer.Option(
        False,
        "--redact",
        help="Redact sensitive values in output",
    ),
) -> None:
    """Discover devices on the local network."""
    console = Console(stderr=as_json)

    settings = load_settings_or_exit()
    config = settings.discovery
    if timeout_ms is not None:
        config = config.model_copy(update={"timeout_ms": timeout_ms})

    console.print(f"Discovering devices for {config.timeout_ms} ms...")
    registry = DeviceRegistry()
    try:
        devices = discover(registry, config)
    except GoveeLanError as exc:
        exit_with_error(exc)

    # one row per device even if it answered more than once
    unique = registry.get_all()

    if as_json:
        print_devices_json(unique)
    elif not unique:
        console.print("No devices found.")
    else:
        print_devices_table(console, unique, redact)
        console.print(
            f"\n[green]Found {len(unique)} device(s)[/green] "
            f"from {len(devices)} response(s)"
        )

    if save and unique:
        db = build_database(settings)
        db.save_scan(unique)
        logger.info("Saved %d devices to %s", len(unique), db.current_scan_path)


def register(app: typer.Typer) -> None:
    app.command("discover")(discover_devices)
