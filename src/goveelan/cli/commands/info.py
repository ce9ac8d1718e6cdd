from __future__ import annotations

import typer
from rich.console import Console

from goveelan.cli.common import (
    build_database,
    exit_with_error,
    load_settings_or_exit,
    resolve_config_path_or_exit,
)


def info() -> None:
    """Show configuration and data directory info."""
    settings = load_settings_or_exit()
    db = build_database(settings)
    try:
        current_scan = db.load_current_scan()
    except ValueError as exc:
        exit_with_error(exc)

    config_path, config_exists = resolve_config_path_or_exit(allow_missing=True)
    discovery = settings.discovery

    console = Console()

    console.print("[bold]goveelan info[/bold]\n")
    console.print(f"Data directory: {db.path}")
    console.print(f"Config file: {config_path if config_exists else 'defaults'}")

    console.print("\n[bold]Discovery[/bold]")
    console.print(f"Timeout: {discovery.timeout_ms} ms")
    console.print(f"Multicast group: {discovery.multicast_group}")
    console.print(f"Discovery port: {discovery.discovery_port}")
    console.print(f"Response port: {discovery.response_port}")
    console.print(f"Command port: {settings.control.port}")

    console.print("\n[bold]Statistics[/bold]")
    if current_scan:
        console.print(f"Last discovery: {current_scan.scan_timestamp}")
        console.print(f"Devices found: {len(current_scan.devices)}")
    else:
        console.print("No discoveries recorded yet")


def register(app: typer.Typer) -> None:
    app.command()(info)
