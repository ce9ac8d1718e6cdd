from __future__ import annotations

import asyncio

import typer
from rich.console import Console

from goveelan.core import run_mock_device


def mock(
    device_id: str = typer.Option(
        "AA:BB:CC:DD:EE:FF:00:01", "--device-id", "-d", help="Device id to report"
    ),
    sku: str = typer.Option("H6159", "--sku", help="Model SKU to report"),
    name: str | None = typer.Option(None, "--name", "-n", help="Device name"),
    host: str = typer.Option("0.0.0.0", "--host", help="Address to bind"),
) -> None:
    """Run a mock LAN API device for development."""
    console = Console()
    console.print(f"Starting mock device {device_id} ({sku}) on {host}...")
    console.print("Press Ctrl+C to stop.\n")

    try:
        asyncio.run(run_mock_device(device_id=device_id, sku=sku, name=name, host=host))
    except KeyboardInterrupt:
        console.print("\n[green]Mock device stopped.[/green]")


def register(app: typer.Typer) -> None:
    app.command()(mock)
