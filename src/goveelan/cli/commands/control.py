from __future__ import annotations

from enum import Enum

import typer
from rich.console import Console

from goveelan.cli.common import exit_with_error, load_settings_or_exit
from goveelan.core import (
    brightness_command,
    color_command,
    color_temperature_command,
    query_status,
    send_command,
    turn_command,
)
from goveelan.errors import GoveeLanError

app = typer.Typer(no_args_is_help=True, help="Control a device by IP address")


class Power(str, Enum):
    on = "on"
    off = "off"


def _send(device_ip: str, message: str) -> None:
    settings = load_settings_or_exit()
    try:
        send_command(device_ip, message, port=settings.control.port)
    except GoveeLanError as exc:
        exit_with_error(exc)
    Console().print(f"[green]✓[/green] Sent to {device_ip}: {message}")


@app.command("turn")
def turn(
    device_ip: str = typer.Argument(..., help="Device IP address"),
    power: Power = typer.Argument(..., help="on or off"),
) -> None:
    """Turn a device on or off."""
    _send(device_ip, turn_command(power is Power.on))


@app.command("brightness")
def brightness(
    device_ip: str = typer.Argument(..., help="Device IP address"),
    value: int = typer.Argument(..., min=0, max=100, help="Brightness percent"),
) -> None:
    """Set brightness (0-100)."""
    _send(device_ip, brightness_command(value))


@app.command("color")
def color(
    device_ip: str = typer.Argument(..., help="Device IP address"),
    r: int = typer.Argument(..., min=0, max=255),
    g: int = typer.Argument(..., min=0, max=255),
    b: int = typer.Argument(..., min=0, max=255),
) -> None:
    """Set an RGB color."""
    _send(device_ip, color_command(r, g, b))


@app.command("color-temp")
def color_temp(
    device_ip: str = typer.Argument(..., help="Device IP address"),
    kelvin: int = typer.Argument(..., min=2000, max=9000, help="Kelvin"),
) -> None:
    """Set a white color temperature."""
    _send(device_ip, color_temperature_command(kelvin))


@app.command("status")
def status(device_ip: str = typer.Argument(..., help="Device IP address")) -> None:
    """Query and print the device state."""
    settings = load_settings_or_exit()
    try:
        state = query_status(
            device_ip,
            port=settings.control.port,
            timeout=settings.control.response_timeout,
        )
    except GoveeLanError as exc:
        exit_with_error(exc)

    console = Console()
    console.print(f"[bold]{device_ip}[/bold]")
    console.print(f"Power: {'on' if state.on else 'off'}")
    console.print(f"Brightness: {state.brightness}")
    console.print(f"Color: {state.color.as_tuple()}")
    console.print(f"Color temperature: {state.color_temperature}K")
    console.print(f"Mode: {state.mode}")
