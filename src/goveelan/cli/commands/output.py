from __future__ import annotations

import json

import typer
from rich.console import Console
from rich.table import Table

from goveelan.models import Device
from goveelan.utils.redaction import Redactor


def print_devices_json(devices: list[Device]) -> None:
    typer.echo(
        json.dumps(
            [device.model_dump(mode="json", by_alias=True) for device in devices],
            indent=2,
        )
    )


def print_devices_table(console: Console, devices: list[Device], redact: bool) -> None:
    redactor = Redactor(enabled=redact)
    table = Table()
    table.add_column("IP", style="cyan")
    table.add_column("Name", style="green")
    table.add_column("Model")
    table.add_column("Device ID")
    table.add_column("Online")
    table.add_column("Power")

    for device in devices:
        table.add_row(
            redactor.redact_ip(device.ip),
            device.name,
            device.model,
            redactor.redact_device_id(device.id),
            "yes" if device.online else "no",
            "on" if device.state.on else "off",
        )

    console.print(table)
