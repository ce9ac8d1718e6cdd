from __future__ import annotations

from typing import Annotated

import typer

from goveelan.utils.logging import setup_logging

from .commands import config as config_cmd
from .commands import control as control_cmd
from .commands.devices import register as register_devices
from .commands.discover import register as register_discover
from .commands.info import register as register_info
from .commands.mock import register as register_mock
from .commands.send import register as register_send

app = typer.Typer(
    help="goveelan - discover and control smart lights over the LAN API",
    no_args_is_help=True,
)

app.add_typer(config_cmd.app, name="config")
app.add_typer(control_cmd.app, name="control")

register_discover(app)
register_send(app)
register_devices(app)
register_info(app)
register_mock(app)


@app.callback(invoke_without_command=True)
def main(
    version: Annotated[
        bool,
        typer.Option("--version", "-v", help="Show version and exit"),
    ] = False,
    log_level: Annotated[
        str | None,
        typer.Option(
            "--log-level",
            help="Log level (default: $LOGLEVEL or INFO)",
        ),
    ] = None,
) -> None:
    """goveelan CLI."""
    setup_logging(log_level)

    if version:
        from importlib.metadata import version as get_version

        typer.echo(f"goveelan version {get_version('goveelan')}")
        raise typer.Exit()
