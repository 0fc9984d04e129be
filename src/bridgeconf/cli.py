"""bridgeconf CLI interface.

Commands:
- configfile: Print the LoRa Gateway Bridge configuration file

Global options:
- --config: Path to a YAML configuration file
- --verbose: Enable verbose output with timestamps
- --quiet: Suppress info messages
- --ci: JSON log output
- --version: Show version and exit
"""

import sys
from pathlib import Path
from typing import Annotated

import typer

from bridgeconf import __version__
from bridgeconf.config import load_config
from bridgeconf.errors import BridgeConfError
from bridgeconf.models import BridgeConfig
from bridgeconf.utils.logging import configure_from_cli, get_logger

app = typer.Typer(
    name="bridgeconf",
    help="Render the LoRa Gateway Bridge configuration file",
    add_completion=False,
    no_args_is_help=True,
)

# Global state
_config: BridgeConfig | None = None
_logger = get_logger("bridgeconf.cli")


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"bridgeconf {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    config: Annotated[
        Path | None,
        typer.Option(
            "--config",
            "-c",
            help="Path to YAML configuration file",
            exists=True,
            dir_okay=False,
        ),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose",
            "-v",
            help="Enable verbose output with timestamps",
        ),
    ] = False,
    quiet: Annotated[
        bool,
        typer.Option(
            "--quiet",
            "-q",
            help="Suppress info messages (warnings and errors only)",
        ),
    ] = False,
    ci: Annotated[
        bool,
        typer.Option(
            "--ci",
            help="Enable CI mode with JSON log output",
        ),
    ] = False,
    version: Annotated[
        bool,
        typer.Option(
            "--version",
            callback=version_callback,
            is_eager=True,
            help="Show version and exit",
        ),
    ] = False,
) -> None:
    """bridgeconf - LoRa Gateway Bridge configuration file renderer.

    Loads the bridge configuration (defaults plus optional YAML overrides).
    """
    global _config

    configure_from_cli(verbose=verbose, quiet=quiet, ci=ci)

    try:
        _config = load_config(config_path=config)
    except BridgeConfError as e:
        _logger.error("Failed to load config: %s", e)
        raise typer.Exit(e.exit_code)


@app.command()
def configfile(
    output: Annotated[
        Path | None,
        typer.Option(
            "--output",
            "-o",
            help="Write to this file instead of stdout (replaced atomically)",
            dir_okay=False,
        ),
    ] = None,
) -> None:
    """Print the LoRa Gateway Bridge configuration file.

    Exit codes:
        0: Configuration file written
        1: Configuration could not be rendered or written
    """
    from bridgeconf.templates import DocumentRenderer

    renderer = DocumentRenderer()
    config = _config or BridgeConfig()

    try:
        if output is None:
            renderer.render(config, sys.stdout)
        else:
            renderer.render_to_file(config, output)
    except BridgeConfError as e:
        _logger.error("Rendering failed: %s", e)
        raise typer.Exit(e.exit_code)
