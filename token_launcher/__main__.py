"""Command-line entry point for the Solana Token Launcher."""

import asyncio
import sys
from typing import Optional

import click

from token_launcher.cli.app import LauncherApp
from token_launcher.cli.display import console, print_error
from token_launcher.config import Network, load_config
from token_launcher.logging_config import LOG_FILE_NAME, configure_logging, get_logger
from token_launcher.utils.errors import ConfigurationError

logger = get_logger(__name__)


@click.command()
@click.option(
    "--network",
    type=click.Choice([network.value for network in Network] + ["mainnet-beta"], case_sensitive=False),
    help="Network to start on (overrides TOKEN_LAUNCHER_NETWORK)",
)
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"], case_sensitive=False),
    help="Log level (overrides LOG_LEVEL)",
)
@click.option("--env-file", type=click.Path(dir_okay=False), help="Path to a .env file")
def main(network: Optional[str] = None, log_level: Optional[str] = None, env_file: Optional[str] = None):
    """Interactive SPL token launcher for Solana."""
    try:
        config = load_config(
            env_file,
            default_network=Network.from_value(network) if network else None,
            log_level=log_level.upper() if log_level else None,
        )
        app = LauncherApp(config)
        app.initialize()
        configure_logging(config.log_level, log_file=config.paths.config / LOG_FILE_NAME)
    except ConfigurationError as e:
        print_error(e)
        sys.exit(1)

    try:
        asyncio.run(app.run())
    except (KeyboardInterrupt, EOFError):
        console.print("\n[green]Goodbye![/green]")
    sys.exit(0)


if __name__ == "__main__":
    main()
