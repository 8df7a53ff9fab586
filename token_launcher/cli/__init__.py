"""Interactive command-line interface."""

from token_launcher.cli.app import LauncherApp

__all__ = ['LauncherApp']
