# ABOUTME: CLI module for rosa-oidc-config
# ABOUTME: Provides command-line interface for OIDC configuration management

"""Command-line interface for rosa-oidc-config."""

import logging
import os
import sys

from cleo.application import Application

from rosa_oidc_config import __version__

from .commands.create import CreateOidcConfigCommand
from .commands.delete import DeleteOidcConfigCommand
from .commands.describe import DescribeOidcConfigCommand
from .commands.init import InitCommand
from .commands.list import ListOidcConfigsCommand


def configure_logging() -> None:
    """Send log records to stderr; DEBUG_MODE turns on debug output."""
    debug_mode = os.environ.get("DEBUG_MODE", "").lower() in ("true", "1", "yes", "y")
    logging.basicConfig(
        level=logging.DEBUG if debug_mode else logging.WARNING,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler(sys.stderr)],
    )
    # botocore is noisy at debug level
    logging.getLogger("botocore").setLevel(logging.WARNING)


def create_application() -> Application:
    """Create the CLI application."""
    application = Application("rosa-oidc", __version__)

    application.add(InitCommand())
    application.add(CreateOidcConfigCommand())
    application.add(ListOidcConfigsCommand())
    application.add(DescribeOidcConfigCommand())
    application.add(DeleteOidcConfigCommand())

    return application


def main():
    """Main entry point for the CLI."""
    configure_logging()
    application = create_application()
    application.run()


if __name__ == "__main__":
    main()
