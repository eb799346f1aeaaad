# ABOUTME: Describe command for a single OIDC configuration
# ABOUTME: Fetches the record from OCM and prints its details

"""Describe command - Show one OIDC configuration."""

import json
from dataclasses import asdict

from cleo.commands.command import Command
from cleo.helpers import argument, option
from rich.console import Console

from rosa_oidc_config.cli.utils.clients import create_ocm_client, resolve_profile
from rosa_oidc_config.cli.utils.display import display_oidc_config
from rosa_oidc_config.config import Config
from rosa_oidc_config.exceptions import OidcConfigError


class DescribeOidcConfigCommand(Command):
    name = "describe oidc-config"
    description = "Show details of an OIDC configuration"

    arguments = [argument("id", description="ID of the OIDC configuration")]

    options = [
        option("profile", description="Configuration profile to use", flag=False),
        option("json", description="Output in JSON format", flag=True),
    ]

    def handle(self) -> int:
        """Execute the describe command."""
        console = Console()
        oidc_config_id = self.argument("id")

        try:
            profile = resolve_profile(Config.load(), self.option("profile"))
            oidc_config = create_ocm_client(profile).get_oidc_config(oidc_config_id)
        except OidcConfigError as e:
            console.print(f"[red]Failed to get OIDC configuration '{oidc_config_id}': {e.message}[/red]")
            return 1

        if self.option("json"):
            console.print(json.dumps(asdict(oidc_config), indent=2), markup=False, soft_wrap=True)
        else:
            display_oidc_config(console, oidc_config)
        return 0
