# ABOUTME: List command for OIDC configurations registered with OCM
# ABOUTME: Shows managed and unmanaged configurations with their issuer URLs

"""List command - Show OIDC configurations."""

import json
from dataclasses import asdict

from cleo.commands.command import Command
from cleo.helpers import option
from rich.console import Console

from rosa_oidc_config.cli.utils.clients import create_ocm_client, resolve_profile
from rosa_oidc_config.cli.utils.display import display_oidc_configs
from rosa_oidc_config.config import Config
from rosa_oidc_config.exceptions import OidcConfigError


class ListOidcConfigsCommand(Command):
    name = "list oidc-configs"
    description = "List OIDC configurations registered with OCM"

    options = [
        option("profile", description="Configuration profile to use", flag=False),
        option("json", description="Output in JSON format", flag=True),
    ]

    def handle(self) -> int:
        """Execute the list command."""
        console = Console()

        try:
            profile = resolve_profile(Config.load(), self.option("profile"))
            oidc_configs = create_ocm_client(profile).list_oidc_configs()
        except OidcConfigError as e:
            console.print(f"[red]Failed to list OIDC configurations: {e.message}[/red]")
            return 1

        if self.option("json"):
            output = json.dumps([asdict(oidc_config) for oidc_config in oidc_configs], indent=2)
            console.print(output, markup=False, soft_wrap=True)
            return 0

        if not oidc_configs:
            console.print("[yellow]There are no OIDC configurations for your organization.[/yellow]")
            return 0

        display_oidc_configs(console, oidc_configs)
        return 0
