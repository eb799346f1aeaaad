# ABOUTME: Delete command for OIDC configurations
# ABOUTME: Removes the OCM record and lists AWS resources that need manual cleanup

"""Delete command - Remove an OIDC configuration from OCM."""

from urllib.parse import urlparse

from cleo.commands.command import Command
from cleo.helpers import argument, option
from rich.console import Console
from rich.panel import Panel
from rich.prompt import Confirm

from rosa_oidc_config.cli.utils.clients import create_ocm_client, resolve_profile
from rosa_oidc_config.config import Config
from rosa_oidc_config.exceptions import OidcConfigError


class DeleteOidcConfigCommand(Command):
    name = "delete oidc-config"
    description = "Delete an OIDC configuration registered with OCM"

    arguments = [argument("id", description="ID of the OIDC configuration")]

    options = [
        option("profile", description="Configuration profile to use", flag=False),
        option("yes", "y", description="Skip confirmation prompts", flag=True),
    ]

    def handle(self) -> int:
        """Execute the delete command."""
        console = Console()
        oidc_config_id = self.argument("id")

        try:
            profile = resolve_profile(Config.load(), self.option("profile"))
            ocm_client = create_ocm_client(profile)
            oidc_config = ocm_client.get_oidc_config(oidc_config_id)
        except OidcConfigError as e:
            console.print(f"[red]Failed to get OIDC configuration '{oidc_config_id}': {e.message}[/red]")
            return 1

        console.print(
            Panel.fit(
                "[bold red]⚠️  OIDC Configuration Deletion[/bold red]\n\n"
                f"ID: {oidc_config.id}\nIssuer URL: {oidc_config.issuer_url}",
                border_style="red",
                padding=(1, 2),
            )
        )

        if not self.option("yes"):
            if not Confirm.ask("\n[bold red]Are you sure you want to delete this OIDC configuration?[/bold red]"):
                console.print("\n[yellow]Deletion cancelled.[/yellow]")
                return 0

        try:
            ocm_client.delete_oidc_config(oidc_config_id)
        except OidcConfigError as e:
            console.print(f"[red]Failed to delete OIDC configuration '{oidc_config_id}': {e.message}[/red]")
            return 1

        console.print(f"[green]✓ OIDC configuration '{oidc_config_id}' deleted[/green]")

        if not oidc_config.managed:
            console.print("\n[yellow]Manual cleanup may be required for:[/yellow]")
            hostname = urlparse(oidc_config.issuer_url or "").hostname
            if hostname:
                bucket_name = hostname.split(".")[0]
                console.print(f"• S3 bucket: [cyan]aws s3 rb s3://{bucket_name} --force[/cyan]")
            if oidc_config.secret_arn:
                console.print(
                    f"• Secret: [cyan]aws secretsmanager delete-secret --secret-id {oidc_config.secret_arn}[/cyan]"
                )

        return 0
