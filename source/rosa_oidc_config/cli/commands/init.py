# ABOUTME: Init command - interactive setup of a configuration profile
# ABOUTME: Stores AWS region, OCM environment and the OCM token for later commands

"""Init command - Interactive setup wizard."""

import questionary
from cleo.commands.command import Command
from cleo.helpers import option
from keyring.errors import KeyringError
from rich import box
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from rosa_oidc_config.cli.utils.validators import validate_aws_region
from rosa_oidc_config.config import Config, Profile
from rosa_oidc_config.utils.aws import get_current_region


class InitCommand(Command):
    name = "init"
    description = "Interactive setup wizard for a configuration profile"

    options = [
        option("profile", description="Configuration profile to create or update", flag=False, default="default"),
    ]

    def handle(self) -> int:
        """Execute the init command."""
        console = Console()

        console.print(
            Panel.fit(
                "[bold cyan]rosa-oidc-config Setup[/bold cyan]\n\n"
                "Configure the AWS account and OCM environment used to create OIDC configurations",
                border_style="cyan",
                padding=(1, 2),
            )
        )

        config = Config.load()
        profile_name = self.option("profile")
        existing = config.get_profile(profile_name)
        profile = existing or Profile(name=profile_name)

        region = questionary.text(
            "AWS region:",
            default=profile.aws_region or get_current_region(),
            validate=lambda x: validate_aws_region(x) or "Invalid AWS region format (e.g., us-east-1)",
        ).ask()
        if not region:
            console.print("\n[yellow]Setup cancelled.[/yellow]")
            return 1

        aws_profile = questionary.text(
            "AWS CLI profile (leave empty for default credentials):",
            default=profile.aws_profile or "",
        ).ask()

        ocm_url = questionary.text("OCM API URL:", default=profile.ocm_url).ask()
        if not ocm_url:
            console.print("\n[yellow]Setup cancelled.[/yellow]")
            return 1

        credential_storage = questionary.select(
            "Where should the OCM token be read from?",
            choices=[
                questionary.Choice("Keyring (Secure OS storage)", value="keyring"),
                questionary.Choice("OCM_TOKEN environment variable", value="env"),
            ],
            default=profile.credential_storage,
        ).ask()
        if not credential_storage:
            console.print("\n[yellow]Setup cancelled.[/yellow]")
            return 1

        profile.aws_region = region
        profile.aws_profile = aws_profile or None
        profile.ocm_url = ocm_url.rstrip("/")
        profile.credential_storage = credential_storage

        if credential_storage == "keyring":
            token = questionary.password("OCM offline token (from console.redhat.com/openshift/token):").ask()
            if token:
                try:
                    profile.set_ocm_token(token)
                except KeyringError as e:
                    console.print(f"[red]Failed to save OCM token to keyring: {e}[/red]")
                    return 1

        config.add_profile(profile)
        config.save()

        table = Table(box=box.SIMPLE)
        table.add_column("Setting", style="dim")
        table.add_column("Value")
        table.add_row("Configuration Profile", profile.name)
        table.add_row("AWS Region", profile.aws_region)
        table.add_row("AWS Profile", profile.aws_profile or "(default)")
        table.add_row("OCM API URL", profile.ocm_url)
        table.add_row("OCM Token Storage", profile.credential_storage)
        console.print(table)

        action = "updated" if existing else "created"
        console.print(f"\n[green]Profile '{profile.name}' {action} in {Config.CONFIG_FILE}[/green]")
        console.print("\n[bold]Next steps:[/bold]")
        console.print(f"• Run [cyan]rosa-oidc create oidc-config --profile {profile.name}[/cyan]")
        return 0
