# ABOUTME: Shared display utilities for consistent output formatting
# ABOUTME: Renders OIDC configs, provisioning results and provisioning errors

"""Shared display utilities for consistent output formatting across commands."""

from typing import Any

from rich import box
from rich.console import Console
from rich.table import Table

from rosa_oidc_config.exceptions import RemoteProvisioningError
from rosa_oidc_config.ocm import OidcConfig
from rosa_oidc_config.oidc.strategies import OidcConfigStrategy, ProvisioningResult
from rosa_oidc_config.utils.command_builder import join_commands


def display_oidc_configs(console: Console, oidc_configs: list[OidcConfig]) -> None:
    """Display OIDC configurations as a table."""
    table = Table(box=box.SIMPLE)
    table.add_column("ID", style="cyan")
    table.add_column("Managed")
    table.add_column("Issuer URL")
    table.add_column("Secret ARN", style="dim")

    for oidc_config in oidc_configs:
        table.add_row(
            oidc_config.id or "",
            "✓" if oidc_config.managed else "✗",
            oidc_config.issuer_url or "",
            oidc_config.secret_arn or "",
        )

    console.print(table)


def display_oidc_config(console: Console, oidc_config: OidcConfig) -> None:
    """Display a single OIDC configuration."""
    table = Table(box=box.SIMPLE, show_header=False)
    table.add_column("Setting", style="dim")
    table.add_column("Value")

    table.add_row("ID", oidc_config.id or "")
    table.add_row("Managed", "Yes" if oidc_config.managed else "No")
    table.add_row("Issuer URL", oidc_config.issuer_url or "")
    if not oidc_config.managed:
        table.add_row("Secret ARN", oidc_config.secret_arn or "")
        if oidc_config.installer_role_arn:
            table.add_row("Installer Role ARN", oidc_config.installer_role_arn)
    if oidc_config.creation_timestamp:
        table.add_row("Created", oidc_config.creation_timestamp)

    console.print(table)


def display_provisioning_result(console: Console, result: ProvisioningResult) -> None:
    """Display what a provisioning run produced and what to do next."""
    if result.strategy is OidcConfigStrategy.RAW:
        for path in result.files:
            console.print(f"✓ Saved [cyan]{path.name}[/cyan]")
        console.print(
            "\n[yellow]Please refer to documentation to use generated files "
            "to create an OIDC compliant configuration.[/yellow]"
        )
        return

    if result.strategy is OidcConfigStrategy.UNMANAGED_MANUAL:
        # Plain print keeps the commands copy-pasteable
        console.print(join_commands(result.commands), markup=False, highlight=False, soft_wrap=True)
        console.print(
            "\n[yellow]Please run commands above to generate OIDC compliant configuration in your AWS account. "
            "After running the commands please refer to the documentation to register your unmanaged "
            "OIDC Configuration with OCM.[/yellow]"
        )
        return

    console.print(f"\n[green]✓ OIDC configuration created: [cyan]{result.oidc_config_id}[/cyan][/green]")
    console.print(f"  Issuer URL: [cyan]{result.issuer_url}[/cyan]")
    if result.secret_arn:
        console.print(f"  Secret ARN: [cyan]{result.secret_arn}[/cyan]")

    console.print("\n[bold]Next steps:[/bold]")
    console.print("• Create the OIDC provider for this configuration:")
    console.print(f"  [cyan]rosa create oidc-provider --oidc-config-id {result.oidc_config_id}[/cyan]")
    console.print("• Create a cluster with this OIDC configuration:")
    console.print(f"  [cyan]rosa create cluster --sts --oidc-config-id {result.oidc_config_id}[/cyan]")


def display_remote_error(console: Console, error: RemoteProvisioningError) -> None:
    """Display a remote failure together with resources that were left behind."""
    console.print(f"[red]{error.message}[/red]")
    hint = error.get_recovery_hint()
    if hint:
        console.print(f"[yellow]{hint}[/yellow]")


def get_result_dict(result: ProvisioningResult) -> dict[str, Any]:
    """Get a provisioning result as a dictionary for JSON output."""
    return {
        "strategy": result.strategy.value,
        "oidc_config_id": result.oidc_config_id,
        "issuer_url": result.issuer_url,
        "bucket_name": result.bucket_name,
        "secret_arn": result.secret_arn,
        "files": [str(path) for path in result.files],
        "commands": result.commands,
    }
