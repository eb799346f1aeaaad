# ABOUTME: Create command for OIDC configurations
# ABOUTME: Generates key material and publishes it through the selected strategy

"""Create command - Create an OIDC configuration compliant with the OIDC protocol."""

import json
import logging

import questionary
from cleo.commands.command import Command
from cleo.helpers import option
from rich.console import Console
from rich.panel import Panel
from rich.progress import Progress, SpinnerColumn, TextColumn

from rosa_oidc_config.cli.utils.clients import create_aws_client, create_ocm_client, resolve_profile
from rosa_oidc_config.cli.utils.display import display_provisioning_result, display_remote_error, get_result_dict
from rosa_oidc_config.cli.utils.validators import (
    get_resource_id_from_arn,
    validate_aws_region,
    validate_create_options,
    validate_prefix,
)
from rosa_oidc_config.config import Config
from rosa_oidc_config.exceptions import OidcConfigError, RemoteProvisioningError, ValidationError
from rosa_oidc_config.oidc.bundle import MAX_LENGTH_USER_PREFIX, OidcConfigInput, build_oidc_config_input
from rosa_oidc_config.oidc.strategies import (
    MODE_AUTO,
    MODE_MANUAL,
    MODES,
    OidcConfigProvisioner,
    OidcConfigStrategy,
    get_oidc_config_strategy,
)
from rosa_oidc_config.utils.aws import get_current_region

logger = logging.getLogger(__name__)

REMOTE_STRATEGIES = (OidcConfigStrategy.UNMANAGED_AUTO, OidcConfigStrategy.MANAGED_AUTO)


class CreateOidcConfigCommand(Command):
    name = "create oidc-config"
    description = "Create OIDC config compliant with OIDC protocol"

    options = [
        option(
            "mode",
            "m",
            description="How to perform the operation. Valid options are: auto, manual",
            flag=False,
        ),
        option(
            "raw-files",
            description="Creates OIDC config documents (Private RSA key, Discovery document, JSON Web Key Set) "
            "and saves locally for the client to create the configuration",
            flag=True,
        ),
        option("prefix", description="Prefix for the OIDC configuration, secret and provider", flag=False),
        option(
            "managed",
            description="Indicates whether it is a Red Hat managed or unmanaged (Customer hosted) OIDC Configuration",
            flag=True,
        ),
        option("installer-role-arn", description="STS Role ARN with get secrets permission", flag=False),
        option("region", description="AWS region to use for the bucket and secret", flag=False),
        option("profile", description="Configuration profile to use", flag=False),
        option("yes", "y", description="Skip interactive prompts and use defaults", flag=True),
        option("json", description="Output in JSON format", flag=True),
    ]

    def handle(self) -> int:
        """Execute the create command."""
        console = Console()

        raw_files = self.option("raw-files")
        managed = self.option("managed")
        mode = self.option("mode")
        prefix = (self.option("prefix") or "").strip(" \t")
        installer_role_arn = self.option("installer-role-arn") or ""
        skip_prompts = self.option("yes")

        try:
            profile = resolve_profile(Config.load(), self.option("profile"))
            region = self.option("region") or profile.aws_region or get_current_region()
            if not validate_aws_region(region):
                raise ValidationError(f"Invalid AWS region: {region}", option_name="region")

            validate_create_options(raw_files, managed, mode, prefix, installer_role_arn)

            if managed and mode == MODE_MANUAL and not self.option("json"):
                console.print("[yellow]Managed OIDC configurations are always created in auto mode.[/yellow]")

            if not raw_files and not managed and not mode:
                if skip_prompts:
                    mode = MODE_AUTO
                else:
                    mode, prefix, installer_role_arn = self._ask_unmanaged_options(prefix, installer_role_arn)
                    if mode is None:
                        console.print("\n[yellow]OIDC config creation cancelled.[/yellow]")
                        return 1
                    validate_create_options(raw_files, managed, mode, prefix, installer_role_arn)

            strategy = get_oidc_config_strategy(raw_files, managed, mode)
            logger.debug("Selected strategy %s in %s", strategy.value, region)

            # Names and key material are local; build them before any AWS or OCM call
            if strategy is OidcConfigStrategy.MANAGED_AUTO:
                oidc_config_input = OidcConfigInput.empty()
            else:
                if strategy is not OidcConfigStrategy.RAW and not self.option("json"):
                    console.print(
                        Panel.fit(
                            "[bold cyan]Unmanaged OIDC Configuration[/bold cyan]\n\n"
                            "This command will create a S3 bucket populating it with documents to be compliant "
                            "with OIDC protocol.\nIt will also create a Secret in Secrets Manager containing "
                            "the private key.",
                            border_style="cyan",
                            padding=(1, 2),
                        )
                    )
                oidc_config_input = build_oidc_config_input(prefix, region)

            needs_aws = strategy is OidcConfigStrategy.UNMANAGED_AUTO or bool(installer_role_arn)
            aws_client = create_aws_client(region, profile) if needs_aws else None
            ocm_client = create_ocm_client(profile) if strategy in REMOTE_STRATEGIES else None

            if installer_role_arn:
                role_name = get_resource_id_from_arn(installer_role_arn)
                if not aws_client.check_role_exists(role_name):
                    raise ValidationError(f"Role '{installer_role_arn}' does not exist")

            provisioner = OidcConfigProvisioner(
                region=region,
                aws_client=aws_client,
                ocm_client=ocm_client,
                installer_role_arn=installer_role_arn,
            )

            if strategy in REMOTE_STRATEGIES and not self.option("json"):
                result = self._execute_with_spinner(console, provisioner, strategy, oidc_config_input)
            else:
                result = provisioner.execute(strategy, oidc_config_input)

        except ValidationError as e:
            console.print(f"[red]{e.message}[/red]")
            return 1
        except RemoteProvisioningError as e:
            display_remote_error(console, e)
            return 1
        except OidcConfigError as e:
            console.print(f"[red]There was a problem generating the OIDC configuration: {e.message}[/red]")
            return 1

        if self.option("json"):
            console.print(json.dumps(get_result_dict(result), indent=2), markup=False, soft_wrap=True)
        else:
            display_provisioning_result(console, result)
        return 0

    def _execute_with_spinner(self, console: Console, provisioner, strategy, oidc_config_input):
        """Run a remote strategy while showing a spinner."""
        if strategy is OidcConfigStrategy.MANAGED_AUTO:
            description = "Setting up managed OIDC configuration..."
        else:
            description = f"Setting up unmanaged OIDC configuration '{oidc_config_input.bucket_name}'..."

        with Progress(
            SpinnerColumn(), TextColumn("[progress.description]{task.description}"), console=console
        ) as progress:
            task = progress.add_task(description, total=None)
            provisioner.on_step = lambda message: progress.update(task, description=message)
            try:
                return provisioner.execute(strategy, oidc_config_input)
            finally:
                progress.update(task, completed=True)

    def _ask_unmanaged_options(self, prefix: str, installer_role_arn: str):
        """Prompt for the creation mode, prefix and installer role."""
        mode = questionary.select(
            "OIDC Config creation mode:",
            choices=MODES,
            default=MODE_AUTO,
        ).ask()
        if mode is None:
            return None, prefix, installer_role_arn

        prefix = questionary.text(
            "Prefix for OIDC (optional):",
            default=prefix,
            validate=lambda x: validate_prefix(x) or f"Prefix is limited to {MAX_LENGTH_USER_PREFIX} characters",
        ).ask()
        prefix = (prefix or "").strip(" \t")

        if mode == MODE_AUTO:
            installer_role_arn = (
                questionary.text("Installer role ARN (optional):", default=installer_role_arn).ask() or ""
            )

        return mode, prefix, installer_role_arn
