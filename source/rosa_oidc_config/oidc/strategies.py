# ABOUTME: Provisioning strategies for OIDC configurations
# ABOUTME: Raw files, unmanaged auto/manual and managed auto, dispatched from one place

"""OIDC configuration provisioning strategies."""

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

from rosa_oidc_config.exceptions import DocumentSaveError, RemoteProvisioningError, ValidationError
from rosa_oidc_config.ocm import OidcConfig

from .bundle import OidcConfigInput
from .steps import build_provisioning_steps

logger = logging.getLogger(__name__)

MODE_AUTO = "auto"
MODE_MANUAL = "manual"
MODES = [MODE_AUTO, MODE_MANUAL]


class OidcConfigStrategy(Enum):
    RAW = "raw"
    UNMANAGED_AUTO = "unmanaged-auto"
    UNMANAGED_MANUAL = "unmanaged-manual"
    MANAGED_AUTO = "managed-auto"


def get_oidc_config_strategy(raw_files: bool, managed: bool, mode: str | None) -> OidcConfigStrategy:
    """Select the provisioning strategy.

    ``raw_files`` wins over everything, then ``managed``; only unmanaged
    configurations look at ``mode``.
    """
    if raw_files:
        return OidcConfigStrategy.RAW
    if managed:
        return OidcConfigStrategy.MANAGED_AUTO
    if mode == MODE_AUTO:
        return OidcConfigStrategy.UNMANAGED_AUTO
    if mode == MODE_MANUAL:
        return OidcConfigStrategy.UNMANAGED_MANUAL
    raise ValidationError(f"Invalid mode. Allowed values are {MODES}", option_name="mode")


@dataclass
class ProvisioningResult:
    """Outcome of a provisioning run."""

    strategy: OidcConfigStrategy
    issuer_url: str = ""
    oidc_config_id: str | None = None
    secret_arn: str | None = None
    bucket_name: str | None = None
    files: list[Path] = field(default_factory=list)
    commands: list[str] = field(default_factory=list)


class OidcConfigProvisioner:
    """
    Runs one provisioning strategy against the injected AWS and OCM clients.

    Steps run strictly in order. A failed remote step stops the run and the
    raised RemoteProvisioningError lists what was already created; nothing is
    rolled back.
    """

    def __init__(
        self,
        region: str,
        aws_client=None,
        ocm_client=None,
        installer_role_arn: str = None,
        output_dir: str | Path = None,
        on_step: Callable[[str], None] = None,
    ):
        self.region = region
        self.aws_client = aws_client
        self.ocm_client = ocm_client
        self.installer_role_arn = installer_role_arn or None
        self.output_dir = Path(output_dir) if output_dir else Path.cwd()
        self.on_step = on_step

    def execute(self, strategy: OidcConfigStrategy, oidc_config_input: OidcConfigInput) -> ProvisioningResult:
        if strategy is OidcConfigStrategy.RAW:
            return self._execute_raw(oidc_config_input)
        if strategy is OidcConfigStrategy.UNMANAGED_AUTO:
            return self._execute_unmanaged_auto(oidc_config_input)
        if strategy is OidcConfigStrategy.UNMANAGED_MANUAL:
            return self._execute_unmanaged_manual(oidc_config_input)
        if strategy is OidcConfigStrategy.MANAGED_AUTO:
            return self._execute_managed_auto()
        raise ValueError(f"Unknown OIDC config strategy: {strategy}")

    def _execute_raw(self, oidc_config_input: OidcConfigInput) -> ProvisioningResult:
        steps = build_provisioning_steps(oidc_config_input, self.region)
        files = self._save_documents(steps, oidc_config_input)
        return ProvisioningResult(
            strategy=OidcConfigStrategy.RAW,
            issuer_url=oidc_config_input.issuer_url,
            bucket_name=oidc_config_input.bucket_name,
            files=files,
        )

    def _execute_unmanaged_manual(self, oidc_config_input: OidcConfigInput) -> ProvisioningResult:
        steps = build_provisioning_steps(oidc_config_input, self.region)
        files = self._save_documents(steps, oidc_config_input)
        commands = [command for step in steps for command in step.commands()]
        return ProvisioningResult(
            strategy=OidcConfigStrategy.UNMANAGED_MANUAL,
            issuer_url=oidc_config_input.issuer_url,
            bucket_name=oidc_config_input.bucket_name,
            files=files,
            commands=commands,
        )

    def _execute_unmanaged_auto(self, oidc_config_input: OidcConfigInput) -> ProvisioningResult:
        bucket_name = oidc_config_input.bucket_name
        created: dict[str, str] = {}

        for step in build_provisioning_steps(oidc_config_input, self.region):
            self._notify(f"{step.description[:1].upper()}{step.description[1:]}...")
            try:
                created.update(step.apply(self.aws_client))
            except RemoteProvisioningError as e:
                raise RemoteProvisioningError(
                    f"There was a problem {step.description} '{bucket_name}': {e.message}", created
                ) from e
            if "bucket_name" in created:
                created.setdefault("issuer_url", oidc_config_input.issuer_url)

        secret_arn = created["secret_arn"]
        self._notify("Registering unmanaged OIDC configuration with OCM...")
        oidc_config = OidcConfig(
            managed=False,
            secret_arn=secret_arn,
            issuer_url=oidc_config_input.issuer_url,
            installer_role_arn=self.installer_role_arn,
        )
        try:
            oidc_config = self.ocm_client.create_oidc_config(oidc_config)
        except RemoteProvisioningError as e:
            raise RemoteProvisioningError(
                "There was a problem building your unmanaged OIDC Configuration with OCM: "
                f"{e.message}. Please refer to documentation and try again through OCM CLI.",
                created,
            ) from e

        return ProvisioningResult(
            strategy=OidcConfigStrategy.UNMANAGED_AUTO,
            issuer_url=oidc_config_input.issuer_url,
            oidc_config_id=oidc_config.id,
            secret_arn=secret_arn,
            bucket_name=bucket_name,
        )

    def _execute_managed_auto(self) -> ProvisioningResult:
        self._notify("Registering managed OIDC configuration with OCM...")
        try:
            oidc_config = self.ocm_client.create_oidc_config(OidcConfig(managed=True))
        except RemoteProvisioningError as e:
            raise RemoteProvisioningError(
                f"There was a problem registering your managed OIDC Configuration: {e.message}"
            ) from e

        return ProvisioningResult(
            strategy=OidcConfigStrategy.MANAGED_AUTO,
            issuer_url=oidc_config.issuer_url or "",
            oidc_config_id=oidc_config.id,
        )

    def _save_documents(self, steps: list, oidc_config_input: OidcConfigInput) -> list[Path]:
        documents: dict[str, bytes] = {}
        for step in steps:
            documents.update(step.local_files())

        try:
            self.output_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise DocumentSaveError(
                f"There was a problem creating {self.output_dir}: {e}", filename=str(self.output_dir)
            ) from e

        saved = []
        for filename, content in documents.items():
            path = self.output_dir / filename
            try:
                path.write_bytes(content)
                if filename == oidc_config_input.private_key_filename:
                    path.chmod(0o600)
            except OSError as e:
                raise DocumentSaveError(f"There was a problem saving {filename}: {e}", filename=filename) from e
            logger.info("Saved %s", path)
            saved.append(path)
        return saved

    def _notify(self, message: str) -> None:
        logger.debug(message)
        if self.on_step:
            self.on_step(message)
