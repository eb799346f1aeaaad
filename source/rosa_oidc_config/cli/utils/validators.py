# ABOUTME: Input validation functions for CLI commands
# ABOUTME: Validates regions, prefixes, ARNs and conflicting create options

"""Input validators for CLI commands."""

import re

from rosa_oidc_config.exceptions import ValidationError
from rosa_oidc_config.oidc.bundle import MAX_LENGTH_USER_PREFIX
from rosa_oidc_config.oidc.strategies import MODES

RAW_FILES_FLAG = "raw-files"
USER_PREFIX_FLAG = "prefix"
MANAGED_FLAG = "managed"
INSTALLER_ROLE_ARN_FLAG = "installer-role-arn"
MODE_FLAG = "mode"


def validate_aws_region(region: str) -> bool:
    """Validate AWS region format."""
    if not region:
        return False

    # AWS region format: us-east-1, eu-west-2, us-gov-west-1, etc.
    pattern = r"^[a-z]{2}(-[a-z]+)+-\d{1,2}$"
    return bool(re.match(pattern, region))


def validate_prefix(prefix: str) -> bool:
    """Validate the user prefix for bucket and secret names."""
    return len(prefix.strip(" \t")) <= MAX_LENGTH_USER_PREFIX


def parse_arn(arn: str) -> dict[str, str]:
    """Split an ARN into its components.

    Format: arn:partition:service:region:account-id:resource
    """
    parts = arn.split(":", 5)
    if len(parts) != 6 or parts[0] != "arn":
        raise ValidationError(f"Invalid ARN: arn: invalid prefix in '{arn}'", option_name=INSTALLER_ROLE_ARN_FLAG)

    _, partition, service, region, account_id, resource = parts
    if not partition or not service or not resource:
        raise ValidationError(f"Invalid ARN: '{arn}' is missing sections", option_name=INSTALLER_ROLE_ARN_FLAG)

    return {
        "partition": partition,
        "service": service,
        "region": region,
        "account_id": account_id,
        "resource": resource,
    }


def get_resource_id_from_arn(arn: str) -> str:
    """Get the last path segment of an ARN resource, e.g. the role name."""
    resource = parse_arn(arn)["resource"]
    index = resource.rfind("/")
    if index == -1 or index == len(resource) - 1:
        raise ValidationError(f"can't find resource-id in ARN '{arn}'", option_name=INSTALLER_ROLE_ARN_FLAG)
    return resource[index + 1 :]


def validate_create_options(
    raw_files: bool,
    managed: bool,
    mode: str | None,
    prefix: str | None,
    installer_role_arn: str | None,
) -> None:
    """Reject conflicting options for ``create oidc-config``.

    Runs before any file is written or any remote call is made.
    """
    if raw_files and mode:
        raise ValidationError(f"--{RAW_FILES_FLAG} param is not supported alongside --{MODE_FLAG} param.")

    if raw_files and installer_role_arn:
        raise ValidationError(
            f"--{RAW_FILES_FLAG} param is not supported alongside --{INSTALLER_ROLE_ARN_FLAG} param"
        )

    if raw_files and managed:
        raise ValidationError(f"--{RAW_FILES_FLAG} param is not supported alongside --{MANAGED_FLAG} param")

    if managed and prefix:
        raise ValidationError(f"--{USER_PREFIX_FLAG} param is not supported for managed OIDC config")

    if managed and installer_role_arn:
        raise ValidationError(f"--{INSTALLER_ROLE_ARN_FLAG} param is not supported for managed OIDC config")

    if mode and mode not in MODES:
        raise ValidationError(f"Invalid mode. Allowed values are {MODES}", option_name=MODE_FLAG)

    if prefix and not validate_prefix(prefix):
        raise ValidationError(
            "Expected a valid prefix for the configuration: "
            f"length of prefix is limited to {MAX_LENGTH_USER_PREFIX} characters",
            option_name=USER_PREFIX_FLAG,
        )

    if installer_role_arn:
        parse_arn(installer_role_arn)
