# ABOUTME: Builds AWS and OCM clients from a configuration profile
# ABOUTME: Shared by every command that talks to a remote system

"""Client factories for CLI commands."""

from rosa_oidc_config.config import OCM_TOKEN_ENV_VAR, Config, Profile
from rosa_oidc_config.exceptions import ValidationError
from rosa_oidc_config.ocm import OcmClient
from rosa_oidc_config.utils.aws import AwsClient


def resolve_profile(config: Config, profile_name: str | None) -> Profile:
    """Get the named profile, the default profile, or an empty default.

    Only an explicitly named profile must exist.
    """
    profile = config.get_profile(profile_name)
    if profile:
        return profile
    if profile_name:
        raise ValidationError(f"Profile '{profile_name}' not found. Run 'rosa-oidc init' first.")
    return Profile(name="default")


def create_ocm_client(profile: Profile) -> OcmClient:
    token = profile.get_ocm_token()
    if not token:
        raise ValidationError(
            f"OCM token not found. Set {OCM_TOKEN_ENV_VAR} or run 'rosa-oidc init --profile {profile.name}'."
        )
    return OcmClient(token=token, url=profile.ocm_url, token_url=profile.token_url, client_id=profile.client_id)


def create_aws_client(region: str, profile: Profile) -> AwsClient:
    return AwsClient(region=region, profile=profile.aws_profile)
