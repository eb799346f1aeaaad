# ABOUTME: OIDC configuration core for rosa-oidc-config
# ABOUTME: Key material, discovery document, JWKS and provisioning strategies

"""OIDC configuration building and provisioning."""

from .bundle import OidcConfigInput, build_oidc_config_input, is_valid_bucket_name, validate_bucket_name
from .discovery import build_discovery_document
from .jwks import build_jwks, key_id_from_public_key
from .keys import generate_key_pair
from .strategies import OidcConfigProvisioner, OidcConfigStrategy, ProvisioningResult, get_oidc_config_strategy

__all__ = [
    "OidcConfigInput",
    "OidcConfigProvisioner",
    "OidcConfigStrategy",
    "ProvisioningResult",
    "build_discovery_document",
    "build_jwks",
    "build_oidc_config_input",
    "generate_key_pair",
    "get_oidc_config_strategy",
    "is_valid_bucket_name",
    "key_id_from_public_key",
    "validate_bucket_name",
]
