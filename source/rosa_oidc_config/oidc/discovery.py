# ABOUTME: OIDC discovery document rendering
# ABOUTME: Minimal document served at /.well-known/openid-configuration

"""OIDC discovery document builder."""

import json

JWKS_KEY = "keys.json"
DISCOVERY_DOCUMENT_KEY = ".well-known/openid-configuration"


def build_discovery_document(issuer_url: str) -> str:
    """Render the discovery document bound to an issuer URL."""
    document = {
        "issuer": issuer_url,
        "jwks_uri": f"{issuer_url}/{JWKS_KEY}",
        "response_types_supported": ["id_token"],
        "subject_types_supported": ["public"],
        "id_token_signing_alg_values_supported": ["RS256"],
        "claims_supported": ["aud", "exp", "sub", "iat", "iss"],
    }
    return json.dumps(document, indent=4)
