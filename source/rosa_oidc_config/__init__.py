# ABOUTME: rosa-oidc-config - Create OIDC configurations for ROSA service account tokens
# ABOUTME: Main package for generating and publishing OIDC discovery documents and keys

"""rosa-oidc-config - OIDC issuer configuration tool."""

__version__ = "1.0.0"
__all__ = ["cli", "config", "oidc", "ocm"]
