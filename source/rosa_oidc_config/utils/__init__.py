# ABOUTME: Shared utilities for rosa-oidc-config
# ABOUTME: AWS client wrapper and AWS CLI command rendering
