# ABOUTME: Commands module for rosa-oidc-config CLI
# ABOUTME: Contains all CLI command implementations

"""CLI commands for rosa-oidc-config."""

from .create import CreateOidcConfigCommand
from .delete import DeleteOidcConfigCommand
from .describe import DescribeOidcConfigCommand
from .init import InitCommand
from .list import ListOidcConfigsCommand

__all__ = [
    "InitCommand",
    "CreateOidcConfigCommand",
    "ListOidcConfigsCommand",
    "DescribeOidcConfigCommand",
    "DeleteOidcConfigCommand",
]
