"""AWS credential resolution and role assumption.

This package selects the base credential source for a configured spec and
exchanges base credentials for assumed-role session credentials.
"""

from .resolver import (
    CredentialProvider,
    CredentialStrategy,
    DefaultChainProvider,
    StaticCredentialsProvider,
    describe,
    resolve_base,
    select_strategy,
)
from .role_exchanger import RoleAssumptionError, assume_role

__all__ = [
    "CredentialProvider",
    "CredentialStrategy",
    "DefaultChainProvider",
    "RoleAssumptionError",
    "StaticCredentialsProvider",
    "assume_role",
    "describe",
    "resolve_base",
    "select_strategy",
]
