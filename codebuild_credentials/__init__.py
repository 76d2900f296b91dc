"""Credential resolution for AWS CodeBuild.

Selects a base credential (static key pair or the default credential chain)
and optionally exchanges it for assumed-role session credentials.
"""

from .auth import CredentialStrategy, RoleAssumptionError, assume_role, describe, resolve_base, select_strategy
from .credentials import CodeBuildCredentials, CredentialsScope
from .models import (
    DEFAULT_DURATION_SECONDS,
    RUNTIME_SESSION_NAME,
    VALIDATION_SESSION_NAME,
    AssumeRoleParams,
    CredentialSpec,
    ProxyConfig,
    ResolvedCredential,
)
from .validation import InvalidProxyPortError
from .version import __version__

__all__ = [
    "DEFAULT_DURATION_SECONDS",
    "RUNTIME_SESSION_NAME",
    "VALIDATION_SESSION_NAME",
    "AssumeRoleParams",
    "CodeBuildCredentials",
    "CredentialSpec",
    "CredentialStrategy",
    "CredentialsScope",
    "InvalidProxyPortError",
    "ProxyConfig",
    "ResolvedCredential",
    "RoleAssumptionError",
    "__version__",
    "assume_role",
    "describe",
    "resolve_base",
    "select_strategy",
]
