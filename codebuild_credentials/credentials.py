"""CodeBuild credentials: a configured credential source plus optional IAM role.

Usage:
    from codebuild_credentials.credentials import CodeBuildCredentials

    creds = CodeBuildCredentials.create(
        access_key="AKIA...",
        secret_key="...",
        iam_role_arn="arn:aws:iam::123456789012:role/CodeBuildRole",
        external_id="shared-secret",
    )
    print(creds.credentials_descriptor)  # "IAM role: arn:aws:iam::..."
    session_creds = creds.get_credentials()
"""

import uuid
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Optional

import structlog

from .auth.resolver import describe, resolve_base
from .auth.role_exchanger import assume_role
from .models import RUNTIME_SESSION_NAME, AssumeRoleParams, CredentialSpec, ResolvedCredential

logger = structlog.get_logger(__name__)


class CredentialsScope(Enum):
    """Visibility of a stored credential."""

    GLOBAL = "GLOBAL"
    SYSTEM = "SYSTEM"


@dataclass(frozen=True)
class CodeBuildCredentials:
    """An immutable, named credential configuration.

    Attributes:
        spec: Sanitized credential inputs
        id: Unique identifier (random UUID by default)
        description: Free-form description
        scope: Credential visibility
        region: STS region for role assumption (None uses botocore's default)
        session_name: RoleSessionName sent with every runtime AssumeRole call
    """

    spec: CredentialSpec
    id: str = field(default_factory=lambda: str(uuid.uuid4()))
    description: str = ""
    scope: CredentialsScope = CredentialsScope.GLOBAL
    region: Optional[str] = None
    session_name: str = RUNTIME_SESSION_NAME

    def __post_init__(self):
        # Reject a bad proxy port when the configuration is applied, before any AWS call
        self.spec.proxy()

    @classmethod
    def create(
        cls,
        access_key: Optional[str] = None,
        secret_key: Optional[str] = None,
        proxy_host: Optional[str] = None,
        proxy_port: Optional[str] = None,
        iam_role_arn: Optional[str] = None,
        external_id: Optional[str] = None,
        id: Optional[str] = None,
        description: str = "",
        scope: CredentialsScope = CredentialsScope.GLOBAL,
        region: Optional[str] = None,
    ) -> "CodeBuildCredentials":
        """Build from raw form values, sanitizing them.

        Raises:
            InvalidProxyPortError: If proxy_port is not a non-negative integer
        """
        spec = CredentialSpec.from_form(
            access_key=access_key,
            secret_key=secret_key,
            proxy_host=proxy_host,
            proxy_port=proxy_port,
            iam_role_arn=iam_role_arn,
            external_id=external_id,
        )
        kwargs = {"spec": spec, "description": description, "scope": scope, "region": region}
        if id:
            kwargs["id"] = id
        return cls(**kwargs)

    @property
    def credentials_descriptor(self) -> str:
        return describe(self.spec)

    def get_credentials(self) -> ResolvedCredential:
        """Resolve credentials, assuming the configured IAM role if any.

        A new STS session is requested on every call when a role is configured.

        Raises:
            NoCredentialsError: If no key pair is configured and the default chain is empty
            RoleAssumptionError: If the role cannot be assumed
        """
        base = resolve_base(self.spec).get_credentials()

        if not self.spec.has_role:
            return base

        params = AssumeRoleParams(
            role_arn=self.spec.iam_role_arn,
            external_id=self.spec.external_id,
            role_session_name=self.session_name,
        )
        return assume_role(base, params, proxy=self.spec.proxy(), region=self.region)

    def refresh(self) -> None:
        """No-op: credentials are resolved fresh on every request."""

    def with_spec(self, **changes) -> "CodeBuildCredentials":
        """Return a copy with updated spec fields (re-sanitized and re-validated)."""
        current = {
            "access_key": self.spec.access_key,
            "secret_key": self.spec.secret_key,
            "proxy_host": self.spec.proxy_host,
            "proxy_port": self.spec.proxy_port,
            "iam_role_arn": self.spec.iam_role_arn,
            "external_id": self.spec.external_id,
        }
        current.update(changes)
        logger.debug("Updating credential configuration", credentials_id=self.id, fields=sorted(changes))
        return replace(self, spec=CredentialSpec.from_form(**current))
