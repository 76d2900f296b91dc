"""Configuration-form checks for CodeBuild credentials.

Each check returns a FormValidation (ok/error plus a message for display)
instead of raising, so a host UI can render the result directly.
"""

import uuid
from dataclasses import dataclass
from enum import Enum
from typing import Optional

import boto3
import structlog
from botocore.exceptions import BotoCoreError, ClientError

from .auth.resolver import resolve_base
from .auth.role_exchanger import RoleAssumptionError, assume_role
from .models import VALIDATION_SESSION_NAME, AssumeRoleParams, CredentialSpec, ProxyConfig, ResolvedCredential
from .transport import get_client_config, resolve_region
from .validation import InvalidProxyPortError

logger = structlog.get_logger(__name__)

DISPLAY_NAME = "CodeBuild Credentials"

#: Longest error detail shown in a form message
ERROR_MESSAGE_MAX_LENGTH = 178

KEYS_REQUIRED_FOR_ROLE = "AWS access and secret keys are required to use an IAM role for authorization"
KEY_AUTHORIZATION_OK = "AWS access and secret key authorization successful."
ROLE_AUTHORIZATION_OK = "IAM role authorization successful."


class ValidationKind(Enum):
    OK = "ok"
    ERROR = "error"


@dataclass(frozen=True)
class FormValidation:
    kind: ValidationKind
    message: str = ""

    @classmethod
    def ok(cls, message: str = "") -> "FormValidation":
        return cls(ValidationKind.OK, message)

    @classmethod
    def error(cls, message: str) -> "FormValidation":
        return cls(ValidationKind.ERROR, message)

    @property
    def is_ok(self) -> bool:
        return self.kind is ValidationKind.OK


def display_message(message: Optional[str]) -> str:
    """Shorten an error message for display.

    Keeps the first ERROR_MESSAGE_MAX_LENGTH characters and marks the cut with
    an ellipsis. Errors raised by the credential core are never truncated.
    """
    message = message or ""
    if len(message) <= ERROR_MESSAGE_MAX_LENGTH:
        return message
    return message[:ERROR_MESSAGE_MAX_LENGTH] + "..."


def authorization_failed(message: Optional[str]) -> FormValidation:
    return FormValidation.error("Authorization failed: " + display_message(message))


def new_uuid() -> str:
    """Fresh identifier for a new credential entry."""
    return str(uuid.uuid4())


def check_secret_key(
    proxy_host: str,
    proxy_port: str,
    access_key: str,
    secret_key: str,
    region: Optional[str] = None,
) -> FormValidation:
    """Verify the key pair (or default chain) can call CodeBuild.

    Issues a single ``ListProjects`` request through the configured proxy.
    """
    spec = CredentialSpec.from_form(access_key=access_key, secret_key=secret_key)

    try:
        proxy = ProxyConfig.parse(proxy_host, proxy_port)
        credentials = resolve_base(spec).get_credentials()
        codebuild = boto3.client(
            "codebuild",
            region_name=resolve_region(region),
            config=get_client_config(proxy),
            **credentials.client_kwargs(),
        )
        codebuild.list_projects()
    except (InvalidProxyPortError, ClientError, BotoCoreError) as e:
        logger.warning("Key pair validation failed", error=str(e), error_type=type(e).__name__)
        return authorization_failed(str(e))

    logger.info("Key pair validated successfully", access_key=spec.access_key or "default-chain")
    return FormValidation.ok(KEY_AUTHORIZATION_OK)


def check_iam_role_arn(
    proxy_host: str,
    proxy_port: str,
    access_key: str,
    secret_key: str,
    iam_role_arn: str,
    external_id: str,
    region: Optional[str] = None,
) -> FormValidation:
    """Verify the key pair can assume the configured role.

    Role validation needs an explicit key pair; the default chain is not used
    here even though it is at build time.
    """
    spec = CredentialSpec.from_form(
        access_key=access_key,
        secret_key=secret_key,
        iam_role_arn=iam_role_arn,
        external_id=external_id,
    )

    if not spec.has_key_pair:
        return FormValidation.error(KEYS_REQUIRED_FOR_ROLE)

    if not spec.has_role:
        return FormValidation.ok()

    params = AssumeRoleParams(
        role_arn=spec.iam_role_arn,
        external_id=spec.external_id,
        role_session_name=VALIDATION_SESSION_NAME,
    )
    base = ResolvedCredential(access_key_id=spec.access_key, secret_access_key=spec.secret_key)

    try:
        proxy = ProxyConfig.parse(proxy_host, proxy_port)
        assume_role(base, params, proxy=proxy, region=region)
    except InvalidProxyPortError as e:
        logger.warning("Role validation failed", role_arn=spec.iam_role_arn, error=str(e), error_type=type(e).__name__)
        return authorization_failed(str(e))
    except RoleAssumptionError as e:
        logger.warning(
            "Role validation failed",
            role_arn=spec.iam_role_arn,
            error=e.message,
            error_code=e.error_code,
        )
        return authorization_failed(e.message)

    return FormValidation.ok(ROLE_AUTHORIZATION_OK)
