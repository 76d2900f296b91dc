"""AWS IAM role assumption.

This module exchanges a base credential for short-lived session credentials
through STS AssumeRole. Every call performs a fresh exchange: session
credentials are neither cached nor reused, so concurrent callers each get
their own session.
"""

from typing import Optional

import boto3
import structlog
from botocore.exceptions import BotoCoreError, ClientError

from ..models import AssumeRoleParams, ProxyConfig, ResolvedCredential
from ..transport import get_client_config

logger = structlog.get_logger(__name__)


class RoleAssumptionError(Exception):
    """Raised when STS rejects or cannot complete an AssumeRole request.

    The message is the underlying error message, unmodified.
    """

    def __init__(self, message: str, role_arn: str = "", error_code: str = ""):
        super().__init__(message)
        self.message = message
        self.role_arn = role_arn
        self.error_code = error_code


def _sts_client(base: ResolvedCredential, proxy: Optional[ProxyConfig], region: Optional[str]):
    """Create an STS client authenticated as ``base``."""
    return boto3.client(
        "sts",
        region_name=region,
        config=get_client_config(proxy),
        **base.client_kwargs(),
    )


def assume_role(
    base: ResolvedCredential,
    params: AssumeRoleParams,
    proxy: Optional[ProxyConfig] = None,
    region: Optional[str] = None,
) -> ResolvedCredential:
    """Assume an IAM role and return its session credentials.

    Args:
        base: Calling identity for the STS request
        params: Role ARN, external id, duration and session name
        proxy: Optional proxy for the STS call
        region: STS region; None lets botocore pick its default endpoint

    Returns:
        Session credential with a session token, or ``base`` unchanged when
        ``params.role_arn`` is empty (no STS client is created in that case)

    Raises:
        RoleAssumptionError: If the exchange fails for any reason. There is no retry.
    """
    if not params.role_arn:
        return base

    logger.debug(
        "Assuming IAM role",
        role_arn=params.role_arn,
        session_name=params.role_session_name,
        duration_seconds=params.duration_seconds,
        has_external_id=bool(params.external_id),
        via_proxy=bool(proxy and proxy.is_configured),
    )

    try:
        sts_client = _sts_client(base, proxy, region)
        response = sts_client.assume_role(**params.to_request())
        credentials = ResolvedCredential.from_dict(response["Credentials"])
    except ClientError as e:
        error_code = e.response.get("Error", {}).get("Code", "")
        logger.error(
            "Failed to assume role",
            role_arn=params.role_arn,
            error=str(e),
            error_code=error_code,
        )
        raise RoleAssumptionError(str(e), role_arn=params.role_arn, error_code=error_code) from e
    except (BotoCoreError, KeyError, TypeError) as e:
        logger.error(
            "Failed to assume role",
            role_arn=params.role_arn,
            error=str(e),
            error_type=type(e).__name__,
        )
        raise RoleAssumptionError(str(e), role_arn=params.role_arn) from e

    if not credentials.session_token:
        logger.error("AssumeRole response carried no session token", role_arn=params.role_arn)
        raise RoleAssumptionError("AssumeRole response did not include a session token", role_arn=params.role_arn)

    logger.info(
        "Role assumed successfully",
        role_arn=params.role_arn,
        access_key_id=credentials.access_key_id,
    )
    return credentials
