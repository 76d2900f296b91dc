"""Selection of the base credential source.

The precedence here is shared by credential resolution and by the descriptor
label shown for a configured credential, so both always agree on the branch.
"""

from abc import ABC, abstractmethod
from enum import Enum

import boto3
import structlog
from botocore.exceptions import NoCredentialsError

from ..models import CredentialSpec, ResolvedCredential
from ..validation import BASIC_AWS_CREDENTIALS, DEFAULT_CHAIN_CREDENTIALS, IAM_ROLE_CREDENTIALS

logger = structlog.get_logger(__name__)


class CredentialStrategy(Enum):
    """How the credential for a spec is obtained."""

    DEFAULT_CHAIN = "default_chain"
    STATIC_KEY_PAIR = "static_key_pair"
    ASSUMED_ROLE = "assumed_role"


class CredentialProvider(ABC):
    """Supplies a credential on demand."""

    strategy: CredentialStrategy

    @abstractmethod
    def get_credentials(self) -> ResolvedCredential:
        """Return the current credential."""


class StaticCredentialsProvider(CredentialProvider):
    """Wraps an explicitly configured access/secret key pair."""

    strategy = CredentialStrategy.STATIC_KEY_PAIR

    def __init__(self, access_key: str, secret_key: str):
        self._access_key = access_key
        self._secret_key = secret_key

    def get_credentials(self) -> ResolvedCredential:
        return ResolvedCredential(access_key_id=self._access_key, secret_access_key=self._secret_key)

    def __repr__(self) -> str:
        return f"StaticCredentialsProvider(access_key={self._access_key!r})"


class DefaultChainProvider(CredentialProvider):
    """Delegates to botocore's default credential chain.

    The chain checks environment variables, shared config/credentials files,
    container credentials and instance metadata. Lookups happen on every call;
    nothing is cached here.
    """

    strategy = CredentialStrategy.DEFAULT_CHAIN

    def get_credentials(self) -> ResolvedCredential:
        """Discover ambient credentials.

        Instance-role and SSO credentials carry a session token; it is kept so the
        credential stays usable.

        Raises:
            NoCredentialsError: If no source in the chain supplied credentials
        """
        credentials = boto3.Session().get_credentials()
        if credentials is None:
            logger.warning("Default credential chain found no credentials")
            raise NoCredentialsError()

        frozen = credentials.get_frozen_credentials()
        logger.debug(
            "Resolved credentials from default chain",
            method=getattr(credentials, "method", None),
            has_session_token=bool(frozen.token),
        )
        return ResolvedCredential(
            access_key_id=frozen.access_key,
            secret_access_key=frozen.secret_key,
            session_token=frozen.token or None,
        )

    def __repr__(self) -> str:
        return "DefaultChainProvider()"


def select_strategy(spec: CredentialSpec) -> CredentialStrategy:
    """Decide which credential strategy a spec selects.

    A missing access or secret key always means the default chain, even when a
    role ARN is set. The role is then assumed on top of the default-chain
    credential at fetch time, but it is still reported as DEFAULT_CHAIN.
    """
    if not spec.has_key_pair:
        return CredentialStrategy.DEFAULT_CHAIN
    if spec.has_role:
        return CredentialStrategy.ASSUMED_ROLE
    return CredentialStrategy.STATIC_KEY_PAIR


def resolve_base(spec: CredentialSpec) -> CredentialProvider:
    """Return the provider of the base (pre-role-assumption) credential.

    Never raises and performs no I/O; failures surface from
    ``get_credentials()`` on the returned provider.
    """
    if select_strategy(spec) is CredentialStrategy.DEFAULT_CHAIN:
        return DefaultChainProvider()
    return StaticCredentialsProvider(spec.access_key, spec.secret_key)


def describe(spec: CredentialSpec) -> str:
    """Human-readable label for the credential source of a spec."""
    strategy = select_strategy(spec)
    if strategy is CredentialStrategy.DEFAULT_CHAIN:
        return DEFAULT_CHAIN_CREDENTIALS
    if strategy is CredentialStrategy.ASSUMED_ROLE:
        return IAM_ROLE_CREDENTIALS + spec.iam_role_arn
    return BASIC_AWS_CREDENTIALS
