from dataclasses import dataclass
from typing import Any, Dict, Optional
from urllib.parse import urlsplit

from dataclasses_json import LetterCase, Undefined, dataclass_json

from .validation import InvalidProxyPortError, parse_port, sanitize

#: Session name for role assumption at build time
RUNTIME_SESSION_NAME = "CodeBuild-Jenkins-Plugin"

#: Session name for role assumption while validating a configuration form
VALIDATION_SESSION_NAME = "jenkins-codebuild-plugin"

#: Lifetime of assumed-role session credentials (1 hour)
DEFAULT_DURATION_SECONDS = 3600


@dataclass(frozen=True)
class CredentialSpec:
    """Configured inputs for credential resolution.

    Empty strings mean "not configured"; fields are never None. Build instances
    from user input with ``from_form`` so the sanitized fields are normalized.
    """

    access_key: str = ""
    secret_key: str = ""
    proxy_host: str = ""
    proxy_port: str = ""
    iam_role_arn: str = ""
    external_id: str = ""

    @classmethod
    def from_form(
        cls,
        access_key: Optional[str] = None,
        secret_key: Optional[str] = None,
        proxy_host: Optional[str] = None,
        proxy_port: Optional[str] = None,
        iam_role_arn: Optional[str] = None,
        external_id: Optional[str] = None,
    ) -> "CredentialSpec":
        # Only the key pair and role ARN are sanitized; proxy fields and the
        # external id are kept as entered.
        return cls(
            access_key=sanitize(access_key),
            secret_key=sanitize(secret_key),
            proxy_host=proxy_host or "",
            proxy_port=proxy_port or "",
            iam_role_arn=sanitize(iam_role_arn),
            external_id=external_id or "",
        )

    @property
    def has_key_pair(self) -> bool:
        return bool(self.access_key) and bool(self.secret_key)

    @property
    def has_role(self) -> bool:
        return bool(self.iam_role_arn)

    def proxy(self) -> "ProxyConfig":
        """Parse the proxy fields. Raises InvalidProxyPortError for a bad port."""
        return ProxyConfig.parse(self.proxy_host, self.proxy_port)

    def __repr__(self) -> str:
        return (
            f"CredentialSpec(access_key={self.access_key!r}, has_secret_key={bool(self.secret_key)}, "
            f"proxy_host={self.proxy_host!r}, proxy_port={self.proxy_port!r}, "
            f"iam_role_arn={self.iam_role_arn!r}, has_external_id={bool(self.external_id)})"
        )


@dataclass_json(letter_case=LetterCase.PASCAL, undefined=Undefined.EXCLUDE)
@dataclass(frozen=True)
class ResolvedCredential:
    """A usable credential: a key pair plus, for session credentials, a token.

    Field names map to the PascalCase keys of an STS ``Credentials`` block
    (``AccessKeyId``, ``SecretAccessKey``, ``SessionToken``), so
    ``ResolvedCredential.from_dict(response["Credentials"])`` works directly.
    """

    access_key_id: str
    secret_access_key: str
    session_token: Optional[str] = None

    @property
    def is_session(self) -> bool:
        return self.session_token is not None

    def client_kwargs(self) -> Dict[str, Any]:
        """Keyword arguments for ``boto3.client`` authenticating as this credential."""
        kwargs = {
            "aws_access_key_id": self.access_key_id,
            "aws_secret_access_key": self.secret_access_key,
        }
        if self.session_token is not None:
            kwargs["aws_session_token"] = self.session_token
        return kwargs

    def __repr__(self) -> str:
        # Never render the secret or token
        return f"ResolvedCredential(access_key_id={self.access_key_id!r}, is_session={self.is_session})"


@dataclass_json(letter_case=LetterCase.PASCAL)
@dataclass(frozen=True)
class AssumeRoleParams:
    """Parameters of a single STS AssumeRole exchange."""

    role_arn: str
    role_session_name: str
    external_id: str = ""
    duration_seconds: int = DEFAULT_DURATION_SECONDS

    def to_request(self) -> Dict[str, Any]:
        """Keyword arguments for ``sts.assume_role``.

        An empty external id is left out of the request rather than replaced;
        STS rejects a zero-length ExternalId.
        """
        request = self.to_dict()
        if not self.external_id:
            request.pop("ExternalId")
        return request


@dataclass(frozen=True)
class ProxyConfig:
    """HTTP(S) proxy used for STS and CodeBuild calls."""

    host: Optional[str] = None
    port: Optional[int] = None

    @classmethod
    def parse(cls, host: Optional[str], port: Optional[str]) -> "ProxyConfig":
        """Build from raw form strings.

        Raises:
            InvalidProxyPortError: If the port is not a non-negative integer, or
                the host already names a different port
        """
        host = (host or "").strip() or None
        parsed_port = parse_port(port)
        embedded_port = _host_port(host)
        if embedded_port is not None and parsed_port is not None and embedded_port != parsed_port:
            raise InvalidProxyPortError(port.strip())
        return cls(host=host, port=parsed_port)

    @property
    def is_configured(self) -> bool:
        return bool(self.host)

    def url(self) -> Optional[str]:
        """Proxy URL, or None when no host is configured (a bare port is ignored).

        A port already present in the host is kept and not appended twice.
        """
        if not self.host:
            return None
        base = _with_scheme(self.host)
        if self.port is None or _host_port(self.host) is not None:
            return base
        return f"{base}:{self.port}"


def _with_scheme(host: str) -> str:
    return host if "://" in host else f"http://{host}"


def _host_port(host: Optional[str]) -> Optional[int]:
    """Port written into a proxy host such as ``proxy.local:3128``, if any."""
    if not host:
        return None
    try:
        return urlsplit(_with_scheme(host)).port
    except ValueError as e:
        raise InvalidProxyPortError(host) from e
