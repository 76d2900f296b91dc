import os
from dataclasses import dataclass

import structlog
from dotenv import find_dotenv, load_dotenv

from .credentials import CodeBuildCredentials
from .models import CredentialSpec, ProxyConfig

logger = structlog.get_logger(__name__)


@dataclass
class Config:
    """Runtime configuration read from environment variables.

    A local ``.env`` file is loaded first (existing environment variables win).

    Credential inputs (all optional, empty means "not configured"):
        - CODEBUILD_ACCESS_KEY / CODEBUILD_SECRET_KEY: static key pair
          (falls back to the AWS default credential chain when either is empty)
        - CODEBUILD_IAM_ROLE_ARN: IAM role to assume on top of the base credential
        - CODEBUILD_EXTERNAL_ID: external id for the role's trust policy
        - CODEBUILD_PROXY_HOST / CODEBUILD_PROXY_PORT: HTTP(S) proxy for AWS calls

    Application settings:
        - AWS_REGION: region for STS and CodeBuild (default: botocore's own resolution)
        - LOG_LEVEL: logging level (default: INFO)
        - APP_ENV: "production" switches logs to JSON (default: development)
    """

    access_key: str = ""
    secret_key: str = ""
    proxy_host: str = ""
    proxy_port: str = ""
    iam_role_arn: str = ""
    external_id: str = ""
    aws_region: str = ""
    log_level: str = ""
    app_env: str = ""

    def __post_init__(self):
        load_dotenv(find_dotenv(usecwd=True))

        self.access_key = os.getenv("CODEBUILD_ACCESS_KEY", "")
        self.secret_key = os.getenv("CODEBUILD_SECRET_KEY", "")
        self.proxy_host = os.getenv("CODEBUILD_PROXY_HOST", "")
        self.proxy_port = os.getenv("CODEBUILD_PROXY_PORT", "")
        self.iam_role_arn = os.getenv("CODEBUILD_IAM_ROLE_ARN", "")
        self.external_id = os.getenv("CODEBUILD_EXTERNAL_ID", "")

        self.aws_region = os.getenv("AWS_REGION", "")
        self.log_level = os.getenv("LOG_LEVEL", "INFO")
        self.app_env = os.getenv("APP_ENV", os.getenv("ENVIRONMENT", "development"))

        if bool(self.access_key) != bool(self.secret_key):
            logger.warning(
                "Only one of CODEBUILD_ACCESS_KEY / CODEBUILD_SECRET_KEY is set; using the default credential chain",
                has_access_key=bool(self.access_key),
                has_secret_key=bool(self.secret_key),
            )

    @property
    def is_production(self) -> bool:
        return self.app_env.lower() == "production"

    def credential_spec(self) -> CredentialSpec:
        return CredentialSpec.from_form(
            access_key=self.access_key,
            secret_key=self.secret_key,
            proxy_host=self.proxy_host,
            proxy_port=self.proxy_port,
            iam_role_arn=self.iam_role_arn,
            external_id=self.external_id,
        )

    def proxy_config(self) -> ProxyConfig:
        """Parsed proxy settings.

        Raises:
            InvalidProxyPortError: If CODEBUILD_PROXY_PORT is not a non-negative integer
        """
        return ProxyConfig.parse(self.proxy_host, self.proxy_port)

    def build_credentials(self) -> CodeBuildCredentials:
        """Credential object for this configuration.

        Raises:
            InvalidProxyPortError: If CODEBUILD_PROXY_PORT is not a non-negative integer
        """
        return CodeBuildCredentials(spec=self.credential_spec(), region=self.aws_region or None)


def get_config() -> Config:
    return Config()
