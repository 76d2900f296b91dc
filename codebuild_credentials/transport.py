"""Client configuration for STS and CodeBuild calls."""

from typing import Optional

import boto3
import structlog
from botocore.config import Config as BotocoreConfig

from .models import ProxyConfig

logger = structlog.get_logger(__name__)

#: Region used when none is configured anywhere
DEFAULT_REGION = "us-east-1"


def get_client_config(proxy: Optional[ProxyConfig] = None) -> BotocoreConfig:
    """Build the botocore client configuration for an optional proxy.

    Args:
        proxy: Proxy host/port; None or a host-less value means a direct connection

    Returns:
        BotocoreConfig routing http and https through the proxy when configured
    """
    if proxy is None or not proxy.is_configured:
        if proxy is not None and proxy.port is not None:
            logger.debug("Proxy port set without a proxy host, ignoring", proxy_port=proxy.port)
        return BotocoreConfig()

    proxy_url = proxy.url()
    logger.debug("Routing AWS calls through proxy", proxy_host=proxy.host, proxy_port=proxy.port)
    return BotocoreConfig(proxies={"http": proxy_url, "https": proxy_url})


def resolve_region(region: Optional[str] = None) -> str:
    """Pick the region for a regional client such as CodeBuild.

    Explicit region first, then the region botocore resolves from the
    environment and shared config, then the SDK's historical default endpoint.
    """
    if region:
        return region
    return boto3.Session().region_name or DEFAULT_REGION
