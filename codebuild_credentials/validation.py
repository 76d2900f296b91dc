"""Sanitization helpers for user-supplied credential fields.

Values arrive from forms and environment variables, so they may be ``None``,
padded with whitespace, or carry stray control characters from copy/paste.

Usage:
    from codebuild_credentials.validation import sanitize, parse_port

    access_key = sanitize(raw_access_key)
    port = parse_port("8080")
"""

import re
from typing import Optional

# Descriptor labels shown next to a configured credential
DEFAULT_CHAIN_CREDENTIALS = "default credentials provider chain"
BASIC_AWS_CREDENTIALS = "basic AWS credentials"
IAM_ROLE_CREDENTIALS = "IAM role: "

_CONTROL_CHARS = re.compile(r"[\x00-\x1f\x7f]")


class InvalidProxyPortError(ValueError):
    """Raised when a configured proxy port is not a non-negative integer."""

    def __init__(self, value: str):
        super().__init__(f"Invalid proxy port: {value!r} (expected a non-negative integer)")
        self.value = value


def sanitize(value: Optional[str]) -> str:
    """Normalize a form value to a clean string.

    Args:
        value: Raw value, possibly None

    Returns:
        The value with control characters removed and surrounding whitespace
        stripped. ``None`` becomes the empty string, which is the "not
        configured" sentinel everywhere in this package.
    """
    if value is None:
        return ""
    return _CONTROL_CHARS.sub("", value).strip()


def parse_port(value: Optional[str]) -> Optional[int]:
    """Parse a proxy port string.

    Args:
        value: Raw port string; empty or None means "no port configured"

    Returns:
        The port as an int, or None when not configured

    Raises:
        InvalidProxyPortError: If the value is not a non-negative integer
    """
    text = (value or "").strip()
    if not text:
        return None

    # Digits only: rejects signs, underscores and non-ASCII numerals int() would accept
    if not (text.isascii() and text.isdigit()):
        raise InvalidProxyPortError(text)
    return int(text)
