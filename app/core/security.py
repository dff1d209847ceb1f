"""DocCenter — Webhook Authorization."""

import hmac
import re
from typing import Optional

BEARER_PATTERN = re.compile(r"Bearer\s(\S+)")


def extract_bearer_token(authorization: Optional[str]) -> Optional[str]:
    """Pull the token out of an ``Authorization: Bearer <token>`` header."""
    if not authorization:
        return None
    match = BEARER_PATTERN.search(authorization)
    return match.group(1) if match else None


def validate_authorization_header(authorization: Optional[str], secret: str) -> bool:
    """Check the bearer token against the shared webhook secret.

    An unconfigured secret never validates.
    """
    token = extract_bearer_token(authorization)
    if token is None or not secret:
        return False
    return hmac.compare_digest(token.encode(), secret.encode())
