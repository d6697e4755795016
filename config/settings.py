"""
Runtime settings for the Wise transfer pipeline.

Values come from environment variables. Locally they can be placed in
a .env file, which main.py loads with python-dotenv before building
the settings.
"""

import os
import logging
from dataclasses import dataclass
from typing import Optional

logger = logging.getLogger(__name__)

# Sandbox host; point WISE_API_URL at the live API to go to production
DEFAULT_BASE_URL = "https://api.sandbox.transferwise.tech"


@dataclass(frozen=True)
class Settings:
    """
    Connection settings injected into the API client.

    Attributes:
        api_token: Bearer token for the Wise API (may be empty, the API
            then rejects the first request)
        base_url: Scheme and host of the API, without trailing slash
        timeout: Request timeout in seconds, or None to wait indefinitely
    """

    api_token: str
    base_url: str = DEFAULT_BASE_URL
    timeout: Optional[float] = None

    @classmethod
    def from_env(cls) -> "Settings":
        """
        Build settings from the process environment.

        Reads:
            WISE_API_TOKEN: API token (not validated here)
            WISE_API_URL: Optional API base URL
            WISE_TIMEOUT: Optional request timeout in seconds

        Raises:
            ValueError: If WISE_TIMEOUT is not a positive number
        """
        base_url = os.environ.get('WISE_API_URL') or DEFAULT_BASE_URL

        return cls(
            api_token=os.environ.get('WISE_API_TOKEN', ''),
            base_url=base_url.rstrip('/'),
            timeout=_parse_timeout(os.environ.get('WISE_TIMEOUT')),
        )

    @property
    def has_token(self) -> bool:
        return bool(self.api_token)


def _parse_timeout(raw: Optional[str]) -> Optional[float]:
    """Parse WISE_TIMEOUT; empty means no timeout."""
    if raw is None or not raw.strip():
        return None

    try:
        timeout = float(raw)
    except ValueError:
        raise ValueError(f"Invalid WISE_TIMEOUT: '{raw}'. Expected seconds as a number")

    if timeout <= 0:
        raise ValueError(f"Invalid WISE_TIMEOUT: '{raw}'. Must be greater than zero")

    return timeout
