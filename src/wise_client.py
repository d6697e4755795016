"""
Wise API client.

Pure I/O: each method makes one authenticated HTTP call, validates the
response against its model and returns it. No retries and no rate
limiting; failures are logged and re-raised as WiseAPIError.
"""

import logging
from decimal import Decimal
from typing import Any, Dict, List, Optional

import requests

from config.settings import Settings
from config.transfer import (
    build_quote_request,
    build_recipient_request,
    build_transfer_request,
)
from src.models import (
    EntityId,
    Profile,
    Quote,
    Recipient,
    Transfer,
    parse_profiles,
)

logger = logging.getLogger(__name__)

# API paths
PROFILES_PATH = "/v2/profiles"
QUOTES_PATH_TEMPLATE = "/v3/profiles/{profile_id}/quotes"
ACCOUNTS_PATH = "/v1/accounts"
TRANSFERS_PATH = "/v1/transfers"

TRACE_ID_HEADER = "x-trace-id"


class WiseAPIError(Exception):
    """
    Error raised when a Wise API call fails at the transport level.

    Covers HTTP error statuses, connection failures and bodies that
    are not valid JSON.

    Attributes:
        status_code: HTTP status, or None if no response was received
        trace_id: Value of the x-trace-id response header, if present
        body: Decoded error body (or raw text), if any
    """

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        trace_id: Optional[str] = None,
        body: Any = None
    ):
        super().__init__(message)
        self.status_code = status_code
        self.trace_id = trace_id
        self.body = body


class WiseClient:
    """
    Client for the four Wise endpoints the transfer pipeline uses.

    The credential comes from the injected Settings. A session can be
    injected too, which is how the tests avoid the network.
    """

    def __init__(self, settings: Settings, session: Optional[requests.Session] = None):
        self.settings = settings
        self.session = session or self._create_session()

    def _create_session(self) -> requests.Session:
        """Create an HTTP session carrying the auth and content-type headers."""
        session = requests.Session()
        session.headers.update({
            "Content-Type": "application/json",
            "Authorization": f"Bearer {self.settings.api_token}",
        })
        return session

    # ============================================================
    # Endpoints
    # ============================================================

    def list_profiles(self) -> List[Profile]:
        """
        Fetch all profiles of the authenticated user.

        Raises:
            WiseAPIError: On transport failure
            SchemaError: If the response is not a list of profiles
        """
        data = self._request("GET", PROFILES_PATH)
        profiles = parse_profiles(data)
        logger.info(f"Fetched {len(profiles)} profile(s)")
        return profiles

    def create_quote(self, profile_id: EntityId) -> Quote:
        """
        Create a SGD to GBP quote under the given profile.

        Args:
            profile_id: Profile the quote belongs to

        Raises:
            WiseAPIError: On transport failure
            SchemaError: If the quote has no id
        """
        path = QUOTES_PATH_TEMPLATE.format(profile_id=profile_id)
        data = self._request("POST", path, body=build_quote_request())
        return Quote.from_dict(data)

    def create_recipient(self) -> Recipient:
        """
        Register the fixed GBP sort-code account as a recipient.

        Raises:
            WiseAPIError: On transport failure
            SchemaError: If the recipient has no id
        """
        data = self._request("POST", ACCOUNTS_PATH, body=build_recipient_request())
        return Recipient.from_dict(data)

    def create_transfer(
        self,
        quote_id: str,
        recipient_id: EntityId,
        customer_transaction_id: str
    ) -> Transfer:
        """
        Create a transfer for a quote and recipient.

        Args:
            quote_id: Quote UUID
            recipient_id: Recipient account id
            customer_transaction_id: Idempotency token, unique per attempt

        Raises:
            WiseAPIError: On transport failure
            SchemaError: If the transfer has no id
        """
        body = build_transfer_request(quote_id, recipient_id, customer_transaction_id)
        data = self._request("POST", TRANSFERS_PATH, body=body)
        return Transfer.from_dict(data)

    # ============================================================
    # Transport
    # ============================================================

    def _request(self, method: str, path: str, body: Optional[Dict[str, Any]] = None) -> Any:
        """
        Send one request and decode the JSON response.

        Numbers with a fractional part are decoded as Decimal.

        Raises:
            WiseAPIError: On HTTP error status, connection failure or
                invalid JSON
        """
        url = f"{self.settings.base_url}{path}"
        logger.debug(f"{method} {url}")

        try:
            response = self.session.request(
                method,
                url,
                json=body,
                timeout=self.settings.timeout,
            )
            response.raise_for_status()
        except requests.RequestException as e:
            raise self._log_error(method, url, e, getattr(e, 'response', None)) from e

        try:
            return response.json(parse_float=Decimal)
        except ValueError as e:
            raise self._log_error(method, url, e, response) from e

    def _log_error(
        self,
        method: str,
        url: str,
        error: Exception,
        response: Optional[requests.Response]
    ) -> WiseAPIError:
        """Log status, trace id and body of a failed call and wrap it."""
        if response is None:
            logger.error(f"{method} {url} failed without a response: {error}")
            return WiseAPIError(f"{method} {url} failed: {error}")

        status_code = response.status_code
        trace_id = response.headers.get(TRACE_ID_HEADER)
        body = _decode_body(response)

        logger.error(f"Status {status_code}")
        if trace_id:
            logger.error(f"Trace ID: {trace_id}")
        logger.error(f"Response body: {body}")

        return WiseAPIError(
            f"{method} {url} failed with status {status_code}",
            status_code=status_code,
            trace_id=trace_id,
            body=body,
        )


def _decode_body(response: requests.Response) -> Any:
    """Return the JSON error body, falling back to raw text."""
    try:
        return response.json()
    except ValueError:
        return response.text
