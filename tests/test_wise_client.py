"""
Unit tests for the Wise API client.

Run with: pytest tests/test_wise_client.py -v

All tests inject a FakeSession, so no request leaves the machine.
"""

import sys
import logging
from pathlib import Path
from decimal import Decimal

import pytest
import requests

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from config.settings import Settings
from src.models import SchemaError
from src.wise_client import WiseClient, WiseAPIError

from fakes import FakeResponse, FakeSession

BASE_URL = "https://api.sandbox.transferwise.tech"


def make_client(*responses, timeout=None):
    session = FakeSession(responses)
    settings = Settings(api_token="test-token", base_url=BASE_URL, timeout=timeout)
    return WiseClient(settings, session=session), session


class TestSession:
    """Tests for the default session."""

    def test_default_session_headers(self):
        """Test that the bearer token and content type are sent on every call."""
        client = WiseClient(Settings(api_token="secret"))

        assert client.session.headers["Authorization"] == "Bearer secret"
        assert client.session.headers["Content-Type"] == "application/json"

    def test_timeout_from_settings(self):
        """Test that the configured timeout is passed to the session."""
        client, session = make_client(FakeResponse(payload=[]), timeout=15.0)

        client.list_profiles()

        assert session.calls[0]["timeout"] == 15.0


class TestEndpoints:
    """Tests for the four endpoint methods."""

    def test_list_profiles(self):
        """Test GET /v2/profiles."""
        client, session = make_client(FakeResponse(payload=[
            {"id": 1, "type": "personal"},
            {"id": 2, "type": "business"},
        ]))

        profiles = client.list_profiles()

        assert [p.id for p in profiles] == [1, 2]
        assert session.calls[0]["method"] == "GET"
        assert session.calls[0]["url"] == f"{BASE_URL}/v2/profiles"
        assert session.calls[0]["json"] is None

    def test_create_quote(self):
        """Test POST /v3/profiles/{id}/quotes with the fixed SGD->GBP body."""
        client, session = make_client(FakeResponse(payload={
            "id": "q1",
            "rate": 5.123456,
            "paymentOptions": [],
        }))

        quote = client.create_quote("p2")

        assert quote.id == "q1"
        assert quote.rate == Decimal("5.123456")
        assert session.calls[0]["method"] == "POST"
        assert session.calls[0]["url"] == f"{BASE_URL}/v3/profiles/p2/quotes"
        assert session.calls[0]["json"] == {
            "sourceCurrency": "SGD",
            "targetCurrency": "GBP",
            "sourceAmount": 1000,
        }

    def test_create_recipient(self):
        """Test POST /v1/accounts with the fixed sort-code account."""
        client, session = make_client(FakeResponse(payload={"id": "r1"}))

        recipient = client.create_recipient()

        assert recipient.id == "r1"
        body = session.calls[0]["json"]
        assert session.calls[0]["url"] == f"{BASE_URL}/v1/accounts"
        assert body["type"] == "sort_code"
        assert body["currency"] == "GBP"
        assert body["details"]["sortCode"] == "04-00-04"
        assert body["details"]["accountNumber"] == "12345678"

    def test_create_transfer(self):
        """Test POST /v1/transfers carries quote, recipient and token."""
        client, session = make_client(FakeResponse(payload={"id": "t1", "status": "processing"}))

        transfer = client.create_transfer("q1", "r1", "token-1")

        assert transfer.id == "t1"
        assert transfer.status == "processing"
        assert session.calls[0]["url"] == f"{BASE_URL}/v1/transfers"
        assert session.calls[0]["json"] == {
            "targetAccount": "r1",
            "quoteUuid": "q1",
            "customerTransactionId": "token-1",
            "details": {"reference": "Test Transfer"},
        }

    def test_quote_without_id_raises_schema_error(self):
        """Test that the response is validated at the client boundary."""
        client, _ = make_client(FakeResponse(payload={"rate": 5.1}))

        with pytest.raises(SchemaError):
            client.create_quote("p2")


class TestErrors:
    """Tests for transport failures."""

    def test_http_error_is_logged_and_wrapped(self, caplog):
        """Test status, trace id and body are logged and kept on the error."""
        client, _ = make_client(FakeResponse(
            status_code=401,
            payload={"error": "invalid_token"},
            headers={"x-trace-id": "trace-123"},
        ))

        with caplog.at_level(logging.ERROR):
            with pytest.raises(WiseAPIError) as exc_info:
                client.list_profiles()

        error = exc_info.value
        assert error.status_code == 401
        assert error.trace_id == "trace-123"
        assert error.body == {"error": "invalid_token"}
        assert isinstance(error.__cause__, requests.HTTPError)

        assert "Status 401" in caplog.text
        assert "Trace ID: trace-123" in caplog.text
        assert "invalid_token" in caplog.text

    def test_http_error_without_trace_id(self, caplog):
        """Test that the trace id line is left out when the header is absent."""
        client, _ = make_client(FakeResponse(status_code=500, payload=None, text="oops"))

        with caplog.at_level(logging.ERROR):
            with pytest.raises(WiseAPIError) as exc_info:
                client.create_recipient()

        assert exc_info.value.trace_id is None
        assert exc_info.value.body == "oops"
        assert "Trace ID" not in caplog.text

    def test_connection_error(self):
        """Test that a network failure becomes a WiseAPIError without status."""
        client, _ = make_client(requests.ConnectionError("connection refused"))

        with pytest.raises(WiseAPIError) as exc_info:
            client.create_transfer("q1", "r1", "token-1")

        assert exc_info.value.status_code is None
        assert "connection refused" in str(exc_info.value)

    def test_invalid_json_body(self, caplog):
        """Test that a 200 without JSON is a transport failure that keeps its status."""
        client, _ = make_client(FakeResponse(
            payload=None,
            text="<html>",
            headers={"x-trace-id": "trace-9"},
        ))

        with caplog.at_level(logging.ERROR):
            with pytest.raises(WiseAPIError) as exc_info:
                client.list_profiles()

        assert exc_info.value.status_code == 200
        assert exc_info.value.trace_id == "trace-9"
        assert exc_info.value.body == "<html>"
        assert "Status 200" in caplog.text
        assert "without a response" not in caplog.text

    def test_no_retry_after_failure(self):
        """Test that a failed call is not repeated."""
        client, session = make_client(
            FakeResponse(status_code=503, payload={"error": "unavailable"}),
            FakeResponse(payload=[]),
        )

        with pytest.raises(WiseAPIError):
            client.list_profiles()

        assert len(session.calls) == 1
