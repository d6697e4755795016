"""
Fixed transfer parameters and request bodies.

The pipeline always sends 1000 SGD to the same GBP sort-code account.
These values are literals, not user input.
"""

from typing import Any, Dict, Union

SOURCE_CURRENCY = "SGD"
TARGET_CURRENCY = "GBP"
SOURCE_AMOUNT = 1000

# Both pay-in and pay-out must use this method for the display details
PAYMENT_METHOD = "BANK_TRANSFER"

# Profile tag the transfer is created under (compared case-insensitively)
PERSONAL_PROFILE_TYPE = "PERSONAL"

TRANSFER_REFERENCE = "Test Transfer"

RECIPIENT = {
    "accountHolderName": "GBP Person Name",
    "currency": TARGET_CURRENCY,
    "type": "sort_code",
    "details": {
        "legalType": "PRIVATE",
        "sortCode": "04-00-04",
        "accountNumber": "12345678",
    },
}


def build_quote_request() -> Dict[str, Any]:
    """Body for POST /v3/profiles/{profileId}/quotes."""
    return {
        "sourceCurrency": SOURCE_CURRENCY,
        "targetCurrency": TARGET_CURRENCY,
        "sourceAmount": SOURCE_AMOUNT,
    }


def build_recipient_request() -> Dict[str, Any]:
    """Body for POST /v1/accounts."""
    return {
        **RECIPIENT,
        "details": dict(RECIPIENT["details"]),
    }


def build_transfer_request(
    quote_id: str,
    recipient_id: Union[int, str],
    customer_transaction_id: str
) -> Dict[str, Any]:
    """
    Body for POST /v1/transfers.

    Args:
        quote_id: Quote UUID returned by the quote endpoint
        recipient_id: Account id returned by the recipient endpoint
        customer_transaction_id: Client-generated idempotency token

    Returns:
        JSON-serializable request body
    """
    return {
        "targetAccount": recipient_id,
        "quoteUuid": quote_id,
        "customerTransactionId": customer_transaction_id,
        "details": {
            "reference": TRANSFER_REFERENCE,
        },
    }
