"""
Quote and payment option models for the Wise quotes endpoint.

A quote prices a currency conversion. Each payment option is one
pay-in/pay-out combination with its own amount, fee and delivery
estimate.
"""

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any, Dict, List, Optional

from .schema import (
    SchemaError,
    ensure_object,
    require_id,
    optional_str,
    optional_decimal,
)


@dataclass(frozen=True)
class PaymentOption:
    """
    One way of paying for a quote.

    Attributes:
        pay_in: How the sender funds the transfer (e.g. "BANK_TRANSFER")
        pay_out: How the recipient is paid (e.g. "BANK_TRANSFER")
        source_currency: Currency the fee is charged in
        target_currency: Currency the recipient receives
        target_amount: Amount the recipient receives
        fee_total: Total fee in source currency
        formatted_estimated_delivery: Human-readable delivery estimate
    """

    pay_in: Optional[str] = None
    pay_out: Optional[str] = None
    source_currency: Optional[str] = None
    target_currency: Optional[str] = None
    target_amount: Optional[Decimal] = None
    fee_total: Optional[Decimal] = None
    formatted_estimated_delivery: Optional[str] = None

    def matches(self, method: str) -> bool:
        """Return True if both pay-in and pay-out use the given method."""
        return self.pay_in == method and self.pay_out == method

    @classmethod
    def from_dict(cls, data: Any) -> "PaymentOption":
        data = ensure_object(data, "payment option")

        fee = data.get('fee') or {}
        if not isinstance(fee, dict):
            raise SchemaError("Invalid 'fee' in payment option: expected an object")

        return cls(
            pay_in=optional_str(data, 'payIn'),
            pay_out=optional_str(data, 'payOut'),
            source_currency=optional_str(data, 'sourceCurrency'),
            target_currency=optional_str(data, 'targetCurrency'),
            target_amount=optional_decimal(data, 'targetAmount'),
            fee_total=optional_decimal(fee, 'total'),
            formatted_estimated_delivery=optional_str(data, 'formattedEstimatedDelivery'),
        )


@dataclass(frozen=True)
class Quote:
    """
    Priced conversion returned by POST /v3/profiles/{profileId}/quotes.

    Only the id is required. Everything else is informational and may
    be missing from a sandbox response.
    """

    id: str
    rate: Optional[Decimal] = None
    source_currency: Optional[str] = None
    target_currency: Optional[str] = None
    source_amount: Optional[Decimal] = None
    payment_options: List[PaymentOption] = field(default_factory=list)

    def find_payment_option(self, method: str) -> Optional[PaymentOption]:
        """
        Find the first option paid in and out with the given method.

        Returns:
            The matching PaymentOption, or None if no option matches
        """
        for option in self.payment_options:
            if option.matches(method):
                return option
        return None

    @classmethod
    def from_dict(cls, data: Any) -> "Quote":
        """
        Create a Quote from the decoded response.

        Raises:
            SchemaError: If the response has no id or malformed options
        """
        data = ensure_object(data, "quote")

        raw_options = data.get('paymentOptions') or []
        if not isinstance(raw_options, list):
            raise SchemaError("Invalid 'paymentOptions' in quote: expected a list")

        return cls(
            id=require_id(data, "quote"),
            rate=optional_decimal(data, 'rate'),
            source_currency=optional_str(data, 'sourceCurrency'),
            target_currency=optional_str(data, 'targetCurrency'),
            source_amount=optional_decimal(data, 'sourceAmount'),
            payment_options=[PaymentOption.from_dict(o) for o in raw_options],
        )

    def to_dict(self) -> Dict[str, Any]:
        """Summary of the quote for logging."""
        return {
            "id": self.id,
            "rate": self.rate,
            "sourceCurrency": self.source_currency,
            "targetCurrency": self.target_currency,
            "sourceAmount": self.source_amount,
            "paymentOptions": len(self.payment_options),
        }
