"""
Recipient and transfer models.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from .schema import EntityId, ensure_object, require_id, optional_str


@dataclass(frozen=True)
class Recipient:
    """Bank account registered by POST /v1/accounts."""

    id: EntityId
    account_holder_name: Optional[str] = None
    currency: Optional[str] = None
    type: Optional[str] = None
    details: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Any) -> "Recipient":
        data = ensure_object(data, "recipient")
        details = data.get('details')

        return cls(
            id=require_id(data, "recipient"),
            account_holder_name=optional_str(data, 'accountHolderName'),
            currency=optional_str(data, 'currency'),
            type=optional_str(data, 'type'),
            details=details if isinstance(details, dict) else {},
        )


@dataclass(frozen=True)
class Transfer:
    """Transfer created by POST /v1/transfers."""

    id: EntityId
    status: Optional[str] = None

    @property
    def status_display(self) -> str:
        return self.status or "Unknown"

    @classmethod
    def from_dict(cls, data: Any) -> "Transfer":
        data = ensure_object(data, "transfer")
        return cls(
            id=require_id(data, "transfer"),
            status=optional_str(data, 'status'),
        )
