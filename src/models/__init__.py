"""
Data models for Wise API responses.

Each endpoint response is parsed into a typed dataclass so that
missing fields are caught at the API boundary instead of deep inside
the pipeline.
"""

from .schema import SchemaError, EntityId
from .profile import Profile, parse_profiles
from .quote import Quote, PaymentOption
from .transfer import Recipient, Transfer

__all__ = [
    'SchemaError',
    'EntityId',
    'Profile',
    'parse_profiles',
    'Quote',
    'PaymentOption',
    'Recipient',
    'Transfer',
]
