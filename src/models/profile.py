"""
Profile model for the Wise profiles endpoint.

A user has one personal profile and optionally business profiles.
Quotes are always created under a profile.
"""

from dataclasses import dataclass
from typing import Any, List, Optional

from config.transfer import PERSONAL_PROFILE_TYPE

from .schema import EntityId, SchemaError, ensure_object, require_id, optional_str


@dataclass(frozen=True)
class Profile:
    """
    Account-holder context returned by GET /v2/profiles.

    Attributes:
        id: Profile identifier
        type: Profile tag as returned by the API ("PERSONAL", "BUSINESS",
            sometimes lowercase), or None when absent
    """

    id: EntityId
    type: Optional[str] = None

    @property
    def is_personal(self) -> bool:
        """Return True if the type tag is "personal" in any letter case."""
        if not self.type:
            return False
        return self.type.upper() == PERSONAL_PROFILE_TYPE

    @classmethod
    def from_dict(cls, data: Any) -> "Profile":
        """
        Create a Profile from a decoded response entry.

        Raises:
            SchemaError: If the entry is not an object or has no id
        """
        data = ensure_object(data, "profile")
        return cls(
            id=require_id(data, "profile"),
            type=optional_str(data, 'type'),
        )


def parse_profiles(data: Any) -> List[Profile]:
    """
    Parse the profiles collection.

    An empty list is valid here; deciding that no profiles is fatal
    belongs to the pipeline.

    Raises:
        SchemaError: If the response is not a list or an entry is invalid
    """
    if not isinstance(data, list):
        raise SchemaError(
            f"Invalid profiles response: expected a list, got {type(data).__name__}"
        )
    return [Profile.from_dict(entry) for entry in data]
