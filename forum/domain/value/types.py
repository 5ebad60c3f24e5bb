"""Domain value objects for the forum.

Value objects are immutable and defined by their values, not identity.
They encapsulate validation rules and business logic.
"""

import re
from enum import Enum, IntEnum

from pydantic import field_validator

from forum.domain.value.common import RootValueObject


class VoteValue(IntEnum):
    """A voter's stance on a target.

    There is no neutral value: "no vote" is the absence of a Vote row.
    """

    UP = 1
    DOWN = -1


class VoteOutcome(str, Enum):
    """Which toggle transition a cast applied."""

    CREATED = "created"  # no vote -> vote
    SWITCHED = "switched"  # opposite value updated in place
    RETRACTED = "retracted"  # same value cast again, vote removed


class VotableType(str, Enum):
    """Type of entity that can be voted on."""

    QUESTION = "question"
    ANSWER = "answer"


class UserRole(str, Enum):
    """User role; administrators may edit/delete any question or answer."""

    USER = "user"
    ADMIN = "admin"


class TagName(RootValueObject[str]):
    """Tag name for categorizing questions.

    Must be lowercase, alphanumeric with hyphens/dots/pluses, 1-30 characters.
    Examples: 'python', 'react', 'c++', 'node.js'
    """

    @field_validator("root")
    @classmethod
    def validate_tag_name(cls, v: str) -> str:
        """Validate tag name format."""
        if not re.match(r"^[a-z0-9][a-z0-9.+#-]{0,29}$", v):
            raise ValueError(
                "Tag name must be 1-30 characters, lowercase, alphanumeric "
                "with '-', '.', '+' or '#'"
            )
        return v

    @classmethod
    def normalize(cls, raw: str) -> "TagName":
        """Build a tag name from user input (trimmed and lower-cased)."""
        return cls(raw.strip().lower())


class Handle(RootValueObject[str]):
    """User handle shown next to questions and answers."""

    @field_validator("root")
    @classmethod
    def validate_handle_format(cls, v: str) -> str:
        """Validate handle is not empty and within length limits."""
        if len(v) < 1 or len(v) > 50:
            raise ValueError("Handle must be 1-50 characters")
        return v
