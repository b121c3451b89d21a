from datetime import datetime, timezone
from enum import Enum
from typing import ClassVar, Optional, Set, Tuple

from pydantic import BaseModel, Field, field_validator


# =============================================================================
#   Role
# =============================================================================
class Role(str, Enum):
    """Access level granted to a user."""

    ROLE_VIEWER = "VIEWER"
    ROLE_EDITOR = "EDITOR"
    ROLE_ADMIN = "ADMIN"


# =============================================================================
#   User
# =============================================================================
class User(BaseModel):
    """A registered account, stored as one document in the ``users`` collection.

    ``username`` and ``email`` are unique across the collection.
    """

    COLLECTION: ClassVar[str] = "users"
    UNIQUE_FIELDS: ClassVar[Tuple[str, ...]] = ("username", "email")

    id: Optional[str] = None
    username: str
    email: str
    password: Optional[str] = None
    firstName: Optional[str] = None
    lastName: Optional[str] = None

    roles: Set[Role] = Field(default_factory=lambda: {Role.ROLE_VIEWER})

    urlCreationLimit: int = Field(default=10, ge=0, description="Daily limit for URL creation.")
    urlCreatedCount: int = Field(default=0, ge=0, description="Total URLs created by the user.")

    apiKey: Optional[str] = Field(default=None, description="API key for programmatic access.")
    premiumAccount: bool = False
    accountLocked: bool = False

    createdAt: datetime = Field(default_factory=lambda: datetime.now(tz=timezone.utc))
    updatedAt: Optional[datetime] = None
    lastLoginAt: Optional[datetime] = None

    @field_validator("username", "email")
    def check_not_empty(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("username and email cannot be empty")
        return v
