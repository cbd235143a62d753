"""User Schemas — Pydantic read model and request body for the users API.

Invariants:
    - UserResponse exposes login + email only (lecture membership has its own endpoint)
    - EmailUpdate.email: stripped, 3-254 chars, local@domain shape

Design Decisions:
    - Pattern check over EmailStr: no extra dependency for a shape check; uniqueness
      is the real rule and lives in core/enforce_registration
"""

from pydantic import BaseModel, Field, field_validator


class UserResponse(BaseModel):
    """User read model — public-facing user data."""
    login: str
    email: str


class EmailUpdate(BaseModel):
    """Email change request for a single user."""
    email: str = Field(
        min_length=3, max_length=254, pattern=r"^[^@\s]+@[^@\s]+$",
    )

    @field_validator("email", mode="before")
    @classmethod
    def strip_email(cls, v: str) -> str:
        return v.strip() if isinstance(v, str) else v
