"""User domain entity."""

from typing import Any

from pydantic import Field

from src.catalog.entities.core._base import Entity


class User(Entity):
    """User entity representing a person who signs in to the catalog.

    The catalog never mutates users; it only reads the name for display and
    ``is_admin`` for authorization decisions.
    """

    first_name: str = Field(description="User's first name")
    last_name: str = Field(description="User's last name")
    email: str | None = Field(default=None, description="User's email address")
    is_admin: bool = Field(default=False, description="Whether the user may manage products")

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()

    def __eq__(self, other: Any) -> bool:
        """Compare users by business attributes, ignoring timestamps."""
        if not isinstance(other, User):
            return False

        return (
            self.id == other.id
            and self.first_name == other.first_name
            and self.last_name == other.last_name
            and self.email == other.email
            and self.is_admin == other.is_admin
        )

    def __hash__(self) -> int:
        """Hash based on business attributes, ignoring timestamps."""
        return hash((
            self.id,
            self.first_name,
            self.last_name,
            self.email,
            self.is_admin,
        ))
