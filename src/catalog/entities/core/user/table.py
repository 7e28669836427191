"""User database table model."""

from sqlmodel import Field

from src.catalog.entities.core._base import EntityTable


class UserTable(EntityTable, table=True):
    """Database persistence model for users."""

    __tablename__ = "users"

    first_name: str
    last_name: str
    email: str | None = Field(default=None, index=True)
    is_admin: bool = Field(default=False)
