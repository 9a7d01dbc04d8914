# backend/storefront/models/user.py
import enum
from typing import Any, Mapping

from pydantic import BaseModel, ConfigDict, Field


class UserRole(str, enum.Enum):
    ADMIN = "admin"
    USER = "user"


class UserRecord(BaseModel):
    """An admin account stored in the ``users`` collection."""

    model_config = ConfigDict(populate_by_name=True)

    id: str
    username: str
    password_hash: str = Field(default="", alias="passwordHash")
    role: str = UserRole.ADMIN.value
    email: str = ""
    active: bool = True
    created_at: str | None = Field(default=None, alias="createdAt")

    @classmethod
    def from_record(cls, record: Mapping[str, Any]) -> "UserRecord":
        """Build from a decoded document, applying defaults for absent fields."""
        return cls.model_validate({k: v for k, v in record.items() if v is not None})

    def public_dict(self) -> dict[str, Any]:
        """Serialisable view without the password hash."""
        return self.model_dump(by_alias=True, exclude={"password_hash"})
