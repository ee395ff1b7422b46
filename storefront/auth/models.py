"""
Session models.

``SessionUser`` mirrors the user record persisted under
``StorageKeys.CURRENT_USER`` (camelCase keys). Unknown fields sent by the
backend are kept so a round trip through storage does not lose them.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Literal, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


def _as_text(v: Any) -> Optional[str]:
    """Strings pass, numbers become strings, anything else reads as missing."""
    if isinstance(v, str):
        return v
    if isinstance(v, (int, float)) and not isinstance(v, bool):
        return str(v)
    return None


class SessionState(str, Enum):
    """Authentication lifecycle."""
    ANONYMOUS = "anonymous"
    AUTHENTICATING = "authenticating"
    AUTHENTICATED = "authenticated"


class Address(BaseModel):
    """Postal address attached to a user profile."""

    model_config = ConfigDict(extra="allow")

    street: str = ""
    city: str = ""
    state: str = ""
    pincode: str = ""
    country: Optional[str] = None

    @field_validator("street", "city", "state", "pincode", mode="before")
    @classmethod
    def coerce_text(cls, v: Any) -> str:
        return _as_text(v) or ""

    @field_validator("country", mode="before")
    @classmethod
    def coerce_optional_text(cls, v: Any) -> Optional[str]:
        return _as_text(v)


class SessionUser(BaseModel):
    """Authenticated user snapshot."""

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    id: str
    email: str
    name: str = ""
    phone: Optional[str] = None
    role: Literal["user", "admin"] = "user"
    address: Optional[Address] = None
    created_at: str = Field(default="", alias="createdAt")
    date_of_birth: Optional[str] = Field(default=None, alias="dateOfBirth")
    gender: Optional[str] = None
    bio: Optional[str] = None

    # Backends are loose about types: numeric ids and phones, null names.
    # Only id and email must be present.

    @field_validator("id", "email", mode="before")
    @classmethod
    def coerce_required_text(cls, v: Any) -> Any:
        text = _as_text(v)
        return text if text else v

    @field_validator("name", "created_at", mode="before")
    @classmethod
    def coerce_text(cls, v: Any) -> str:
        return _as_text(v) or ""

    @field_validator("phone", "date_of_birth", "gender", "bio", mode="before")
    @classmethod
    def coerce_optional_text(cls, v: Any) -> Optional[str]:
        return _as_text(v)

    @field_validator("role", mode="before")
    @classmethod
    def default_role(cls, v: Any) -> str:
        return "admin" if v == "admin" else "user"

    @field_validator("address", mode="before")
    @classmethod
    def drop_malformed_address(cls, v: Any) -> Any:
        return v if isinstance(v, (dict, Address)) else None

    @property
    def is_admin(self) -> bool:
        return self.role == "admin"

    def to_record(self) -> dict:
        """Persisted JSON shape."""
        return self.model_dump(by_alias=True, exclude_none=True)

    def merged(self, changes: Mapping[str, Any]) -> "SessionUser":
        """Shallow merge; accepts field names or their camelCase aliases."""
        record = self.to_record()
        for key, value in changes.items():
            field = type(self).model_fields.get(key)
            record[field.alias or key if field else key] = value
        return type(self).model_validate(record)


@dataclass
class LoginResult:
    """Outcome of a login or registration attempt."""
    user: Optional[SessionUser] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None
