"""Request and response bodies exchanged with the backend's HTTP API.

The backend speaks camelCase; dump request models with ``by_alias=True``.
"""

from enum import StrEnum

from pydantic import BaseModel, ConfigDict, EmailStr, field_validator
from pydantic.alias_generators import to_camel

DEFAULT_TIMEZONE = "America/Denver"


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class RegisterRequest(_CamelModel):
    first_name: str
    last_name: str
    email: EmailStr
    password: str
    timezone: str = DEFAULT_TIMEZONE
    terms_accepted: bool = True

    @field_validator("password")
    @classmethod
    def password_min_length(cls, v: str) -> str:
        if len(v) < 8:
            raise ValueError("Password must be at least 8 characters")
        return v


class LoginRequest(_CamelModel):
    email: EmailStr
    password: str
    remember_me: bool = False


class LoginResponse(BaseModel):
    model_config = ConfigDict(extra="ignore")

    token: str


class AuthenticateRequest(_CamelModel):
    """Body of the legacy ``/api/authenticate`` endpoint used by :class:`ApiHelper`."""

    username: str
    password: str
    remember_me: bool = False


class HealthStatus(StrEnum):
    UP = "UP"
    DOWN = "DOWN"


class BackendHealth(BaseModel):
    model_config = ConfigDict(extra="allow")

    status: HealthStatus = HealthStatus.DOWN
    components: dict | None = None
