"""Authentication schemas."""

from pydantic import Field, model_validator

from school_admin.core.schemas import CamelModel

LOGIN_FIELDS_REQUIRED = "Username or email and password are required."


class LoginRequest(CamelModel):
    """Login request schema. Either ``username`` or ``email`` identifies the account."""

    username: str | None = Field(None, max_length=100)
    email: str | None = Field(None, max_length=255)
    password: str | None = Field(None, max_length=128)

    @model_validator(mode="after")
    def require_identifier_and_password(self) -> "LoginRequest":
        if not (self.username or self.email) or not self.password:
            raise ValueError(LOGIN_FIELDS_REQUIRED)
        return self


class RefreshRequest(CamelModel):
    """Refresh request schema. A missing token is reported by the service."""

    long_token: str | None = None


class LoginData(CamelModel):
    """Payload returned by a successful login."""

    username: str
    role: str
    long_token: str
    short_token: str


class RefreshData(CamelModel):
    """Payload returned by a successful refresh."""

    short_token: str
