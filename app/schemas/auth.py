"""Request/response schemas for auth endpoints."""

from pydantic import BaseModel, EmailStr, Field, ValidationInfo, field_validator

from app.core.security import PASSWORD_MAX_LEN, PASSWORD_MIN_LEN
from app.schemas.user import Gender, UserOut

EMAIL_MAX_LEN = 255


def normalize_email(value: str) -> str:
    """Canonical form used for storage and lookup: trimmed and lowercased."""
    return value.strip().lower()


def _check_email_length(value: str) -> str:
    if len(value) > EMAIL_MAX_LEN:
        raise ValueError(f"email must be at most {EMAIL_MAX_LEN} characters")
    return value


def _check_confirmation(value: str, info: ValidationInfo) -> str:
    """password_confirmation must repeat password (skipped if password itself failed)."""
    password = info.data.get("password")
    if password is not None and value != password:
        raise ValueError("The password confirmation does not match.")
    return value


class RegisterRequest(BaseModel):
    """New account. Unknown fields (including is_admin) are ignored."""

    model_config = {"extra": "ignore"}

    name: str = Field(..., min_length=1, max_length=255)
    email: EmailStr
    password: str = Field(..., min_length=PASSWORD_MIN_LEN, max_length=PASSWORD_MAX_LEN)
    password_confirmation: str
    department: str | None = Field(default=None, max_length=255)
    job_role: str | None = Field(default=None, max_length=255)
    gender: Gender | None = None
    address: str | None = Field(default=None, max_length=255)
    phone: str | None = Field(default=None, max_length=64)

    @field_validator("email")
    @classmethod
    def validate_email(cls, v: str) -> str:
        return _check_email_length(normalize_email(v))

    @field_validator("password_confirmation")
    @classmethod
    def validate_confirmation(cls, v: str, info: ValidationInfo) -> str:
        return _check_confirmation(v, info)


class LoginRequest(BaseModel):
    """Credentials for login."""

    email: EmailStr = Field(..., description="Account email")
    password: str = Field(..., min_length=1, description="Password")

    @field_validator("email")
    @classmethod
    def validate_email(cls, v: str) -> str:
        return normalize_email(v)


class ChangePasswordRequest(BaseModel):
    current_password: str = Field(..., min_length=1)
    password: str = Field(..., min_length=PASSWORD_MIN_LEN, max_length=PASSWORD_MAX_LEN)
    password_confirmation: str

    @field_validator("password_confirmation")
    @classmethod
    def validate_confirmation(cls, v: str, info: ValidationInfo) -> str:
        return _check_confirmation(v, info)


class AuthPayload(BaseModel):
    """Returned by register and login: the account plus a bearer token."""

    user: UserOut
    token: str = Field(..., description="JWT access token")
    token_type: str = Field(default="bearer", description="Token type")


class CurrentUser(BaseModel):
    """Authenticated actor injected into controllers."""

    model_config = {"from_attributes": True}

    id: int
    name: str
    email: str
    is_admin: bool
    token_id: str = Field(..., description="jti of the token used for this request")
