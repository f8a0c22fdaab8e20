"""Auth schemas."""
from pydantic import EmailStr, Field, field_validator

from partnersync.models.user import UserRole
from partnersync.schemas.base import ApiModel

# bcrypt ignores or rejects anything past 72 bytes
PASSWORD_MAX_BYTES = 72


class UserCreate(ApiModel):
    name: str = Field(..., min_length=1, max_length=50)
    email: EmailStr
    password: str = Field(..., min_length=6, max_length=PASSWORD_MAX_BYTES)
    organization: str = Field(..., min_length=1)
    role: UserRole = UserRole.PARTNER

    @field_validator("name", "organization")
    @classmethod
    def strip_text(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("must not be blank")
        return v

    @field_validator("password")
    @classmethod
    def password_fits_bcrypt(cls, v: str) -> str:
        if len(v.encode("utf-8")) > PASSWORD_MAX_BYTES:
            raise ValueError(f"Password cannot be longer than {PASSWORD_MAX_BYTES} bytes")
        return v

    @field_validator("email")
    @classmethod
    def lowercase_email(cls, v: str) -> str:
        return v.lower()


class UserLogin(ApiModel):
    email: str
    password: str


class UserResponse(ApiModel):
    id: str
    name: str
    email: str
    organization: str
    role: UserRole
    requested_role: UserRole
    is_verified: bool


class Token(ApiModel):
    success: bool = True
    access_token: str = Field(..., serialization_alias="token")
    token_type: str = "bearer"
    user: UserResponse
