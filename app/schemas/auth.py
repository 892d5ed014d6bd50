from pydantic import BaseModel, EmailStr, field_validator
from typing import Optional


# ─── Helpers ──────────────────────────────────────────────────────────────────
def validate_password_length(v: str) -> str:
    if len(v) < 6:
        raise ValueError("Password must be at least 6 characters")
    return v


# ─── Request Schemas ──────────────────────────────────────────────────────────
class LoginRequest(BaseModel):
    email:    EmailStr
    password: str


class RefreshTokenRequest(BaseModel):
    refreshToken: str


class LogoutRequest(BaseModel):
    refreshToken: str


class RegisterRequest(BaseModel):
    email:    EmailStr
    password: str
    name:     Optional[str] = None

    @field_validator("password")
    @classmethod
    def password_length(cls, v: str) -> str:
        return validate_password_length(v)

    @field_validator("name")
    @classmethod
    def strip_name(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return v
        return v.strip() or None


# ─── Response Schemas ─────────────────────────────────────────────────────────
class UserInToken(BaseModel):
    id:      int
    name:    Optional[str] = None
    email:   str
    role:    str
    isAdmin: bool


class LoginResponse(BaseModel):
    accessToken:  str
    refreshToken: str
    tokenType:    str = "Bearer"
    expiresIn:    int          # seconds
    user:         UserInToken


class RefreshResponse(BaseModel):
    accessToken: str
    expiresIn:   int
