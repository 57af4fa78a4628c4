# app/api/schemas/user_schema.py
import re
from datetime import datetime

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator

PHONE_RE = re.compile(r"^010-\d{4}-\d{4}$")


class SignupRequest(BaseModel):
    email: EmailStr
    # bcrypt ignora além de 72 bytes
    password: str = Field(min_length=8, max_length=72)
    name: str = Field(max_length=100)
    phone: str

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v: str) -> str:
        return v.strip().lower()

    @field_validator("name")
    @classmethod
    def check_name(cls, v: str) -> str:
        v = v.strip()
        if len(v) < 2:
            raise ValueError("이름은 2자 이상이어야 합니다.")
        return v

    @field_validator("phone")
    @classmethod
    def check_phone(cls, v: str) -> str:
        v = v.strip()
        if not PHONE_RE.match(v):
            raise ValueError("올바른 전화번호 형식이 아닙니다. (010-XXXX-XXXX)")
        return v


class LoginRequest(BaseModel):
    email: EmailStr
    password: str = Field(min_length=1, max_length=200)


class UserResponse(BaseModel):
    id: int
    email: str
    name: str
    phone: str | None = None
    role: str
    created_at: datetime | None = None


class IdentityResponse(BaseModel):
    id: int
    role: str
    email: str | None = None


class LoginResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    success: bool = True
    message: str = "로그인에 성공했습니다."
    access_token: str = Field(serialization_alias="accessToken")
    user: UserResponse


class RefreshResponse(BaseModel):
    success: bool = True
    access_token: str = Field(serialization_alias="accessToken")
