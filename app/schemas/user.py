from datetime import datetime
from pydantic import BaseModel, Field, field_validator
from app.models.user import UserRole
from app.schemas.permission import PermissionWithStudioResponse

MIN_PASSWORD_LENGTH = 6


class UserBase(BaseModel):
    username: str = Field(min_length=1, max_length=50)
    email: str | None = Field(default=None, max_length=100)
    first_name: str | None = Field(default=None, max_length=50)
    last_name: str | None = Field(default=None, max_length=50)
    role: UserRole = UserRole.VIEWER
    is_active: bool = True


class UserCreate(UserBase):
    password: str = Field(min_length=MIN_PASSWORD_LENGTH)


class UserUpdate(BaseModel):
    """All fields optional. Password is re-hashed when given."""
    username: str | None = Field(default=None, min_length=1, max_length=50)
    email: str | None = Field(default=None, max_length=100)
    first_name: str | None = Field(default=None, max_length=50)
    last_name: str | None = Field(default=None, max_length=50)
    role: UserRole | None = None
    is_active: bool | None = None
    password: str | None = Field(default=None, min_length=MIN_PASSWORD_LENGTH)

    @field_validator("username", "role", "is_active", "password")
    @classmethod
    def reject_null(cls, v):
        # omit the field to leave it unchanged; these columns are NOT NULL
        if v is None:
            raise ValueError("may not be null")
        return v


class PublicUserResponse(BaseModel):
    id: str
    username: str
    email: str | None
    first_name: str | None
    last_name: str | None
    role: str

    class Config:
        from_attributes = True


class UserResponse(PublicUserResponse):
    is_active: bool
    created_at: datetime
    updated_at: datetime


class UserWithPermissionsResponse(UserResponse):
    permissions: list[PermissionWithStudioResponse] = []


class TokenPayload(BaseModel):
    sub: str  # user id
    exp: int
    type: str = "access"


class LoginRequest(BaseModel):
    username: str = Field(min_length=1)
    password: str = Field(min_length=1)


class LoginResponse(BaseModel):
    token: str
    token_type: str = "bearer"
    user: PublicUserResponse


class ChangePasswordRequest(BaseModel):
    current_password: str = Field(min_length=1)
    new_password: str
