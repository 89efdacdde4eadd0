"""User DTOs for API layer"""

from pydantic import BaseModel, EmailStr, Field, field_validator
from typing import Optional, List
from datetime import datetime, date
from uuid import UUID

from ...domain.entities.user import User, validate_username, validate_password
from ...domain.enums import RoleName


class CreateUserDto(BaseModel):
    """DTO for user registration"""
    email: EmailStr
    username: str
    password: str
    first_name: Optional[str] = None
    last_name: Optional[str] = None

    @field_validator("username")
    @classmethod
    def check_username(cls, value: str) -> str:
        return validate_username(value)

    @field_validator("password")
    @classmethod
    def check_password(cls, value: str) -> str:
        return validate_password(value)


class LoginUserDto(BaseModel):
    """DTO for user login"""
    email: EmailStr
    password: str


class RefreshTokenDto(BaseModel):
    """DTO for refresh token request"""
    refresh_token: str


class ForgotPasswordDto(BaseModel):
    email: EmailStr


class ResetPasswordDto(BaseModel):
    token: str
    new_password: str

    @field_validator("new_password")
    @classmethod
    def check_password(cls, value: str) -> str:
        return validate_password(value)


class ChangePasswordDto(BaseModel):
    current_password: str
    new_password: str

    @field_validator("new_password")
    @classmethod
    def check_password(cls, value: str) -> str:
        return validate_password(value)


class PasswordMessageResponse(BaseModel):
    message: str
    success: bool = True


class UpdateProfileDto(BaseModel):
    first_name: Optional[str] = Field(default=None, max_length=50)
    last_name: Optional[str] = Field(default=None, max_length=50)
    username: Optional[str] = None
    phone: Optional[str] = Field(default=None, max_length=20)
    birthdate: Optional[date] = None


class AdminCreateUserDto(BaseModel):
    """DTO for an admin creating an account on someone's behalf"""
    email: EmailStr
    username: str
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    phone: Optional[str] = None
    headquarter_id: Optional[UUID] = None
    roles: List[RoleName] = Field(min_length=1)

    @field_validator("username")
    @classmethod
    def check_username(cls, value: str) -> str:
        return validate_username(value)


class AdminUpdateUserDto(UpdateProfileDto):
    headquarter_id: Optional[UUID] = None
    roles: Optional[List[RoleName]] = None


class UserDto(BaseModel):
    """DTO for user response"""
    id: UUID
    email: str
    username: Optional[str] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    phone: Optional[str] = None
    birthdate: Optional[date] = None
    headquarter_id: Optional[UUID] = None
    profile_image_url: Optional[str] = None
    roles: List[str] = []
    created_at: Optional[datetime] = None

    @classmethod
    def from_entity(cls, user: User) -> "UserDto":
        return cls(
            id=user.id.value,
            email=user.email,
            username=user.username,
            first_name=user.first_name,
            last_name=user.last_name,
            phone=user.phone,
            birthdate=user.birthdate,
            headquarter_id=user.headquarter_id.value if user.headquarter_id else None,
            profile_image_url=user.profile_image_url,
            roles=[role.value for role in user.effective_roles],
            created_at=user.created_at,
        )


class SessionDto(UserDto):
    """Session user enriched with role routing"""
    primary_role: str
    dashboard_path: str
    has_completed_profile: bool

    @classmethod
    def from_entity(cls, user: User) -> "SessionDto":
        base = UserDto.from_entity(user).model_dump()
        return cls(
            **base,
            primary_role=user.primary_role.value,
            dashboard_path=user.dashboard_path,
            has_completed_profile=user.has_completed_profile,
        )


class TokenDto(BaseModel):
    """DTO for authentication tokens"""
    access_token: str
    refresh_token: str
    token_type: str = "bearer"


class UserResponse(BaseModel):
    """DTO for user response with tokens"""
    user: SessionDto
    tokens: TokenDto


class AdminCreatedUserResponse(BaseModel):
    user: UserDto
    temporary_password: str
