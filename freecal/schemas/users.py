from pydantic import AliasChoices, BaseModel, ConfigDict, EmailStr, Field
from typing import Literal, Optional
from uuid import UUID

from .common import UTCDateTime

ApprovalStatus = Literal['pending', 'approved', 'rejected']


class RegisterIn(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=6)
    display_name: str = Field(..., min_length=1, validation_alias=AliasChoices('display_name', 'displayName'))


class LoginIn(BaseModel):
    email: str
    password: str


class UserOut(BaseModel):
    id: UUID
    email: str
    display_name: str
    avatar_url: Optional[str] = None
    calendar_color: str
    is_approved: bool
    approval_status: ApprovalStatus
    approved_at: Optional[UTCDateTime] = None
    created_at: Optional[UTCDateTime] = None
    updated_at: Optional[UTCDateTime] = None

    model_config = ConfigDict(from_attributes=True)


class TokenOut(BaseModel):
    token: str
    user: UserOut


class ForgotPasswordIn(BaseModel):
    email: Optional[str] = None


class ResetPasswordIn(BaseModel):
    token: Optional[str] = None
    new_password: Optional[str] = Field(None, validation_alias=AliasChoices('new_password', 'newPassword'))


# Profile Management Schemas
class ProfileUpdateIn(BaseModel):
    display_name: Optional[str] = Field(None, min_length=1, max_length=100)
    calendar_color: Optional[str] = Field(None, min_length=1, max_length=64)
    avatar_url: Optional[str] = None


class AdminUserUpdateIn(BaseModel):
    approval_status: Optional[ApprovalStatus] = None
    is_approved: Optional[bool] = None


class AdminPasswordIn(BaseModel):
    password: Optional[str] = None
