from pydantic import BaseModel, EmailStr, ConfigDict, Field, field_validator, model_validator
from typing import Optional, List
from datetime import date, datetime
from blogsphere.constants import Category, DEFAULT_PREFERENCES

MOBILE_PATTERN = r'^\+?[0-9]{10,15}$'

def _required_name(value: str) -> str:
    value = value.strip()
    if not value:
        raise ValueError("Name is required")
    return value

class UserBase(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    email: EmailStr
    mobile: str = Field(..., pattern=MOBILE_PATTERN)
    dob: date
    image: Optional[str] = None

    @field_validator("name")
    @classmethod
    def strip_name(cls, value: str) -> str:
        return _required_name(value)

    @field_validator("email")
    @classmethod
    def lowercase_email(cls, value: str) -> str:
        return value.lower()

class UserCreate(UserBase):
    password: str = Field(..., min_length=6, max_length=100)
    preferences: List[Category] = Field(
        default_factory=lambda: [Category(p) for p in DEFAULT_PREFERENCES],
        min_length=1,
    )

class UserInDB(UserBase):
    model_config = ConfigDict(from_attributes=True)

    id: int
    preferences: List[str]
    is_active: bool
    created_at: datetime
    updated_at: datetime

class UserResponse(BaseModel):
    message: str
    user: UserInDB

class ProfileUpdate(BaseModel):
    """Partial profile update; omitted or null fields keep their value"""
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    mobile: Optional[str] = Field(None, pattern=MOBILE_PATTERN)
    dob: Optional[date] = None
    image: Optional[str] = None
    preferences: Optional[List[Category]] = Field(None, min_length=1)

    @field_validator("name")
    @classmethod
    def strip_name(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return value
        return _required_name(value)

class PreferencesUpdate(BaseModel):
    preferences: List[Category] = Field(..., min_length=1)

class ChangePasswordRequest(BaseModel):
    current_password: str = Field(..., min_length=1)
    new_password: str = Field(..., min_length=6, max_length=100)
    confirm_password: str

    @model_validator(mode="after")
    def passwords_match(self):
        if self.new_password != self.confirm_password:
            raise ValueError("Passwords do not match")
        return self

class MessageResponse(BaseModel):
    message: str
