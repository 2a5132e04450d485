from pydantic import BaseModel, EmailStr, Field, field_validator
from typing import Optional
from enum import Enum
from blogsphere.schemas.user_schema import UserInDB, MOBILE_PATTERN

class TokenType(str, Enum):
    ACCESS = "access"
    REFRESH = "refresh"

class LoginEmailRequest(BaseModel):
    """Schema for email login request"""
    email: EmailStr = Field(..., description="Email address")
    password: str = Field(..., min_length=1, description="Password")

    @field_validator("email")
    @classmethod
    def lowercase_email(cls, value: str) -> str:
        return value.lower()

class LoginMobileRequest(BaseModel):
    """Schema for mobile login request"""
    mobile: str = Field(..., pattern=MOBILE_PATTERN, description="Mobile number")
    password: str = Field(..., min_length=1, description="Password")

class TokenResponse(BaseModel):
    """Schema for token response"""
    message: str
    access_token: str = Field(..., description="JWT access token")
    refresh_token: str = Field(..., description="JWT refresh token")
    token_type: str = Field(default="bearer", description="Token type")
    expires_in: int = Field(..., description="Access token expiration in seconds")
    user: UserInDB

class AccessTokenResponse(BaseModel):
    message: str
    access_token: str
    token_type: str = "bearer"
    expires_in: int

class TokenData(BaseModel):
    """Schema for token payload data"""
    user_id: int = Field(..., description="User ID")
    email: str = Field(..., description="Email")

class RefreshTokenRequest(BaseModel):
    """Refresh token; falls back to the refreshToken cookie when omitted"""
    refresh_token: Optional[str] = Field(None, description="Refresh token")
