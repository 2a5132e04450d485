from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession
import logging

from blogsphere.constants import ProfileMessages
from blogsphere.exceptions import ServiceError
from blogsphere.schemas.user_schema import (
    ChangePasswordRequest,
    MessageResponse,
    PreferencesUpdate,
    ProfileUpdate,
    UserInDB,
    UserResponse,
)
from blogsphere.services.user_service import UserService
from blogsphere.services.auth_service import get_current_user
from blogsphere.db.session import get_db
from blogsphere.models.user import User

logger = logging.getLogger(__name__)

router = APIRouter()

@router.get("/me", response_model=UserResponse)
async def get_me(current_user: User = Depends(get_current_user)):
    """Get the current user's profile"""
    return UserResponse(message=ProfileMessages.PROFILE_FETCHED, user=UserInDB.model_validate(current_user))

@router.post("/profile", response_model=UserResponse)
async def update_profile(
    profile: ProfileUpdate,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """Update profile details"""
    try:
        user = await UserService(db).update_profile(current_user.id, profile)
        return UserResponse(message=ProfileMessages.PROFILE_UPDATED, user=UserInDB.model_validate(user))
    except (HTTPException, ServiceError):
        raise
    except Exception as e:
        logger.error(f"Update profile error: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to update profile"
        )

@router.post("/password", response_model=MessageResponse)
async def change_password(
    request: ChangePasswordRequest,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """Change the current user's password"""
    try:
        await UserService(db).change_password(current_user.id, request)
        return MessageResponse(message=ProfileMessages.PASSWORD_UPDATED)
    except (HTTPException, ServiceError):
        raise
    except Exception as e:
        logger.error(f"Change password error: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to change password"
        )

@router.post("/preferences", response_model=UserResponse)
async def change_preferences(
    update: PreferencesUpdate,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """Replace the categories that drive the blog feed"""
    try:
        user = await UserService(db).set_preferences(current_user.id, update.preferences)
        return UserResponse(message=ProfileMessages.PREFERENCES_UPDATED, user=UserInDB.model_validate(user))
    except (HTTPException, ServiceError):
        raise
    except Exception as e:
        logger.error(f"Change preferences error: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to update preferences"
        )
