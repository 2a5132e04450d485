"""
User Service for profile and preference management
"""
import logging
from sqlalchemy.ext.asyncio import AsyncSession

from blogsphere.constants import ProfileMessages
from blogsphere.exceptions import UserNotFoundError, ValidationError
from blogsphere.models.user import User
from blogsphere.schemas.user_schema import ChangePasswordRequest, ProfileUpdate
from blogsphere.services.auth_service import pwd_context

logger = logging.getLogger(__name__)

class UserService:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_user(self, user_id: int) -> User:
        user = await self.db.get(User, user_id)
        if user is None:
            raise UserNotFoundError()
        return user

    async def update_profile(self, user_id: int, profile: ProfileUpdate) -> User:
        """Apply the provided profile fields, leaving the rest untouched"""
        user = await self.get_user(user_id)

        update_data = profile.model_dump(exclude_unset=True, exclude_none=True)
        if "preferences" in update_data:
            update_data["preferences"] = [p.value for p in profile.preferences]

        for field, value in update_data.items():
            setattr(user, field, value)

        await self.db.commit()
        await self.db.refresh(user)

        logger.info(f"User {user_id} updated profile fields {sorted(update_data)}")
        return user

    async def change_password(self, user_id: int, request: ChangePasswordRequest) -> None:
        user = await self.get_user(user_id)

        if not pwd_context.verify(request.current_password, user.hashed_password):
            raise ValidationError(ProfileMessages.INCORRECT_CURRENT_PASSWORD)

        user.hashed_password = pwd_context.hash(request.new_password)
        await self.db.commit()
        logger.info(f"User {user_id} changed password")

    async def set_preferences(self, user_id: int, preferences: list) -> User:
        user = await self.get_user(user_id)
        user.preferences = [getattr(p, "value", p) for p in preferences]

        await self.db.commit()
        await self.db.refresh(user)

        logger.info(f"User {user_id} set preferences {user.preferences}")
        return user
