from datetime import datetime, timedelta
from typing import Optional
from jose import JWTError, jwt
from passlib.context import CryptContext
from fastapi import Depends, Request
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
import logging

from blogsphere.config import settings
from blogsphere.constants import AuthMessages
from blogsphere.exceptions import UnauthenticatedError, ValidationError
from blogsphere.schemas.auth_schema import TokenData, TokenType
from blogsphere.schemas.user_schema import UserCreate
from blogsphere.models.user import User
from blogsphere.db.session import get_db
from blogsphere.services.redis_service import RedisService, get_redis

logger = logging.getLogger(__name__)

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/v1/auth/login-email", auto_error=False)

ACCESS_COOKIE = "accessToken"
REFRESH_COOKIE = "refreshToken"

class AuthService:
    def __init__(self, db: AsyncSession, redis: Optional[RedisService] = None):
        self.db = db
        self.redis = redis or get_redis()

    def verify_password(self, plain_password: str, hashed_password: str) -> bool:
        """Verify a password against its hash"""
        return pwd_context.verify(plain_password, hashed_password)

    def get_password_hash(self, password: str) -> str:
        """Hash a password"""
        return pwd_context.hash(password)

    async def get_user_by_email(self, email: str) -> Optional[User]:
        stmt = select(User).where(User.email == email.lower())
        result = await self.db.execute(stmt)
        return result.scalar_one_or_none()

    async def create_user(self, user_data: UserCreate) -> User:
        """Create a new user"""
        if await self.get_user_by_email(user_data.email):
            raise ValidationError(AuthMessages.USER_ALREADY_EXISTS)

        user = User(
            name=user_data.name,
            email=user_data.email.lower(),
            hashed_password=self.get_password_hash(user_data.password),
            mobile=user_data.mobile,
            dob=user_data.dob,
            image=user_data.image,
            preferences=[p.value for p in user_data.preferences],
            is_active=True,
        )

        self.db.add(user)
        await self.db.commit()
        await self.db.refresh(user)

        logger.info(f"Registered user {user.id}")
        return user

    async def authenticate_by_email(self, email: str, password: str) -> Optional[User]:
        stmt = select(User).where(User.email == email.lower())
        return await self._authenticate(stmt, password)

    async def authenticate_by_mobile(self, mobile: str, password: str) -> Optional[User]:
        stmt = select(User).where(User.mobile == mobile)
        return await self._authenticate(stmt, password)

    async def _authenticate(self, stmt, password: str) -> Optional[User]:
        result = await self.db.execute(stmt)
        user = result.scalars().first()

        if not user or not self.verify_password(password, user.hashed_password):
            return None

        if not user.is_active:
            return None

        return user

    def create_access_token(self, user: User, expires_delta: Optional[timedelta] = None) -> str:
        """Create a JWT access token"""
        if expires_delta is None:
            expires_delta = timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
        return self._encode(user, TokenType.ACCESS, expires_delta)

    def create_refresh_token(self, user: User, expires_delta: Optional[timedelta] = None) -> str:
        """Create a JWT refresh token"""
        if expires_delta is None:
            expires_delta = timedelta(days=settings.REFRESH_TOKEN_EXPIRE_DAYS)
        return self._encode(user, TokenType.REFRESH, expires_delta)

    def _encode(self, user: User, token_type: TokenType, expires_delta: timedelta) -> str:
        to_encode = {
            "sub": str(user.id),
            "user_id": user.id,
            "email": user.email,
            "exp": datetime.utcnow() + expires_delta,
            "type": token_type.value,
        }
        return jwt.encode(to_encode, settings.secret_key, algorithm=settings.ALGORITHM)

    def _decode(self, token: str, token_type: TokenType) -> Optional[TokenData]:
        try:
            payload = jwt.decode(token, settings.secret_key, algorithms=[settings.ALGORITHM])
        except JWTError:
            return None

        if payload.get("type") != token_type.value:
            return None

        user_id = payload.get("user_id")
        email = payload.get("email")
        if user_id is None or email is None:
            return None

        return TokenData(user_id=user_id, email=email)

    async def verify_token(self, token: str) -> Optional[TokenData]:
        """Verify an access token that has not been revoked"""
        if await self.redis.get(f"blacklist:{token}"):
            return None
        return self._decode(token, TokenType.ACCESS)

    def verify_refresh_token(self, token: str) -> Optional[TokenData]:
        """Verify a refresh token"""
        return self._decode(token, TokenType.REFRESH)

    async def blacklist_token(self, token: str, expires_in: Optional[int] = None) -> None:
        """Add token to blacklist until it would have expired anyway"""
        if expires_in is None:
            expires_in = settings.ACCESS_TOKEN_EXPIRE_MINUTES * 60
        await self.redis.setex(f"blacklist:{token}", expires_in, "1")

    async def resolve_viewer(self, token: Optional[str]) -> User:
        """Map a bearer credential to its user or raise UnauthenticatedError"""
        if not token:
            raise UnauthenticatedError()

        token_data = await self.verify_token(token)
        if token_data is None:
            raise UnauthenticatedError()

        user = await self.db.get(User, token_data.user_id)
        if user is None or not user.is_active:
            raise UnauthenticatedError()

        return user

def get_request_token(request: Request, token: Optional[str] = Depends(oauth2_scheme)) -> Optional[str]:
    """Bearer header first, then the accessToken cookie"""
    return token or request.cookies.get(ACCESS_COOKIE)

async def get_current_user(
    token: Optional[str] = Depends(get_request_token),
    db: AsyncSession = Depends(get_db),
    redis: RedisService = Depends(get_redis),
) -> User:
    """Dependency to get current authenticated user"""
    auth_service = AuthService(db, redis)
    return await auth_service.resolve_viewer(token)
