from fastapi import APIRouter, Depends, HTTPException, Request, Response, status
from sqlalchemy.ext.asyncio import AsyncSession
from typing import Optional
import logging

from blogsphere.config import settings
from blogsphere.constants import AuthMessages
from blogsphere.exceptions import ForbiddenError, ServiceError, ValidationError
from blogsphere.models.user import User
from blogsphere.schemas.auth_schema import (
    AccessTokenResponse,
    LoginEmailRequest,
    LoginMobileRequest,
    RefreshTokenRequest,
    TokenResponse,
)
from blogsphere.schemas.user_schema import MessageResponse, UserCreate, UserInDB
from blogsphere.services.auth_service import (
    ACCESS_COOKIE,
    REFRESH_COOKIE,
    AuthService,
    get_current_user,
    get_request_token,
)
from blogsphere.services.redis_service import RedisService, get_redis
from blogsphere.db.session import get_db
from blogsphere.utils.rate_limit import limiter

logger = logging.getLogger(__name__)

router = APIRouter()

def _set_auth_cookies(response: Response, access_token: str, refresh_token: Optional[str] = None) -> None:
    cookie_args = {
        "httponly": True,
        "secure": settings.COOKIE_SECURE,
        "samesite": "none" if settings.COOKIE_SECURE else "lax",
    }
    response.set_cookie(
        ACCESS_COOKIE, access_token,
        max_age=settings.ACCESS_TOKEN_EXPIRE_MINUTES * 60, **cookie_args
    )
    if refresh_token is not None:
        response.set_cookie(
            REFRESH_COOKIE, refresh_token,
            max_age=settings.REFRESH_TOKEN_EXPIRE_DAYS * 24 * 60 * 60, **cookie_args
        )

def _issue_tokens(auth_service: AuthService, user: User, response: Response, message: str) -> TokenResponse:
    access_token = auth_service.create_access_token(user)
    refresh_token = auth_service.create_refresh_token(user)
    _set_auth_cookies(response, access_token, refresh_token)
    return TokenResponse(
        message=message,
        access_token=access_token,
        refresh_token=refresh_token,
        expires_in=settings.ACCESS_TOKEN_EXPIRE_MINUTES * 60,
        user=UserInDB.model_validate(user),
    )

@router.post("/register", response_model=TokenResponse, status_code=status.HTTP_201_CREATED)
@limiter.limit(settings.rate_limit)
async def register(
    request: Request,
    response: Response,
    user_data: UserCreate,
    db: AsyncSession = Depends(get_db),
    redis: RedisService = Depends(get_redis),
):
    """Register a new user and sign them in"""
    try:
        auth_service = AuthService(db, redis)
        user = await auth_service.create_user(user_data)
        return _issue_tokens(auth_service, user, response, AuthMessages.USER_REGISTERED)
    except (HTTPException, ServiceError):
        raise
    except Exception as e:
        logger.error(f"Registration error: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Registration failed"
        )

@router.post("/login-email", response_model=TokenResponse)
@limiter.limit(settings.rate_limit)
async def login_with_email(
    request: Request,
    response: Response,
    credentials: LoginEmailRequest,
    db: AsyncSession = Depends(get_db),
    redis: RedisService = Depends(get_redis),
):
    """Login with email and password"""
    try:
        auth_service = AuthService(db, redis)
        user = await auth_service.authenticate_by_email(credentials.email, credentials.password)
        if not user:
            raise ValidationError(AuthMessages.INVALID_CREDENTIALS)
        return _issue_tokens(auth_service, user, response, AuthMessages.USER_LOGGED_IN)
    except (HTTPException, ServiceError):
        raise
    except Exception as e:
        logger.error(f"Login error: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Login failed"
        )

@router.post("/login-mobile", response_model=TokenResponse)
@limiter.limit(settings.rate_limit)
async def login_with_mobile(
    request: Request,
    response: Response,
    credentials: LoginMobileRequest,
    db: AsyncSession = Depends(get_db),
    redis: RedisService = Depends(get_redis),
):
    """Login with mobile number and password"""
    try:
        auth_service = AuthService(db, redis)
        user = await auth_service.authenticate_by_mobile(credentials.mobile, credentials.password)
        if not user:
            raise ValidationError(AuthMessages.INVALID_CREDENTIALS)
        return _issue_tokens(auth_service, user, response, AuthMessages.USER_LOGGED_IN)
    except (HTTPException, ServiceError):
        raise
    except Exception as e:
        logger.error(f"Login error: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Login failed"
        )

@router.post("/refresh-token", response_model=AccessTokenResponse)
async def refresh_token(
    request: Request,
    response: Response,
    body: Optional[RefreshTokenRequest] = None,
    db: AsyncSession = Depends(get_db),
    redis: RedisService = Depends(get_redis),
):
    """Issue a new access token from a refresh token (body or cookie)"""
    try:
        token = (body.refresh_token if body else None) or request.cookies.get(REFRESH_COOKIE)
        if not token:
            raise ForbiddenError(AuthMessages.UNAUTHORIZED)

        auth_service = AuthService(db, redis)
        token_data = auth_service.verify_refresh_token(token)
        if not token_data:
            raise ForbiddenError(AuthMessages.UNAUTHORIZED)

        user = await db.get(User, token_data.user_id)
        if user is None or not user.is_active:
            raise ForbiddenError(AuthMessages.UNAUTHORIZED)

        access_token = auth_service.create_access_token(user)
        _set_auth_cookies(response, access_token)
        return AccessTokenResponse(
            message=AuthMessages.TOKEN_REFRESHED,
            access_token=access_token,
            expires_in=settings.ACCESS_TOKEN_EXPIRE_MINUTES * 60,
        )
    except (HTTPException, ServiceError):
        raise
    except Exception as e:
        logger.error(f"Token refresh error: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Token refresh failed"
        )

@router.post("/logout", response_model=MessageResponse)
async def logout(
    response: Response,
    current_user: User = Depends(get_current_user),
    token: Optional[str] = Depends(get_request_token),
    db: AsyncSession = Depends(get_db),
    redis: RedisService = Depends(get_redis),
):
    """Logout user (revoke the access token and clear cookies)"""
    try:
        auth_service = AuthService(db, redis)
        await auth_service.blacklist_token(token)
        response.delete_cookie(ACCESS_COOKIE)
        response.delete_cookie(REFRESH_COOKIE)
        logger.info(f"User {current_user.id} logged out")
        return MessageResponse(message=AuthMessages.USER_LOGGED_OUT)
    except Exception as e:
        logger.error(f"Logout error: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Logout failed"
        )
