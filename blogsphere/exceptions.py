"""
Typed service failures.

Services raise these instead of HTTPException so the same rules can be
exercised without a request; ``main.py`` maps them onto HTTP responses.
"""
from fastapi import status

from blogsphere.constants import AuthMessages, BlogMessages, ProfileMessages


class ServiceError(Exception):
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = "Request failed"

    def __init__(self, detail: str = None):
        self.detail = detail or self.default_detail
        super().__init__(self.detail)


class NotFoundError(ServiceError):
    status_code = status.HTTP_404_NOT_FOUND
    default_detail = "Not found"


class BlogNotFoundError(NotFoundError):
    # Also raised when the blog exists but is hidden from the requester
    default_detail = BlogMessages.BLOG_NOT_FOUND


class UserNotFoundError(NotFoundError):
    default_detail = ProfileMessages.USER_NOT_FOUND


class ForbiddenError(ServiceError):
    status_code = status.HTTP_403_FORBIDDEN
    default_detail = "Forbidden"


class BlockedFromBlogError(ForbiddenError):
    default_detail = BlogMessages.BLOCKED_FROM_BLOG


class ValidationError(ServiceError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = "Invalid input"


class UnauthenticatedError(ServiceError):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_detail = AuthMessages.UNAUTHENTICATED


class ConcurrencyConflictError(ServiceError):
    status_code = status.HTTP_409_CONFLICT
    default_detail = BlogMessages.REACTION_CONFLICT
