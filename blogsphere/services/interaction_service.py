"""
Like, dislike and per-blog block toggles.

Every mutation runs through ``_mutate``: load the blog with its reactions and
blocks, change membership in memory, rewrite the counters from membership and
commit. The blog row carries a version column, so a concurrent writer makes
the commit fail with StaleDataError instead of silently losing an update; the
cycle is then retried on fresh data.
"""
from typing import Callable, Optional, Tuple, TypeVar
from datetime import datetime
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm.exc import StaleDataError
import logging

from blogsphere.config import settings
from blogsphere.constants import BlogMessages, ReactionKind
from blogsphere.exceptions import (
    BlockedFromBlogError,
    BlogNotFoundError,
    ConcurrencyConflictError,
    ForbiddenError,
    UserNotFoundError,
    ValidationError,
)
from blogsphere.models.blog import Blog
from blogsphere.models.block import BlogBlock
from blogsphere.models.reaction import BlogReaction
from blogsphere.models.user import User
from blogsphere.schemas.blog_schema import BlockResult, ReactionCounts
from blogsphere.services import visibility

logger = logging.getLogger(__name__)

T = TypeVar("T")

_MESSAGES = {
    (ReactionKind.LIKE, True): BlogMessages.LIKE_ADDED,
    (ReactionKind.LIKE, False): BlogMessages.LIKE_REMOVED,
    (ReactionKind.DISLIKE, True): BlogMessages.DISLIKE_ADDED,
    (ReactionKind.DISLIKE, False): BlogMessages.DISLIKE_REMOVED,
}


def recount(blog: Blog) -> None:
    """Rewrite the cached counters from reaction membership"""
    blog.like_count = len(blog.liked_by)
    blog.dislike_count = len(blog.disliked_by)


def find_reaction(blog: Blog, user_id: int) -> Optional[BlogReaction]:
    for reaction in blog.reactions:
        if reaction.user_id == user_id:
            return reaction
    return None


def apply_reaction(blog: Blog, viewer_id: int, kind: ReactionKind) -> bool:
    """Toggle ``kind`` for ``viewer_id`` on a loaded blog.

    Returns True when the reaction is now set, False when it was removed.
    Switching from the opposite reaction replaces it in place, so a viewer
    never holds both.
    """
    if not (blog.is_published or visibility.is_author(blog, viewer_id)):
        raise BlogNotFoundError()
    if visibility.is_blocked(blog, viewer_id):
        raise BlockedFromBlogError()

    existing = find_reaction(blog, viewer_id)
    if existing is not None and existing.kind == kind.value:
        blog.reactions.remove(existing)
        active = False
    elif existing is not None:
        existing.kind = kind.value
        active = True
    else:
        blog.reactions.append(BlogReaction(user_id=viewer_id, kind=kind.value))
        active = True

    recount(blog)
    return active


def apply_block(blog: Blog, target_id: int, clear_reactions: bool) -> bool:
    """Toggle ``target_id`` on the blog's block-list; True when now blocked"""
    if visibility.is_author(blog, target_id):
        raise ValidationError(BlogMessages.CANNOT_BLOCK_AUTHOR)

    for block in blog.blocks:
        if block.user_id == target_id:
            blog.blocks.remove(block)
            blocked = False
            break
    else:
        blog.blocks.append(BlogBlock(user_id=target_id))
        blocked = True
        if clear_reactions:
            existing = find_reaction(blog, target_id)
            if existing is not None:
                blog.reactions.remove(existing)

    recount(blog)
    # Touch the row so the version check also covers block-only changes
    blog.updated_at = datetime.utcnow()
    return blocked


class InteractionService:
    def __init__(self, db: AsyncSession, max_retries: Optional[int] = None):
        self.db = db
        self.max_retries = max_retries if max_retries is not None else settings.REACTION_MAX_RETRIES

    async def _load(self, blog_id: int) -> Blog:
        stmt = select(Blog).where(Blog.id == blog_id).execution_options(populate_existing=True)
        result = await self.db.execute(stmt)
        blog = result.scalar_one_or_none()
        if blog is None:
            raise BlogNotFoundError()
        return blog

    async def _mutate(self, blog_id: int, change: Callable[[Blog], T]) -> Tuple[Blog, T]:
        attempts = max(1, self.max_retries)
        for attempt in range(1, attempts + 1):
            blog = await self._load(blog_id)
            outcome = change(blog)
            try:
                await self.db.commit()
                return blog, outcome
            except (StaleDataError, IntegrityError) as e:
                await self.db.rollback()
                logger.warning(
                    f"Concurrent update on blog {blog_id} (attempt {attempt}/{attempts}): {e}"
                )
        logger.error(f"Giving up on blog {blog_id} after {attempts} attempts")
        raise ConcurrencyConflictError()

    @staticmethod
    def _check_owner(requester_id: int, blog: Blog) -> None:
        # Drafts stay hidden from non-authors; a visible blog owned by someone
        # else is a plain permission failure
        if not visibility.can_view(blog, requester_id):
            raise BlogNotFoundError()
        if not visibility.is_author(blog, requester_id):
            raise ForbiddenError(BlogMessages.ONLY_AUTHOR_CAN_BLOCK)

    async def _react(self, viewer_id: int, blog_id: int, kind: ReactionKind) -> ReactionCounts:
        blog, active = await self._mutate(
            blog_id, lambda blog: apply_reaction(blog, viewer_id, kind)
        )
        logger.info(f"User {viewer_id} {'set' if active else 'cleared'} {kind.value} on blog {blog_id}")
        return ReactionCounts(
            message=_MESSAGES[(kind, active)],
            blog_id=blog.id,
            like_count=blog.like_count,
            dislike_count=blog.dislike_count,
            liked=viewer_id in blog.liked_by,
            disliked=viewer_id in blog.disliked_by,
        )

    async def like(self, viewer_id: int, blog_id: int) -> ReactionCounts:
        """Toggle the viewer's like; replaces a dislike"""
        return await self._react(viewer_id, blog_id, ReactionKind.LIKE)

    async def dislike(self, viewer_id: int, blog_id: int) -> ReactionCounts:
        """Toggle the viewer's dislike; replaces a like"""
        return await self._react(viewer_id, blog_id, ReactionKind.DISLIKE)

    async def toggle_block(self, requester_id: int, blog_id: int, target_id: int) -> BlockResult:
        """Block or unblock ``target_id`` on a blog owned by ``requester_id``"""
        self._check_owner(requester_id, await self._load(blog_id))
        if await self.db.get(User, target_id) is None:
            raise UserNotFoundError()

        def change(blog: Blog) -> bool:
            self._check_owner(requester_id, blog)
            return apply_block(blog, target_id, settings.BLOCK_CLEARS_REACTIONS)

        blog, blocked = await self._mutate(blog_id, change)
        logger.info(f"User {requester_id} {'blocked' if blocked else 'unblocked'} user {target_id} on blog {blog_id}")
        return BlockResult(
            message=BlogMessages.USER_BLOCKED if blocked else BlogMessages.USER_UNBLOCKED,
            blog_id=blog.id,
            user_id=target_id,
            blocked=blocked,
        )
