from typing import List, Tuple
from datetime import datetime
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, desc
from sqlalchemy.orm.exc import StaleDataError
import logging

from blogsphere.constants import MyBlogMessages
from blogsphere.exceptions import ConcurrencyConflictError
from blogsphere.models.blog import Blog
from blogsphere.models.user import User
from blogsphere.schemas.blog_schema import BlogUpdate
from blogsphere.services.ownership import get_owned_blog

logger = logging.getLogger(__name__)

class MyBlogService:
    """Author-only operations; every lookup goes through the ownership guard"""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def _commit(self, blog_id: int) -> None:
        # A reaction or block committed since the load bumps the version
        try:
            await self.db.commit()
        except StaleDataError as e:
            await self.db.rollback()
            logger.warning(f"Concurrent update on blog {blog_id}: {e}")
            raise ConcurrencyConflictError()

    async def list_mine(self, author: User, skip: int = 0, limit: int = 20) -> Tuple[List[Blog], bool]:
        """All blogs by ``author``, drafts included, newest first"""
        stmt = select(Blog).where(
            Blog.author_id == author.id
        ).order_by(
            desc(Blog.created_at), desc(Blog.id)
        ).offset(skip).limit(limit + 1).execution_options(
            populate_existing=True
        )

        result = await self.db.execute(stmt)
        blogs = list(result.scalars().all())
        return blogs[:limit], len(blogs) > limit

    async def get_mine(self, author: User, blog_id: int) -> Blog:
        return await get_owned_blog(self.db, author.id, blog_id)

    async def edit_content(self, author: User, blog_id: int, patch: BlogUpdate) -> Blog:
        """Merge ``patch`` into the blog; omitted or null fields are kept"""
        blog = await get_owned_blog(self.db, author.id, blog_id)

        update_data = patch.model_dump(exclude_unset=True, exclude_none=True)
        if "categories" in update_data:
            update_data["categories"] = [c.value for c in patch.categories]
        if "tags" in update_data:
            update_data["tags"] = list(update_data["tags"])

        for field, value in update_data.items():
            setattr(blog, field, value)
        # Category-only edits touch child rows; bump the blog row so they are version checked too
        blog.updated_at = datetime.utcnow()

        await self._commit(blog_id)
        logger.info(f"User {author.id} updated blog {blog_id}: {sorted(update_data)}")
        return await get_owned_blog(self.db, author.id, blog_id)

    async def set_published(self, author: User, blog_id: int, published: bool) -> Tuple[Blog, str]:
        blog = await get_owned_blog(self.db, author.id, blog_id)
        blog.is_published = published

        await self._commit(blog_id)
        logger.info(f"User {author.id} set blog {blog_id} published={published}")

        message = MyBlogMessages.BLOG_PUBLISHED if published else MyBlogMessages.BLOG_UNPUBLISHED
        return await get_owned_blog(self.db, author.id, blog_id), message

    async def delete(self, author: User, blog_id: int) -> None:
        blog = await get_owned_blog(self.db, author.id, blog_id)

        await self.db.delete(blog)
        await self._commit(blog_id)
        logger.info(f"User {author.id} deleted blog {blog_id}")
