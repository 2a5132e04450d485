from typing import List, Optional, Tuple
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, or_, and_, desc, exists
import logging

from blogsphere.exceptions import BlogNotFoundError
from blogsphere.models.blog import Blog
from blogsphere.models.block import BlogBlock
from blogsphere.models.category import BlogCategory
from blogsphere.models.user import User
from blogsphere.schemas.blog_schema import BlogCreate
from blogsphere.services import visibility

logger = logging.getLogger(__name__)

class BlogService:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def create_blog(self, author: User, blog_data: BlogCreate) -> Blog:
        """Create a new blog authored by ``author``"""
        blog = Blog(
            author_id=author.id,
            title=blog_data.title,
            content=blog_data.content,
            tags=list(blog_data.tags),
            categories=[c.value for c in blog_data.categories],
            image=blog_data.image,
            is_published=blog_data.is_published,
            like_count=0,
            dislike_count=0,
        )

        self.db.add(blog)
        await self.db.commit()

        logger.info(f"Created blog {blog.id} by user {author.id}")
        return await self.get_blog(blog.id)

    async def get_blog(self, blog_id: int) -> Optional[Blog]:
        """Get a blog by ID, ignoring visibility"""
        stmt = select(Blog).where(Blog.id == blog_id).execution_options(populate_existing=True)
        result = await self.db.execute(stmt)
        return result.scalar_one_or_none()

    async def get_visible(self, viewer: User, blog_id: int) -> Blog:
        """Get a blog the viewer may open; hidden blogs look missing"""
        blog = await self.get_blog(blog_id)
        if blog is None or not visibility.can_view(blog, viewer.id):
            raise BlogNotFoundError()
        return blog

    def _feed_query(self, viewer: User):
        is_own = Blog.author_id == viewer.id
        blocked = exists().where(
            and_(BlogBlock.blog_id == Blog.id, BlogBlock.user_id == viewer.id)
        )
        preferred = exists().where(
            and_(
                BlogCategory.blog_id == Blog.id,
                BlogCategory.category.in_(list(viewer.preferences or [])),
            )
        )
        return select(Blog).where(
            or_(Blog.is_published == True, is_own),  # noqa: E712
            or_(is_own, and_(~blocked, preferred)),
        ).order_by(
            desc(Blog.created_at), desc(Blog.id)
        )

    async def list_visible(
        self,
        viewer: User,
        skip: int = 0,
        limit: int = 20
    ) -> Tuple[List[Blog], bool]:
        """Feed for ``viewer``, newest first; returns (page, has_more)"""
        stmt = self._feed_query(viewer).offset(skip).limit(limit + 1).execution_options(
            populate_existing=True
        )
        result = await self.db.execute(stmt)
        rows = list(result.scalars().all())

        # Must agree with _feed_query; a disagreement shows up as a short page
        page = visibility.list_visible(viewer, rows[:limit])
        return page, len(rows) > limit

    async def latest(self, viewer: User, limit: int = 5) -> List[Blog]:
        """Most recent blogs from the viewer's feed"""
        blogs, _ = await self.list_visible(viewer, 0, limit)
        return blogs
