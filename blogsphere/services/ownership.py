"""
Author-only access to blogs.

A blog owned by someone else is reported exactly like a missing one, so
callers cannot probe for the existence of other authors' drafts.
"""
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from blogsphere.exceptions import BlogNotFoundError
from blogsphere.models.blog import Blog


def authorize(requester_id: int, blog: Blog) -> None:
    if blog is None or blog.author_id != requester_id:
        raise BlogNotFoundError()


async def get_owned_blog(db: AsyncSession, requester_id: int, blog_id: int) -> Blog:
    """Load ``blog_id`` scoped to its author or raise BlogNotFoundError"""
    stmt = select(Blog).where(
        Blog.id == blog_id, Blog.author_id == requester_id
    ).execution_options(populate_existing=True)
    result = await db.execute(stmt)
    blog = result.scalar_one_or_none()
    authorize(requester_id, blog)
    return blog
