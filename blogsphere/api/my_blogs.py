from fastapi import APIRouter, Depends, HTTPException, status, Query
from sqlalchemy.ext.asyncio import AsyncSession
import logging

from blogsphere.config import settings
from blogsphere.constants import MyBlogMessages
from blogsphere.exceptions import ServiceError
from blogsphere.schemas.blog_schema import (
    BlogUpdate,
    OwnedBlogInDB,
    OwnedBlogListResponse,
    OwnedBlogResponse,
    PublishStatusUpdate,
)
from blogsphere.schemas.user_schema import MessageResponse
from blogsphere.services.my_blog_service import MyBlogService
from blogsphere.services.auth_service import get_current_user
from blogsphere.db.session import get_db
from blogsphere.models.user import User

logger = logging.getLogger(__name__)

router = APIRouter()

@router.get("/all-blogs", response_model=OwnedBlogListResponse)
async def get_all_my_blogs(
    skip: int = Query(0, ge=0),
    limit: int = Query(settings.DEFAULT_PAGE_SIZE, ge=1, le=100),
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """All of the current user's blogs, drafts included"""
    try:
        blogs, has_more = await MyBlogService(db).list_mine(current_user, skip, limit)
        return OwnedBlogListResponse(
            message=MyBlogMessages.ALL_BLOGS_FETCHED if blogs else MyBlogMessages.NO_BLOGS_FOUND,
            blogs=[OwnedBlogInDB.model_validate(blog) for blog in blogs],
            skip=skip,
            limit=limit,
            has_more=has_more,
        )
    except (HTTPException, ServiceError):
        raise
    except Exception as e:
        logger.error(f"Get my blogs error: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to get blogs"
        )

@router.get("/blog/{blog_id}", response_model=OwnedBlogResponse)
async def get_my_blog(
    blog_id: int,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """Get one of the current user's blogs"""
    try:
        blog = await MyBlogService(db).get_mine(current_user, blog_id)
        return OwnedBlogResponse(message=MyBlogMessages.BLOG_FETCHED, blog=OwnedBlogInDB.model_validate(blog))
    except (HTTPException, ServiceError):
        raise
    except Exception as e:
        logger.error(f"Get my blog error: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to get blog"
        )

@router.put("/update-blog/{blog_id}", response_model=OwnedBlogResponse)
async def update_blog(
    blog_id: int,
    blog_update: BlogUpdate,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """Update a blog's content; fields left out keep their value"""
    try:
        blog = await MyBlogService(db).edit_content(current_user, blog_id, blog_update)
        return OwnedBlogResponse(message=MyBlogMessages.BLOG_UPDATED, blog=OwnedBlogInDB.model_validate(blog))
    except (HTTPException, ServiceError):
        raise
    except Exception as e:
        logger.error(f"Update blog error: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to update blog"
        )

@router.patch("/publish-status/{blog_id}", response_model=OwnedBlogResponse)
async def update_publish_status(
    blog_id: int,
    publish: PublishStatusUpdate,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """Publish or unpublish a blog"""
    try:
        blog, message = await MyBlogService(db).set_published(current_user, blog_id, publish.is_published)
        return OwnedBlogResponse(message=message, blog=OwnedBlogInDB.model_validate(blog))
    except (HTTPException, ServiceError):
        raise
    except Exception as e:
        logger.error(f"Publish status error: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to update publish status"
        )

@router.delete("/blog/{blog_id}", response_model=MessageResponse)
async def delete_blog(
    blog_id: int,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """Delete a blog"""
    try:
        await MyBlogService(db).delete(current_user, blog_id)
        return MessageResponse(message=MyBlogMessages.BLOG_DELETED)
    except (HTTPException, ServiceError):
        raise
    except Exception as e:
        logger.error(f"Delete blog error: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to delete blog"
        )
