from fastapi import APIRouter, Depends, HTTPException, status, Query
from sqlalchemy.ext.asyncio import AsyncSession
import logging

from blogsphere.config import settings
from blogsphere.constants import BlogMessages
from blogsphere.exceptions import ServiceError
from blogsphere.schemas.blog_schema import (
    BlockRequest,
    BlockResult,
    BlogCreate,
    BlogInDB,
    BlogListResponse,
    BlogResponse,
    ReactionCounts,
)
from blogsphere.services.blog_service import BlogService
from blogsphere.services.interaction_service import InteractionService
from blogsphere.services.auth_service import get_current_user
from blogsphere.db.session import get_db
from blogsphere.models.user import User

logger = logging.getLogger(__name__)

router = APIRouter()

@router.post("/new-blog", response_model=BlogResponse, status_code=status.HTTP_201_CREATED)
async def create_blog(
    blog_data: BlogCreate,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """Create a new blog (a draft unless is_published is set)"""
    try:
        blog_service = BlogService(db)
        blog = await blog_service.create_blog(current_user, blog_data)
        return BlogResponse(message=BlogMessages.BLOG_CREATED, blog=BlogInDB.model_validate(blog))
    except (HTTPException, ServiceError):
        raise
    except Exception as e:
        logger.error(f"Create blog error: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to create blog"
        )

@router.get("/all-blogs", response_model=BlogListResponse)
async def get_all_blogs(
    skip: int = Query(0, ge=0),
    limit: int = Query(settings.DEFAULT_PAGE_SIZE, ge=1, le=100),
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """Blogs visible to the current user, filtered by their preferences"""
    try:
        blog_service = BlogService(db)
        blogs, has_more = await blog_service.list_visible(current_user, skip, limit)
        return BlogListResponse(
            message=BlogMessages.ALL_BLOGS_FETCHED,
            blogs=[BlogInDB.model_validate(blog) for blog in blogs],
            skip=skip,
            limit=limit,
            has_more=has_more,
        )
    except (HTTPException, ServiceError):
        raise
    except Exception as e:
        logger.error(f"Get blogs error: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to get blogs"
        )

@router.get("/latest", response_model=BlogListResponse)
async def get_latest_blogs(
    limit: int = Query(settings.LATEST_BLOGS_LIMIT, ge=1, le=50),
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """Newest blogs from the current user's feed"""
    try:
        blog_service = BlogService(db)
        blogs = await blog_service.latest(current_user, limit)
        return BlogListResponse(
            message=BlogMessages.LATEST_BLOGS_FETCHED,
            blogs=[BlogInDB.model_validate(blog) for blog in blogs],
            skip=0,
            limit=limit,
            has_more=False,
        )
    except (HTTPException, ServiceError):
        raise
    except Exception as e:
        logger.error(f"Get latest blogs error: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to get latest blogs"
        )

@router.get("/blogs/{blog_id}", response_model=BlogResponse)
async def get_blog(
    blog_id: int,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """Get a blog by ID"""
    try:
        blog_service = BlogService(db)
        blog = await blog_service.get_visible(current_user, blog_id)
        return BlogResponse(message=BlogMessages.BLOG_FETCHED, blog=BlogInDB.model_validate(blog))
    except (HTTPException, ServiceError):
        raise
    except Exception as e:
        logger.error(f"Get blog error: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to get blog"
        )

@router.patch("/like/{blog_id}", response_model=ReactionCounts)
async def like_blog(
    blog_id: int,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """Toggle a like on a blog"""
    try:
        return await InteractionService(db).like(current_user.id, blog_id)
    except (HTTPException, ServiceError):
        raise
    except Exception as e:
        logger.error(f"Like blog error: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to like blog"
        )

@router.patch("/dislike/{blog_id}", response_model=ReactionCounts)
async def dislike_blog(
    blog_id: int,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """Toggle a dislike on a blog"""
    try:
        return await InteractionService(db).dislike(current_user.id, blog_id)
    except (HTTPException, ServiceError):
        raise
    except Exception as e:
        logger.error(f"Dislike blog error: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to dislike blog"
        )

@router.patch("/block/{blog_id}", response_model=BlockResult)
async def toggle_block(
    blog_id: int,
    block: BlockRequest,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """Block or unblock a user from one of the current user's blogs"""
    try:
        return await InteractionService(db).toggle_block(current_user.id, blog_id, block.user_id)
    except (HTTPException, ServiceError):
        raise
    except Exception as e:
        logger.error(f"Block user error: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to update block-list"
        )
