"""
Models package for Blogsphere API
"""
from blogsphere.db.base import Base, BaseModel
from blogsphere.models.user import User
from blogsphere.models.blog import Blog
from blogsphere.models.reaction import BlogReaction
from blogsphere.models.block import BlogBlock
from blogsphere.models.category import BlogCategory

__all__ = [
    'Base',
    'BaseModel',
    'User',
    'Blog',
    'BlogReaction',
    'BlogBlock',
    'BlogCategory',
]
