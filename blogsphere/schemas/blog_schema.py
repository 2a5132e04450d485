from pydantic import BaseModel, ConfigDict, Field, AliasChoices, StrictBool, ValidationInfo, field_validator
from typing import Optional, List
from datetime import datetime
from blogsphere.constants import Category

def _required_text(value: str, label: str) -> str:
    value = value.strip()
    if not value:
        raise ValueError(f"{label} is required")
    return value

class BlogBase(BaseModel):
    title: str = Field(..., min_length=1, max_length=200)
    content: str = Field(..., min_length=1)
    tags: List[str] = Field(default_factory=list)
    categories: List[Category] = Field(
        ...,
        min_length=1,
        validation_alias=AliasChoices("categories", "preference"),
    )
    image: Optional[str] = None

    @field_validator("title", "content")
    @classmethod
    def strip_text(cls, value: str, info: ValidationInfo) -> str:
        return _required_text(value, info.field_name.capitalize())

class BlogCreate(BlogBase):
    is_published: bool = Field(False, validation_alias=AliasChoices("is_published", "isPublished"))

class BlogUpdate(BaseModel):
    """Merge-patch over a blog's content fields"""
    title: Optional[str] = Field(None, min_length=1, max_length=200)
    content: Optional[str] = Field(None, min_length=1)
    tags: Optional[List[str]] = None
    categories: Optional[List[Category]] = Field(
        None,
        min_length=1,
        validation_alias=AliasChoices("categories", "preference"),
    )
    image: Optional[str] = None

    @field_validator("title", "content")
    @classmethod
    def strip_text(cls, value: Optional[str], info: ValidationInfo) -> Optional[str]:
        if value is None:
            return value
        return _required_text(value, info.field_name.capitalize())

class PublishStatusUpdate(BaseModel):
    is_published: StrictBool = Field(..., validation_alias=AliasChoices("is_published", "isPublished"))

class BlockRequest(BaseModel):
    user_id: int = Field(..., gt=0)

class AuthorInfo(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    image: Optional[str] = None

class BlogInDB(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    author_id: int
    author: Optional[AuthorInfo] = None
    title: str
    content: str
    tags: List[str] = []
    categories: List[str]
    image: Optional[str] = None
    is_published: bool
    like_count: int = 0
    dislike_count: int = 0
    liked_by: List[int] = []
    disliked_by: List[int] = []
    created_at: datetime
    updated_at: datetime

    @field_validator("liked_by", "disliked_by", mode="before")
    @classmethod
    def sort_ids(cls, value):
        return sorted(value) if value is not None else []

class OwnedBlogInDB(BlogInDB):
    """Author's view, includes the block-list"""
    blocked_users: List[int] = []

    @field_validator("blocked_users", mode="before")
    @classmethod
    def sort_blocked(cls, value):
        return sorted(value) if value is not None else []

class BlogResponse(BaseModel):
    message: str
    blog: BlogInDB

class OwnedBlogResponse(BaseModel):
    message: str
    blog: OwnedBlogInDB

class BlogListResponse(BaseModel):
    message: str
    blogs: List[BlogInDB]
    skip: int
    limit: int
    has_more: bool

class OwnedBlogListResponse(BaseModel):
    message: str
    blogs: List[OwnedBlogInDB]
    skip: int
    limit: int
    has_more: bool

class ReactionCounts(BaseModel):
    message: str
    blog_id: int
    like_count: int
    dislike_count: int
    liked: bool
    disliked: bool

class BlockResult(BaseModel):
    message: str
    blog_id: int
    user_id: int
    blocked: bool
