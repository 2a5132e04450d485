from sqlalchemy import Column, Integer, ForeignKey, String, UniqueConstraint, Index
from sqlalchemy.orm import relationship
from blogsphere.db.base import BaseModel

class BlogCategory(BaseModel):
    """One category of a blog; ``position`` keeps the order the author gave"""
    __tablename__ = "blog_categories"

    blog_id = Column(Integer, ForeignKey("blogs.id", ondelete="CASCADE"), nullable=False)
    category = Column(String(30), nullable=False)
    position = Column(Integer, default=0, nullable=False)

    # Relationships
    blog = relationship("Blog", back_populates="category_rows")

    __table_args__ = (
        UniqueConstraint('blog_id', 'category', name='uq_blog_categories_blog_category'),
        Index('ix_blog_categories_category', 'category'),
    )
