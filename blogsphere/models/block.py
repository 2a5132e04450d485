from sqlalchemy import Column, Integer, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship
from blogsphere.db.base import BaseModel

class BlogBlock(BaseModel):
    __tablename__ = "blog_blocks"

    blog_id = Column(Integer, ForeignKey("blogs.id", ondelete="CASCADE"), nullable=False)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False)

    # Relationships
    blog = relationship("Blog", back_populates="blocks")

    __table_args__ = (
        UniqueConstraint('blog_id', 'user_id', name='uq_blog_blocks_blog_user'),
    )
