from sqlalchemy import Column, Integer, ForeignKey, String, CheckConstraint, UniqueConstraint, Index
from sqlalchemy.orm import relationship
from blogsphere.db.base import BaseModel

class BlogReaction(BaseModel):
    """A viewer's like or dislike on a blog; at most one per viewer"""
    __tablename__ = "blog_reactions"

    blog_id = Column(Integer, ForeignKey("blogs.id", ondelete="CASCADE"), nullable=False)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    kind = Column(String(10), nullable=False)  # 'like', 'dislike'

    # Relationships
    blog = relationship("Blog", back_populates="reactions")

    __table_args__ = (
        UniqueConstraint('blog_id', 'user_id', name='uq_blog_reactions_blog_user'),
        CheckConstraint("kind IN ('like', 'dislike')", name='ck_blog_reactions_kind'),
        Index('ix_blog_reactions_user_id', 'user_id'),
    )
