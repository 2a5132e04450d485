from sqlalchemy import Column, String, Boolean, Date, JSON, Index
from sqlalchemy.orm import relationship
from blogsphere.constants import DEFAULT_PREFERENCES
from blogsphere.db.base import BaseModel

class User(BaseModel):
    __tablename__ = "users"

    name = Column(String(100), nullable=False)
    email = Column(String(100), unique=True, index=True, nullable=False)
    hashed_password = Column(String(255), nullable=False)
    mobile = Column(String(20), index=True, nullable=False)
    dob = Column(Date, nullable=False)
    image = Column(String(500))
    # Category values; drives the default blog feed
    preferences = Column(JSON, default=lambda: list(DEFAULT_PREFERENCES), nullable=False)
    is_active = Column(Boolean, default=True, nullable=False)

    # Relationships
    blogs = relationship("Blog", back_populates="author", cascade="all, delete-orphan")

    __table_args__ = (
        Index('ix_users_created_at', 'created_at'),
    )
