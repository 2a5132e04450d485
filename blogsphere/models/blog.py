from typing import Iterable, List
from sqlalchemy import Column, String, Text, Integer, ForeignKey, Boolean, JSON, Index
from sqlalchemy.orm import relationship
from blogsphere.constants import ReactionKind
from blogsphere.db.base import BaseModel
from blogsphere.models.category import BlogCategory

class Blog(BaseModel):
    __tablename__ = "blogs"

    author_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    title = Column(String(200), nullable=False)
    content = Column(Text, nullable=False)
    tags = Column(JSON, default=list, nullable=False)
    image = Column(String(500))
    is_published = Column(Boolean, default=False, nullable=False)

    # Denormalized, rewritten from reactions by InteractionService only
    like_count = Column(Integer, default=0, nullable=False)
    dislike_count = Column(Integer, default=0, nullable=False)

    # Bumped on every UPDATE; a stale write raises StaleDataError
    version = Column(Integer, nullable=False)

    # Relationships
    author = relationship("User", back_populates="blogs", lazy="selectin")
    reactions = relationship(
        "BlogReaction",
        back_populates="blog",
        cascade="all, delete-orphan",
        lazy="selectin",
    )
    blocks = relationship(
        "BlogBlock",
        back_populates="blog",
        cascade="all, delete-orphan",
        lazy="selectin",
    )
    # Rows rather than a JSON list so feeds can filter by category in SQL
    category_rows = relationship(
        "BlogCategory",
        back_populates="blog",
        cascade="all, delete-orphan",
        lazy="selectin",
        order_by="BlogCategory.position",
    )

    __mapper_args__ = {"version_id_col": version}

    __table_args__ = (
        Index('ix_blogs_author_id', 'author_id'),
        Index('ix_blogs_created_at', 'created_at'),
        Index('ix_blogs_is_published', 'is_published'),
    )

    @property
    def liked_by(self) -> set:
        return {r.user_id for r in self.reactions if r.kind == ReactionKind.LIKE.value}

    @property
    def disliked_by(self) -> set:
        return {r.user_id for r in self.reactions if r.kind == ReactionKind.DISLIKE.value}

    @property
    def blocked_users(self) -> set:
        return {b.user_id for b in self.blocks}

    @property
    def categories(self) -> List[str]:
        return [row.category for row in self.category_rows]

    @categories.setter
    def categories(self, values: Iterable[str]) -> None:
        # Reuse rows for categories that stay, so the unique constraint
        # never sees a delete and an insert of the same pair in one flush
        existing = {row.category: row for row in self.category_rows}
        rows = []
        for position, category in enumerate(dict.fromkeys(values)):
            row = existing.get(category) or BlogCategory(category=category)
            row.position = position
            rows.append(row)
        self.category_rows = rows
