from sqlalchemy import (
    Column, BigInteger, Integer, String, Text, DateTime, ForeignKey,
    UniqueConstraint, select, func,
)
from sqlalchemy.orm import relationship, column_property

from alphatrive.utils.snowflake import next_id
from .base import Base, utcnow


class PostTag(Base):
    __tablename__ = "post_tags"
    post_id = Column(BigInteger, ForeignKey("posts.id", ondelete="CASCADE"), primary_key=True)
    position = Column(Integer, primary_key=True)
    tag = Column(String(100), nullable=False, index=True)


class PostLike(Base):
    """One row per (post, user); the unique constraint is what keeps the like-set a set."""
    __tablename__ = "post_likes"
    __table_args__ = (UniqueConstraint("post_id", "user_id", name="uq_post_likes_post_user"),)

    id = Column(BigInteger, primary_key=True, autoincrement=False, default=next_id)
    post_id = Column(BigInteger, ForeignKey("posts.id", ondelete="CASCADE"), nullable=False, index=True)
    user_id = Column(BigInteger, ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    created_at = Column(DateTime, nullable=False, default=utcnow)


class Post(Base):
    __tablename__ = "posts"
    id = Column(BigInteger, primary_key=True, autoincrement=False, default=next_id)
    user_id = Column(BigInteger, ForeignKey("users.id"), nullable=False, index=True)
    stock_symbol = Column(String(20), nullable=False, index=True)
    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=False)
    created_at = Column(DateTime, nullable=False, default=utcnow, index=True)

    likes_count = column_property(
        select(func.count(PostLike.id))
        .where(PostLike.post_id == id)
        .correlate_except(PostLike)
        .scalar_subquery()
    )

    author = relationship("User")
    tag_rows = relationship(
        "PostTag", order_by=PostTag.position, cascade="all, delete-orphan", passive_deletes=True
    )
    # newest like first
    likes = relationship(
        "PostLike", order_by=PostLike.id.desc(), cascade="all, delete-orphan", passive_deletes=True
    )
    comments = relationship(
        "Comment", back_populates="post", order_by="Comment.id",
        cascade="all, delete-orphan", passive_deletes=True,
    )

    @property
    def tags(self):
        return [row.tag for row in self.tag_rows]

    @tags.setter
    def tags(self, values):
        self.tag_rows = [PostTag(position=i, tag=tag) for i, tag in enumerate(values or [])]

    def __repr__(self):
        return f"<Post id={self.id} stock_symbol={self.stock_symbol!r}>"
