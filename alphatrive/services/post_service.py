import logging
from typing import Any, Dict, List, Optional, Tuple

from sqlalchemy import select, func
from sqlalchemy.orm import selectinload

from alphatrive.core.exceptions import Forbidden, InvalidInput, NotFound
from alphatrive.models.comment import Comment
from alphatrive.models.post import Post, PostTag
from alphatrive.utils.pagination import Page
from alphatrive.utils.snowflake import is_valid_id
from .base import BaseService

logger = logging.getLogger(__name__)

SORT_DATE = "date"
SORT_LIKES = "likes"


def parse_tags(raw: Optional[str]) -> List[str]:
    """Split the comma-separated ``tags`` query parameter."""
    if not raw:
        return []
    return [tag.strip() for tag in raw.split(",") if tag.strip()]


def user_brief(user_id: int, user) -> Dict[str, Any]:
    # the referenced user may be gone; keep the id and null the name
    return {"id": user_id, "username": user.username if user is not None else None}


def comment_view(comment: Comment) -> Dict[str, Any]:
    return {
        "id": comment.id,
        "post_id": comment.post_id,
        "user": user_brief(comment.user_id, comment.author),
        "content": comment.content,
        "created_at": comment.created_at,
    }


class PostService(BaseService):

    def get_post(self, post_id: int) -> Post:
        post = self._get(Post, post_id)
        if not post:
            raise NotFound("Post not found")
        return post

    # ---------- create ----------

    def create_post(self, user_id: int, stock_symbol: str, title: str, description: str,
                    tags: Optional[List[str]] = None) -> Post:
        for name, value in (("stockSymbol", stock_symbol), ("title", title), ("description", description)):
            if not value or not value.strip():
                raise InvalidInput(f"{name} is required")
        self._require_user(user_id)

        post = Post(
            user_id=user_id,
            stock_symbol=stock_symbol.strip(),
            title=title.strip(),
            description=description.strip(),
        )
        post.tags = tags or []
        self.db.add(post)
        self._commit("create post")
        logger.info(f"Post created: post_id={post.id}, user_id={user_id}, symbol={post.stock_symbol}")
        return post

    # ---------- read ----------

    def list_posts(self, page: Page, stock_symbol: Optional[str] = None,
                   tags: Optional[List[str]] = None, sort_by: Optional[str] = None) -> Tuple[List[Post], int]:
        """Filter, sort and paginate posts.

        Filters are AND-combined: ``stock_symbol`` matches exactly, ``tags``
        matches posts carrying at least one of the given tags. Returns the
        requested slice and the total number of matching posts.
        """
        stmt = select(Post)
        if stock_symbol:
            stmt = stmt.where(Post.stock_symbol == stock_symbol)
        if tags:
            stmt = stmt.where(Post.id.in_(select(PostTag.post_id).where(PostTag.tag.in_(tags))))

        total = self.db.execute(select(func.count()).select_from(stmt.subquery())).scalar_one()

        if sort_by == SORT_DATE:
            stmt = stmt.order_by(Post.created_at.desc(), Post.id.desc())
        elif sort_by == SORT_LIKES:
            stmt = stmt.order_by(Post.likes_count.desc(), Post.id.desc())
        elif sort_by is None:
            stmt = stmt.order_by(Post.id)
        else:
            raise InvalidInput("sortBy must be 'date' or 'likes'")

        posts = self.db.execute(stmt.offset(page.offset).limit(page.limit)).scalars().all()
        return list(posts), total

    def get_post_detail(self, post_id: int) -> Dict[str, Any]:
        """Load a post with its author, tags, likes and comments resolved."""
        stmt = (
            select(Post)
            .options(
                selectinload(Post.author),
                selectinload(Post.tag_rows),
                selectinload(Post.likes),
                selectinload(Post.comments).selectinload(Comment.author),
            )
            .where(Post.id == post_id)
        )
        post = self.db.execute(stmt).scalar_one_or_none() if is_valid_id(post_id) else None
        if not post:
            raise NotFound("Post not found")

        return {
            "id": post.id,
            "user": user_brief(post.user_id, post.author),
            "stock_symbol": post.stock_symbol,
            "title": post.title,
            "description": post.description,
            "tags": post.tags,
            "likes": [like.user_id for like in post.likes],
            "likes_count": len(post.likes),
            "comments": [comment_view(c) for c in post.comments],
            "created_at": post.created_at,
        }

    # ---------- delete ----------

    def delete_post(self, user_id: int, post_id: int):
        """Delete a post owned by ``user_id`` together with its comments, likes and tags."""
        post = self.get_post(post_id)
        if post.user_id != user_id:
            logger.warning(f"Post delete refused: post_id={post_id}, owner={post.user_id}, caller={user_id}")
            raise Forbidden()

        self.db.delete(post)
        self._commit("delete post")
        logger.info(f"Post deleted: post_id={post_id}, user_id={user_id}")
