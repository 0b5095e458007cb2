import logging

from sqlalchemy import select, delete
from sqlalchemy.exc import IntegrityError

from alphatrive.core.exceptions import AlreadyLiked, NotFound, NotYetLiked
from alphatrive.models.post import Post, PostLike
from .base import BaseService

logger = logging.getLogger(__name__)


class LikeService(BaseService):
    """The per-post like-set.

    Membership changes are single-row writes guarded by the
    (post_id, user_id) unique constraint, so two concurrent likes by the
    same user cannot both succeed and an unlike cannot resurrect a like.
    """

    def _require_post(self, post_id: int):
        if self._get(Post, post_id) is None:
            raise NotFound("Post not found")

    def has_liked(self, user_id: int, post_id: int) -> bool:
        stmt = select(PostLike.id).where(PostLike.post_id == post_id, PostLike.user_id == user_id)
        return self.db.execute(stmt).first() is not None

    def like(self, user_id: int, post_id: int):
        self._require_post(post_id)
        self._require_user(user_id)
        if self.has_liked(user_id, post_id):
            raise AlreadyLiked()

        self.db.add(PostLike(post_id=post_id, user_id=user_id))
        try:
            self.db.flush()
        except IntegrityError:
            self.db.rollback()
            # a concurrent like by the same user won the insert
            if self.has_liked(user_id, post_id):
                raise AlreadyLiked()
            raise NotFound("User not found")
        self._commit("like post")
        logger.info(f"Post liked: post_id={post_id}, user_id={user_id}")

    def unlike(self, user_id: int, post_id: int):
        self._require_post(post_id)
        result = self.db.execute(
            delete(PostLike).where(PostLike.post_id == post_id, PostLike.user_id == user_id)
        )
        if result.rowcount == 0:
            self.db.rollback()
            raise NotYetLiked()
        self._commit("unlike post")
        logger.info(f"Post unliked: post_id={post_id}, user_id={user_id}")
