import logging

from alphatrive.core.exceptions import Forbidden, NotFound
from alphatrive.models.comment import Comment
from alphatrive.models.post import Post
from .base import BaseService

logger = logging.getLogger(__name__)


class CommentService(BaseService):

    def add_comment(self, user_id: int, post_id: int, content: str) -> Comment:
        # the row itself is the post's comment-list entry, so this is one write
        if self._get(Post, post_id) is None:
            raise NotFound("Post not found")
        self._require_user(user_id)

        comment = Comment(user_id=user_id, post_id=post_id, content=content)
        self.db.add(comment)
        self._commit("add comment")
        logger.info(f"Comment added: comment_id={comment.id}, post_id={post_id}, user_id={user_id}")
        return comment

    def delete_comment(self, user_id: int, post_id: int, comment_id: int):
        comment = self._get(Comment, comment_id)
        if comment is None or comment.post_id != post_id:
            raise NotFound("Comment not found")
        if comment.user_id != user_id:
            logger.warning(f"Comment delete refused: comment_id={comment_id}, author={comment.user_id}, caller={user_id}")
            raise Forbidden()

        self.db.delete(comment)
        self._commit("delete comment")
        logger.info(f"Comment deleted: comment_id={comment_id}, user_id={user_id}")
