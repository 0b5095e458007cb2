from fastapi import APIRouter, Depends

from alphatrive.schemas.base import MessageResponse
from alphatrive.schemas.post import CommentCreateRequest, CommentCreateResponse
from alphatrive.services.comment_service import CommentService
from .deps import get_comment_service, get_current_user_id

comment_router = APIRouter()


@comment_router.post("/{post_id}/comments", response_model=CommentCreateResponse)
def add_comment(post_id: int, body: CommentCreateRequest, caller_id: int = Depends(get_current_user_id),
                comment_service: CommentService = Depends(get_comment_service)):
    comment = comment_service.add_comment(caller_id, post_id, body.comment)
    return CommentCreateResponse(comment_id=comment.id, message="Comment added successfully")


@comment_router.delete("/{post_id}/comments/{comment_id}", response_model=MessageResponse)
def delete_comment(post_id: int, comment_id: int, caller_id: int = Depends(get_current_user_id),
                   comment_service: CommentService = Depends(get_comment_service)):
    comment_service.delete_comment(caller_id, post_id, comment_id)
    return MessageResponse(message="Comment deleted successfully")
