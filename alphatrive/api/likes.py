from fastapi import APIRouter, Depends

from alphatrive.schemas.base import MessageResponse
from alphatrive.services.like_service import LikeService
from .deps import get_current_user_id, get_like_service

like_router = APIRouter()


@like_router.post("/{post_id}/like", response_model=MessageResponse)
def like_post(post_id: int, caller_id: int = Depends(get_current_user_id),
              like_service: LikeService = Depends(get_like_service)):
    like_service.like(caller_id, post_id)
    return MessageResponse(message="Post liked")


@like_router.delete("/{post_id}/like", response_model=MessageResponse)
def unlike_post(post_id: int, caller_id: int = Depends(get_current_user_id),
                like_service: LikeService = Depends(get_like_service)):
    like_service.unlike(caller_id, post_id)
    return MessageResponse(message="Post unliked")
