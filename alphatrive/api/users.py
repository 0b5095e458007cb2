from fastapi import APIRouter, Depends

from alphatrive.schemas.base import MessageResponse
from alphatrive.schemas.user import ProfileResponse, ProfileUpdateRequest
from alphatrive.services.user_service import UserService
from .deps import get_current_user_id, get_user_service

user_router = APIRouter()


@user_router.get("/profile/{user_id}", response_model=ProfileResponse)
def get_profile(user_id: int, _caller: int = Depends(get_current_user_id),
                user_service: UserService = Depends(get_user_service)):
    return ProfileResponse.model_validate(user_service.get_profile(user_id))


@user_router.put("/profile", response_model=MessageResponse)
def update_profile(body: ProfileUpdateRequest, caller_id: int = Depends(get_current_user_id),
                   user_service: UserService = Depends(get_user_service)):
    user_service.update_profile(caller_id, body.model_dump(exclude_unset=True))
    return MessageResponse(message="Profile updated")
