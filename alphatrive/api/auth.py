from fastapi import APIRouter, Depends

from alphatrive.schemas.user import (
    LoginRequest, LoginResponse, LoginUser, RegisterRequest, RegisterResponse, RegisteredUser,
)
from alphatrive.services.auth_service import AuthService
from .deps import get_auth_service

auth_router = APIRouter()


@auth_router.post("/register", status_code=201, response_model=RegisterResponse)
def register(body: RegisterRequest, auth_service: AuthService = Depends(get_auth_service)):
    user = auth_service.register(body.username, body.email, body.password)
    return RegisterResponse(
        message="User registered successfully",
        user_id=user.id,
        registered_user=RegisteredUser.model_validate(user),
    )


@auth_router.post("/login", response_model=LoginResponse)
def login(body: LoginRequest, auth_service: AuthService = Depends(get_auth_service)):
    token, user = auth_service.login(body.email, body.password)
    return LoginResponse(token=token, user=LoginUser.model_validate(user))
