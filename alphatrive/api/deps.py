from typing import Optional

from fastapi import Depends, Header, Request
from sqlalchemy.orm import Session

from alphatrive.config.settings import Settings
from alphatrive.core.exceptions import Unauthenticated
from alphatrive.core.token_service import TokenService
from alphatrive.database.init_db import get_db
from alphatrive.services.auth_service import AuthService
from alphatrive.services.comment_service import CommentService
from alphatrive.services.like_service import LikeService
from alphatrive.services.post_service import PostService
from alphatrive.services.user_service import UserService


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_token_service(request: Request) -> TokenService:
    return request.app.state.token_service


def get_current_user_id(
    authorization: Optional[str] = Header(default=None),
    token_service: TokenService = Depends(get_token_service),
) -> int:
    """Auth gate for protected routes.

    Expects ``Authorization: Bearer <token>`` and resolves it to the caller's
    user id. Anything else short-circuits the request with 401.
    """
    if not authorization:
        raise Unauthenticated()
    scheme, _, token = authorization.partition(" ")
    token = token.strip()
    if scheme.lower() != "bearer" or not token:
        raise Unauthenticated("Token is not valid")
    return token_service.verify(token)


# service factories, one per request
def get_auth_service(db: Session = Depends(get_db), token_service: TokenService = Depends(get_token_service)):
    return AuthService(db, token_service)


def get_user_service(db: Session = Depends(get_db)):
    return UserService(db)


def get_post_service(db: Session = Depends(get_db)):
    return PostService(db)


def get_like_service(db: Session = Depends(get_db)):
    return LikeService(db)


def get_comment_service(db: Session = Depends(get_db)):
    return CommentService(db)
