import logging
from typing import Tuple

from sqlalchemy.orm import Session

from alphatrive.core.exceptions import InvalidCredentials, NotFound
from alphatrive.core.passwords import hash_password, verify_password
from alphatrive.core.token_service import TokenService
from alphatrive.models.user import User
from .user_service import UserService

logger = logging.getLogger(__name__)


class AuthService:
    """Registration and login on top of the credential store."""

    def __init__(self, db: Session, token_service: TokenService):
        self.users = UserService(db)
        self.token_service = token_service

    def register(self, username: str, email: str, password: str) -> User:
        # only the hash ever leaves this function
        user = self.users.create_user(username, email, hash_password(password))
        logger.info(f"User registered: user_id={user.id}")
        return user

    def login(self, email: str, password: str) -> Tuple[str, User]:
        user = self.users.get_user_by_email(email)
        if not user:
            logger.warning("Login failed: unknown email")
            raise NotFound("User not found")
        if not verify_password(user.password_hash, password):
            logger.warning(f"Login failed: bad password for user_id={user.id}")
            raise InvalidCredentials()
        return self.token_service.issue(user.id), user
