import logging
from typing import Optional

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError

from alphatrive.core.exceptions import AlreadyExists, NotFound
from alphatrive.models.user import User
from .base import BaseService

logger = logging.getLogger(__name__)

PROFILE_FIELDS = ("username", "bio", "profile_picture")


class UserService(BaseService):

    # lookups
    def get_user(self, user_id: int) -> Optional[User]:
        return self._get(User, user_id)

    def get_user_by_email(self, email: str) -> Optional[User]:
        return self.db.execute(select(User).where(User.email == email.lower())).scalar_one_or_none()

    def get_user_by_username(self, username: str) -> Optional[User]:
        return self.db.execute(select(User).where(User.username == username)).scalar_one_or_none()

    # create
    def create_user(self, username: str, email: str, password_hash: str) -> User:
        if self.get_user_by_email(email):
            raise AlreadyExists()
        if self.get_user_by_username(username):
            raise AlreadyExists("Username already taken")

        user = User(username=username, email=email.lower(), password_hash=password_hash)
        self.db.add(user)
        try:
            self.db.flush()
        except IntegrityError:
            # lost a race with a concurrent registration
            self.db.rollback()
            raise AlreadyExists()
        self._commit("create user")
        return user

    # profile
    def get_profile(self, user_id: int) -> User:
        user = self.get_user(user_id)
        if not user:
            raise NotFound("User not found")
        return user

    def update_profile(self, user_id: int, fields: dict) -> User:
        """Overwrite the given profile fields on the caller's own record.

        ``user_id`` must be the authenticated identity; ids in request bodies
        are never consulted.
        """
        user = self.get_profile(user_id)

        username = fields.get("username")
        if username is not None and username != user.username:
            holder = self.get_user_by_username(username)
            if holder is not None and holder.id != user.id:
                raise AlreadyExists("Username already taken")

        for name in PROFILE_FIELDS:
            value = fields.get(name)
            if value is not None:
                setattr(user, name, value)

        try:
            self.db.flush()
        except IntegrityError:
            self.db.rollback()
            raise AlreadyExists("Username already taken")
        self._commit("update profile")
        logger.info(f"Profile updated: user_id={user.id}")
        return user
