import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from alphatrive.core.exceptions import Internal, NotFound
from alphatrive.models.user import User
from alphatrive.utils.snowflake import is_valid_id

logger = logging.getLogger(__name__)


class BaseService:
    def __init__(self, db: Session):
        self.db = db

    def _get(self, model, ident: int):
        """Primary-key lookup; ids outside the BIGINT range cannot exist."""
        if not is_valid_id(ident):
            return None
        return self.db.get(model, ident)

    def _require_user(self, user_id: int) -> User:
        # a validly signed token can still name a user this database never had
        user = self._get(User, user_id)
        if user is None:
            raise NotFound("User not found")
        return user

    def _commit(self, action: str):
        """Commit the current unit of work, rolling back on failure."""
        try:
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"{action} failed: {e}")
            raise Internal() from e
