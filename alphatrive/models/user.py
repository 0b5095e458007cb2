from sqlalchemy import Column, BigInteger, String, DateTime, Text

from alphatrive.utils.snowflake import next_id
from .base import Base, utcnow


class User(Base):
    __tablename__ = "users"
    id = Column(BigInteger, primary_key=True, autoincrement=False, default=next_id)
    username = Column(String(50), nullable=False, unique=True)
    email = Column(String(255), nullable=False, unique=True, index=True)
    password_hash = Column(String(255), nullable=False)
    bio = Column(Text, nullable=False, default="")
    profile_picture = Column(String(512), nullable=False, default="")
    created_at = Column(DateTime, nullable=False, default=utcnow)

    def __repr__(self):
        return f"<User id={self.id} username={self.username!r}>"
