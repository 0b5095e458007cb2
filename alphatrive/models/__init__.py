# models/__init__.py
from .base import Base
from .user import User
from .post import Post, PostTag, PostLike
from .comment import Comment
