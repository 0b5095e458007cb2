from datetime import datetime
from typing import List

from pydantic import Field, field_validator

from .base import CamelModel
from .user import UserBrief


class PostCreateRequest(CamelModel):
    stock_symbol: str = Field(min_length=1, max_length=20)
    title: str = Field(min_length=1, max_length=255)
    description: str = Field(min_length=1)
    tags: List[str] = Field(default_factory=list)

    @field_validator("stock_symbol", "title", "description")
    @classmethod
    def not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("must not be blank")
        return v.strip()


class PostCreateResponse(CamelModel):
    success: bool = True
    post_id: str
    message: str


class PostListItem(CamelModel):
    id: str
    stock_symbol: str
    title: str
    description: str
    likes_count: int
    created_at: datetime


class Pagination(CamelModel):
    current_page: int
    total_pages: int
    total_posts: int
    limit: int


class PostListResponse(CamelModel):
    pagination: Pagination
    posts: List[PostListItem]


class CommentView(CamelModel):
    id: str
    post_id: str
    user: UserBrief
    content: str
    created_at: datetime


class PostDetail(CamelModel):
    id: str
    user: UserBrief
    stock_symbol: str
    title: str
    description: str
    tags: List[str]
    likes: List[str]
    likes_count: int
    comments: List[CommentView]
    created_at: datetime


class CommentCreateRequest(CamelModel):
    comment: str = Field(min_length=1)

    @field_validator("comment")
    @classmethod
    def not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("comment must not be blank")
        return v


class CommentCreateResponse(CamelModel):
    success: bool = True
    comment_id: str
    message: str

