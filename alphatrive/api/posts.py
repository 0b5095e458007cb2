from typing import Literal, Optional

from fastapi import APIRouter, Depends, Query

from alphatrive.config.settings import Settings
from alphatrive.schemas.base import MessageResponse
from alphatrive.schemas.post import (
    Pagination, PostCreateRequest, PostCreateResponse, PostDetail, PostListItem, PostListResponse,
)
from alphatrive.services.post_service import PostService, parse_tags
from alphatrive.utils.pagination import MAX_PAGE, Page
from .deps import get_app_settings, get_current_user_id, get_post_service

post_router = APIRouter()


@post_router.post("", response_model=PostCreateResponse)
def create_post(body: PostCreateRequest, caller_id: int = Depends(get_current_user_id),
                post_service: PostService = Depends(get_post_service)):
    post = post_service.create_post(caller_id, body.stock_symbol, body.title, body.description, body.tags)
    return PostCreateResponse(post_id=post.id, message="Post created successfully")


@post_router.get("", response_model=PostListResponse)
def list_posts(
    stock_symbol: Optional[str] = Query(default=None, alias="stockSymbol"),
    tags: Optional[str] = Query(default=None, description="comma separated"),
    sort_by: Optional[Literal["date", "likes"]] = Query(default=None, alias="sortBy"),
    page: int = Query(default=1, ge=1, le=MAX_PAGE),
    limit: Optional[int] = Query(default=None, ge=1),
    settings: Settings = Depends(get_app_settings),
    post_service: PostService = Depends(get_post_service),
):
    page_req = Page(page=page, limit=min(limit or settings.default_page_size, settings.max_page_size))
    posts, total = post_service.list_posts(page_req, stock_symbol=stock_symbol,
                                           tags=parse_tags(tags), sort_by=sort_by)
    return PostListResponse(
        pagination=Pagination(**page_req.meta(total)),
        posts=[PostListItem.model_validate(p) for p in posts],
    )


@post_router.get("/{post_id}", response_model=PostDetail)
def get_post(post_id: int, post_service: PostService = Depends(get_post_service)):
    return PostDetail.model_validate(post_service.get_post_detail(post_id))


@post_router.delete("/{post_id}", response_model=MessageResponse)
def delete_post(post_id: int, caller_id: int = Depends(get_current_user_id),
                post_service: PostService = Depends(get_post_service)):
    post_service.delete_post(caller_id, post_id)
    return MessageResponse(message="Post deleted successfully")
