from datetime import datetime, timezone
from types import SimpleNamespace

import pytest

from alphatrive.core.exceptions import AlreadyExists, AlreadyLiked, Forbidden, InvalidInput, NotFound, NotYetLiked
from alphatrive.core.token_service import TokenService
from alphatrive.services.auth_service import AuthService
from alphatrive.services.comment_service import CommentService
from alphatrive.services.like_service import LikeService
from alphatrive.services.post_service import PostService, comment_view, parse_tags
from alphatrive.utils.pagination import Page
from alphatrive.utils.snowflake import MAX_ID, ClockMovedBackwards, Snowflake, created_at, is_valid_id

from .conftest import TEST_SECRET


@pytest.fixture
def auth(db):
    return AuthService(db, TokenService(TEST_SECRET))


@pytest.fixture
def alice(auth):
    return auth.register("alice", "alice@example.com", "secret")


@pytest.fixture
def bob(auth):
    return auth.register("bob", "bob@example.com", "secret")


def test_register_and_login_round_trip(auth, alice):
    token, user = auth.login("Alice@Example.com", "secret")
    assert user.id == alice.id
    assert auth.token_service.verify(token) == alice.id


def test_register_rejects_duplicate_email(auth, alice):
    with pytest.raises(AlreadyExists):
        auth.register("alice2", "alice@example.com", "other")


def test_create_post_requires_text_fields(db, alice):
    with pytest.raises(InvalidInput):
        PostService(db).create_post(alice.id, "AAPL", "", "d")


def test_like_constraint_catches_racing_duplicate(db, alice, monkeypatch):
    post = PostService(db).create_post(alice.id, "AAPL", "t", "d")
    likes = LikeService(db)
    likes.like(alice.id, post.id)

    # the membership check sees the state from before the first like landed
    real_has_liked = LikeService.has_liked
    checks = []

    def stale_first_check(self, user_id, post_id):
        checks.append(post_id)
        return False if len(checks) == 1 else real_has_liked(self, user_id, post_id)

    monkeypatch.setattr(LikeService, "has_liked", stale_first_check)
    with pytest.raises(AlreadyLiked):
        likes.like(alice.id, post.id)

    monkeypatch.undo()
    assert likes.has_liked(alice.id, post.id)
    likes.unlike(alice.id, post.id)
    with pytest.raises(NotYetLiked):
        likes.unlike(alice.id, post.id)


def test_like_set_counts_distinct_users(db, alice, bob):
    posts = PostService(db)
    post = posts.create_post(alice.id, "AAPL", "t", "d")
    LikeService(db).like(alice.id, post.id)
    LikeService(db).like(bob.id, post.id)
    assert posts.get_post_detail(post.id)["likes_count"] == 2


def test_ownership_checks(db, alice, bob):
    posts = PostService(db)
    comments = CommentService(db)
    post = posts.create_post(alice.id, "AAPL", "t", "d")
    comment = comments.add_comment(alice.id, post.id, "mine")

    with pytest.raises(Forbidden):
        comments.delete_comment(bob.id, post.id, comment.id)
    with pytest.raises(Forbidden):
        posts.delete_post(bob.id, post.id)

    comments.delete_comment(alice.id, post.id, comment.id)
    posts.delete_post(alice.id, post.id)
    with pytest.raises(NotFound):
        posts.get_post(post.id)


def test_list_posts_returns_slice_and_total(db, alice):
    posts = PostService(db)
    for i in range(5):
        posts.create_post(alice.id, "AAPL", str(i), "d", tags=["even" if i % 2 == 0 else "odd"])

    items, total = posts.list_posts(Page(page=1, limit=2), tags=["even"])
    assert total == 3
    assert [p.title for p in items] == ["0", "2"]


def test_comment_view_tolerates_missing_author():
    comment = SimpleNamespace(id=1, post_id=2, user_id=3, author=None, content="hi", created_at=datetime(2024, 1, 1))
    assert comment_view(comment)["user"] == {"id": 3, "username": None}


@pytest.mark.parametrize("raw,expected", [
    (None, []),
    ("", []),
    ("tech", ["tech"]),
    ("tech, value ,,growth", ["tech", "value", "growth"]),
])
def test_parse_tags(raw, expected):
    assert parse_tags(raw) == expected


@pytest.mark.parametrize("total,limit,pages", [(0, 10, 0), (1, 10, 1), (10, 10, 1), (15, 10, 2), (21, 10, 3)])
def test_page_meta_total_pages(total, limit, pages):
    assert Page(page=1, limit=limit).meta(total)["totalPages"] == pages


def test_page_offset():
    assert Page(page=3, limit=10).offset == 20


def test_snowflake_ids_are_unique_and_increasing():
    gen = Snowflake(datacenter_id=2, worker_id=3)
    ids = [gen.get_id() for _ in range(2000)]
    assert ids == sorted(ids)
    assert len(set(ids)) == len(ids)
    assert all(0 < i < 2 ** 63 for i in ids)


def test_snowflake_rejects_out_of_range_worker():
    with pytest.raises(ValueError):
        Snowflake(worker_id=32)


def fixed_clock(*readings):
    values = iter(readings)
    return lambda: next(values)


def test_snowflake_sequence_rolls_into_next_millisecond():
    start = 1735689600000  # 2025-01-01 UTC
    gen = Snowflake(clock=fixed_clock(*([start] * 4097 + [start, start + 1])))
    ids = [gen.get_id() for _ in range(4097)]
    assert len(set(ids)) == 4097
    assert created_at(ids[4095]) == datetime(2025, 1, 1, tzinfo=timezone.utc)
    assert ids[4096] >> 22 == (start + 1 - 1704067200000)


def test_snowflake_refuses_backwards_clock():
    gen = Snowflake(clock=fixed_clock(1735689600000, 1735689599000))
    gen.get_id()
    with pytest.raises(ClockMovedBackwards):
        gen.get_id()


@pytest.mark.parametrize("value,valid", [(0, False), (-1, False), (1, True), (MAX_ID, True), (MAX_ID + 1, False)])
def test_is_valid_id(value, valid):
    assert is_valid_id(value) is valid
