import importlib

from sqlalchemy.ext.asyncio import AsyncSession

from core.exceptions import NotFoundError, ValidationError
from db.models.post import Post
from schemas.posts import DEFAULT_SUMMARY_LENGTH, PostDetail, PostForm, PostInput, PostListItem

POST_NOT_FOUND = "Post not found"


def _repo():
    return importlib.import_module("db.repositories.post_repository")


def _ensure_valid(data: PostInput) -> None:
    if not data.is_valid:
        raise ValidationError("; ".join(data.errors), details={"errors": list(data.errors)})


async def list_posts(db: AsyncSession, *, summary_length: int = DEFAULT_SUMMARY_LENGTH) -> list[PostListItem]:
    posts = await _repo().find_all_posts(db)
    return [PostListItem.from_post(p, summary_length) for p in posts]


async def get_post(db: AsyncSession, post_id: str, *, summary_length: int = DEFAULT_SUMMARY_LENGTH) -> PostDetail:
    post = await _repo().find_post_by_id(db, post_id)
    if not post:
        raise NotFoundError(POST_NOT_FOUND)
    return PostDetail.from_post(post, summary_length)


async def get_post_form(db: AsyncSession, post_id: str) -> PostForm:
    post = await _repo().find_post_by_id(db, post_id)
    if not post:
        raise NotFoundError(POST_NOT_FOUND)
    return PostForm.model_validate(post)


async def create_post(db: AsyncSession, data: PostInput) -> Post:
    _ensure_valid(data)
    post = await _repo().create_post(db, title=data.title, body=data.body)
    await db.commit()
    return post


async def update_post(db: AsyncSession, post_id: str, data: PostInput) -> Post:
    _ensure_valid(data)
    post = await _repo().update_post_by_id(db, post_id, title=data.title, body=data.body)
    if not post:
        raise NotFoundError(POST_NOT_FOUND)
    await db.commit()
    return post


async def delete_post(db: AsyncSession, post_id: str) -> None:
    deleted = await _repo().delete_post_by_id(db, post_id)
    if not deleted:
        raise NotFoundError(POST_NOT_FOUND)
    await db.commit()
