import logging

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from db.models.post import Post
from db.repositories.decorators import handle_db_errors

logger = logging.getLogger(__name__)


@handle_db_errors("post")
async def find_all_posts(db: AsyncSession) -> list[Post]:
    stmt = select(Post).order_by(Post.created_at, Post.id)
    res = await db.execute(stmt)
    return list(res.scalars().all())


@handle_db_errors("post")
async def find_post_by_id(db: AsyncSession, post_id: str) -> Post | None:
    stmt = select(Post).where(Post.id == post_id)
    res = await db.execute(stmt)
    post = res.scalars().first()
    if not post:
        logger.info("Post with id %s not found", post_id)
    return post


@handle_db_errors("post")
async def create_post(db: AsyncSession, title: str, body: str) -> Post:
    new_post = Post(title=title, body=body)
    db.add(new_post)
    await db.flush()
    await db.refresh(new_post)
    logger.info("Created new post with id %s", new_post.id)
    return new_post


@handle_db_errors("post")
async def update_post_by_id(db: AsyncSession, post_id: str, title: str, body: str) -> Post | None:
    post = await find_post_by_id(db, post_id)
    if not post:
        logger.info("Skip update: post %s not found", post_id)
        return None

    post.title = title
    post.body = body
    await db.flush()
    await db.refresh(post)
    logger.info("Updated post %s", post_id)
    return post


@handle_db_errors("post")
async def delete_post_by_id(db: AsyncSession, post_id: str) -> bool:
    post = await find_post_by_id(db, post_id)
    if not post:
        logger.info("Skip delete: post %s not found", post_id)
        return False

    await db.delete(post)
    await db.flush()
    logger.info("Deleted post with id %s", post_id)
    return True
