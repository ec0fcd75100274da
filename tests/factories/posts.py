from __future__ import annotations

import uuid

from sqlalchemy.ext.asyncio import AsyncSession

from db.models.post import Post


def unique_title(prefix: str = "T") -> str:
    """Short unique title that stays within the default 10 character limit."""
    return f"{prefix}{uuid.uuid4().hex[:6]}"


async def create_post(
    db: AsyncSession,
    *,
    title: str | None = None,
    body: str = "Some body text",
    commit: bool = True,
) -> Post:
    post = Post(title=title or unique_title(), body=body)
    db.add(post)
    await db.flush()
    await db.refresh(post)
    if commit:
        await db.commit()
    return post
