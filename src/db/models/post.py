from datetime import UTC, datetime
import uuid

from sqlalchemy import Column, DateTime, String, Text

from ..database import Base

TITLE_COLUMN_LENGTH = 255


def _new_post_id() -> str:
    return uuid.uuid4().hex


def _utcnow() -> datetime:
    return datetime.now(UTC)


class Post(Base):
    """SQLAlchemy model representing a blog post.

    Attributes:
        id (str): Opaque identifier assigned on insert, never changed.
        title (str): Trimmed, non-empty post title.
        body (str): Trimmed, non-empty post body.
        created_at (datetime): Creation timestamp (UTC).
        updated_at (datetime): Last modification timestamp (UTC).
    """

    __tablename__ = "posts"

    id = Column(
        String(32),
        primary_key=True,
        default=_new_post_id,
        doc="Opaque post identifier",
    )
    title = Column(
        String(TITLE_COLUMN_LENGTH),
        nullable=False,
        doc="Post title",
    )
    body = Column(
        Text,
        nullable=False,
        doc="Post body",
    )
    created_at = Column(
        DateTime(timezone=True),
        default=_utcnow,
        nullable=False,
        index=True,
        doc="Post creation timestamp",
    )
    updated_at = Column(
        DateTime(timezone=True),
        default=_utcnow,
        onupdate=_utcnow,
        nullable=False,
        doc="Last modification timestamp",
    )

    def __repr__(self) -> str:
        """Return the formal string representation for debugging."""
        title_value = getattr(self, "title", None)
        if isinstance(title_value, str) and title_value:
            title_repr = title_value[:30] + "..." if len(title_value) > 30 else title_value
        else:
            title_repr = ""
        return f"<Post(id={self.id}, title={title_repr!r})>"

    def __str__(self) -> str:
        """Return a user-friendly string describing the post."""
        title = getattr(self, "title", "") or ""
        return f"Post '{title}'"
