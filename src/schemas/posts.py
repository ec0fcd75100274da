from pydantic import BaseModel, ConfigDict, Field

POSTS_PATH = "/posts"

DEFAULT_TITLE_MAX = 10
DEFAULT_BODY_MAX = 100
DEFAULT_SUMMARY_LENGTH = 50

TITLE_REQUIRED = "Title is required."
BODY_REQUIRED = "Body is required."
TITLE_TOO_LONG = "Title must be {title_max} characters or fewer."
BODY_TOO_LONG = "Body is too long."


class PostLimits(BaseModel):
    model_config = ConfigDict(frozen=True)

    title_max: int = Field(default=DEFAULT_TITLE_MAX, ge=1)
    body_max: int = Field(default=DEFAULT_BODY_MAX, ge=1)


class PostInput(BaseModel):
    """Sanitized form values plus the messages describing what is wrong with them."""

    title: str = ""
    body: str = ""
    errors: list[str] = Field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return not self.errors


def _clean(value: object) -> str:
    return value.strip() if isinstance(value, str) else ""


def validate_post_input(title: object, body: object, limits: PostLimits | None = None) -> PostInput:
    """Trim raw title/body input and collect every applicable error.

    Errors are appended in a fixed order: missing title, missing body,
    title too long, body too long. Length checks only apply to non-empty
    values, so a blank field reports a single "required" message.
    """
    limits = limits or PostLimits()
    title = _clean(title)
    body = _clean(body)

    errors: list[str] = []
    if not title:
        errors.append(TITLE_REQUIRED)
    if not body:
        errors.append(BODY_REQUIRED)
    if title and len(title) > limits.title_max:
        errors.append(TITLE_TOO_LONG.format(title_max=limits.title_max))
    if body and len(body) > limits.body_max:
        errors.append(BODY_TOO_LONG)

    return PostInput(title=title, body=body, errors=errors)


def post_url(post_id: object) -> str:
    return f"{POSTS_PATH}/{post_id}"


def summarize(body: str, length: int = DEFAULT_SUMMARY_LENGTH) -> str:
    """Return the body cut down to ``length`` characters, with an ellipsis if cut."""
    body = body or ""
    if len(body) <= length:
        return body
    return body[:length] + "..."


class PostForm(BaseModel):
    id: str | None = Field(None, description="Post ID, absent on the creation form")
    title: str = Field("", description="Post title")
    body: str = Field("", description="Post body")

    model_config = ConfigDict(from_attributes=True)


class PostDetail(BaseModel):
    id: str = Field(..., description="Post ID")
    title: str = Field(..., description="Post title")
    body: str = Field(..., description="Post body")
    url: str = Field("", description="Canonical location of the post")
    summary: str = Field("", description="Truncated body")

    model_config = ConfigDict(from_attributes=True)

    @classmethod
    def from_post(cls, post, summary_length: int = DEFAULT_SUMMARY_LENGTH) -> "PostDetail":
        view = cls.model_validate(post)
        view.url = post_url(view.id)
        view.summary = summarize(view.body, summary_length)
        return view


class PostListItem(PostDetail):
    pass
