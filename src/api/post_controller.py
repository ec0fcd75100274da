# api/post_controller.py
from typing import Annotated

from fastapi import APIRouter, Depends, Form, Request, status
from fastapi.responses import RedirectResponse, Response
from sqlalchemy.ext.asyncio import AsyncSession

from api.templating import render
from api.utils.failure_context import failure_context
from core.config import settings
from db.database import get_db
from schemas.posts import POSTS_PATH, post_url, validate_post_input
from services import post_service

posts_router = APIRouter(prefix=POSTS_PATH, tags=["Posts"])

FormField = Annotated[str | None, Form()]


def _redirect(location: str) -> RedirectResponse:
    return RedirectResponse(location, status_code=status.HTTP_302_FOUND)


@posts_router.get("/", summary="List posts", response_class=Response)
@failure_context("Error fetching posts")
async def list_posts(request: Request, db: Annotated[AsyncSession, Depends(get_db)]) -> Response:
    posts = await post_service.list_posts(db, summary_length=settings.posts.summary_length)
    return render(request, "index", {"posts": posts})


@posts_router.get("/new", summary="Show the creation form", response_class=Response)
async def show_new_post_form(request: Request) -> Response:
    return render(request, "new")


@posts_router.post("/new", summary="Create post", response_class=Response)
@failure_context("Error creating post", log_failure=True)
async def create_post(
    request: Request,
    db: Annotated[AsyncSession, Depends(get_db)],
    title: FormField = None,
    body: FormField = None,
) -> Response:
    data = validate_post_input(title, body, settings.posts.limits)
    if not data.is_valid:
        return render(
            request,
            "new",
            {"errors": data.errors, "title": data.title, "body": data.body},
            status_code=status.HTTP_400_BAD_REQUEST,
        )

    post = await post_service.create_post(db, data)
    return _redirect(post_url(post.id))


@posts_router.get("/{post_id}", summary="Show post", response_class=Response)
@failure_context("Error fetching post")
async def get_post(post_id: str, request: Request, db: Annotated[AsyncSession, Depends(get_db)]) -> Response:
    post = await post_service.get_post(db, post_id, summary_length=settings.posts.summary_length)
    return render(request, "detail", {"post": post})


@posts_router.get("/{post_id}/edit", summary="Show the edit form", response_class=Response)
@failure_context("Error", log_failure=True)
async def show_edit_form(post_id: str, request: Request, db: Annotated[AsyncSession, Depends(get_db)]) -> Response:
    post = await post_service.get_post_form(db, post_id)
    return render(request, "edit", {"post": post})


@posts_router.post("/{post_id}/update", summary="Update post", response_class=Response)
@failure_context("Error updating post", log_failure=True)
async def update_post(
    post_id: str,
    request: Request,
    db: Annotated[AsyncSession, Depends(get_db)],
    title: FormField = None,
    body: FormField = None,
) -> Response:
    # Same limits as creation so both forms accept exactly the same input
    data = validate_post_input(title, body, settings.posts.limits)
    if not data.is_valid:
        return render(
            request,
            "edit",
            {"errors": data.errors, "post": {"id": post_id, "title": data.title, "body": data.body}},
            status_code=status.HTTP_400_BAD_REQUEST,
        )

    post = await post_service.update_post(db, post_id, data)
    return _redirect(post_url(post.id))


@posts_router.post("/{post_id}/delete", summary="Delete post", response_class=Response)
@failure_context("Error deleting post", log_failure=True)
async def delete_post(post_id: str, db: Annotated[AsyncSession, Depends(get_db)]) -> Response:
    await post_service.delete_post(db, post_id)
    return _redirect(f"{POSTS_PATH}/")
