from __future__ import annotations

from fastapi import APIRouter

from api.post_controller import posts_router
from api.routes.system import router as system_router

# Aggregate page and system routers for the app factory
router = APIRouter()
router.include_router(posts_router)
router.include_router(system_router)
