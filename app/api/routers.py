from fastapi import APIRouter

from app.api.generate import router as generate_router
from app.api.github import router as github_router

api_router = APIRouter(prefix="/api")
api_router.include_router(github_router)
api_router.include_router(generate_router)
