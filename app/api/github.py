from fastapi import APIRouter

from app.core.cache import github_cache, github_cache_key
from app.core.context import set_username
from app.core.exceptions import CustomException, GitHubAPIError, InvalidInputError
from app.core.logging import get_logger
from app.domain.activity.schemas import ActivitySummary
from app.domain.activity.service import aggregate, is_valid_username

router = APIRouter(prefix="/github", tags=["github"])
logger = get_logger(__name__)


@router.get("/{username}", response_model=ActivitySummary)
async def get_github_data(username: str) -> ActivitySummary:
    if not is_valid_username(username):
        raise InvalidInputError("Please provide a valid GitHub username")

    set_username(username)
    cache_key = github_cache_key(username)

    cached = github_cache.get(cache_key)
    if cached is not None:
        logger.info("캐시 적중")
        return cached

    logger.info("GitHub 데이터 조회 시작")
    try:
        summary = await aggregate(username)
    except CustomException:
        raise
    except Exception as e:
        logger.error("GitHub 데이터 조회 실패", error=type(e).__name__, detail=str(e))
        raise GitHubAPIError(detail=str(e)) from e

    github_cache.set(cache_key, summary)
    return summary
