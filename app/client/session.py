"""
클라이언트 조회 흐름

username 검증 → 활동 요약 조회(캐시 우선) → 최근 활동 없음 확인 → 불릿 생성(캐시 우선)
각 단계는 AppState 전이로 표현되며 실패는 예외 대신 error 상태로 반환된다.
"""

from pydantic import ValidationError

from app.client.api import ApiError, ResumeGitApi
from app.client.cache import FileCache, bullets_key, github_key
from app.client.state import (
    AppError,
    AppState,
    bullets_loaded,
    change_mode,
    error_for,
    fail,
    github_loaded,
    start_generation,
    start_lookup,
)
from app.core.logging import get_logger
from app.domain.activity.schemas import ActivitySummary
from app.domain.activity.service import is_valid_username
from app.domain.bullets.schemas import GenerateMode, GenerateResponse

logger = get_logger(__name__)

NO_ACTIVITY_ERROR = AppError(
    title="No Recent Activity",
    message="This user has no public commits in the last 90 days. Try a more active username.",
    type="github",
)


def validate_username(username: str) -> AppError | None:
    """입력값 검증, 문제가 있으면 AppError 반환"""
    if not username.strip():
        return AppError(
            title="Invalid Username", message="Please enter a GitHub username", type="github"
        )
    if not is_valid_username(username.strip()):
        return AppError(
            title="Invalid Username", message="Invalid GitHub username format", type="github"
        )
    return None


def _load_cached(cache: FileCache | None, key: str, model: type):
    if cache is None:
        return None
    data = cache.get(key)
    if data is None:
        return None
    try:
        return model.model_validate(data)
    except ValidationError:
        logger.debug("캐시 데이터 형식 불일치, 무시", key=key)
        return None


def _store(cache: FileCache | None, key: str, value) -> None:
    if cache is not None:
        cache.set(key, value.model_dump(mode="json", by_alias=True))


async def _generate(
    github_data: ActivitySummary,
    mode: GenerateMode,
    api: ResumeGitApi,
    cache: FileCache | None,
    use_cached: bool,
) -> GenerateResponse:
    key = bullets_key(github_data.username, mode)
    response = _load_cached(cache, key, GenerateResponse) if use_cached else None
    if response is None:
        response = await api.generate_bullets(github_data, mode)
        _store(cache, key, response)
    return response


async def lookup(
    state: AppState,
    username: str,
    api: ResumeGitApi,
    cache: FileCache | None = None,
) -> AppState:
    """username 제출 처리 후 최종 상태 반환"""
    validation_error = validate_username(username)
    if validation_error is not None:
        return fail(state, validation_error)

    username = username.strip()
    state = start_lookup(state, username)

    try:
        github_data = _load_cached(cache, github_key(username), ActivitySummary)
        if github_data is None:
            github_data = await api.fetch_github_data(username)
            _store(cache, github_key(username), github_data)
        else:
            logger.info("활동 요약 캐시 적중", username=username)

        state = github_loaded(state, github_data)

        if github_data.total_commits == 0:
            return fail(state, NO_ACTIVITY_ERROR)

        state = start_generation(state)
        response = await _generate(github_data, state.mode, api, cache, use_cached=True)
        return bullets_loaded(state, response.bullets)

    except ApiError as e:
        logger.warning("조회 실패", username=username, error_type=e.error_type, status=e.status)
        return fail(state, error_for(e.error_type, e.message))


async def regenerate(
    state: AppState,
    mode: GenerateMode,
    api: ResumeGitApi,
    cache: FileCache | None = None,
) -> AppState:
    """현재 활동 요약으로 다른 모드의 불릿을 새로 생성

    실패하면 모드만 바뀐 채 기존 불릿을 유지한다.
    """
    if state.github_data is None:
        return state

    state = change_mode(state, mode)
    try:
        response = await _generate(state.github_data, mode, api, cache, use_cached=False)
    except ApiError as e:
        logger.warning("재생성 실패", mode=mode, error_type=e.error_type, status=e.status)
        return state
    return bullets_loaded(state, response.bullets)
