from typing import Any

import httpx

from app.core.config import settings
from app.core.exceptions import GitHubAPIError, NotFoundError, RateLimitedError
from app.core.logging import get_logger

logger = get_logger(__name__)

GITHUB_API_BASE = "https://api.github.com"
USER_AGENT = "ResumeGit/1.0"

RATE_LIMIT_STATUS_CODES = frozenset({403, 429})

_client = httpx.AsyncClient(timeout=settings.github_timeout)


def _get_headers(token: str | None = None) -> dict[str, str]:
    """GitHub API 요청 헤더 생성

    Args:
        token: GitHub 액세스 토큰, 없으면 비인증 요청

    Returns:
        HTTP 헤더 딕셔너리
    """
    headers = {
        "Accept": "application/vnd.github.v3+json",
        "User-Agent": USER_AGENT,
    }
    if token:
        headers["Authorization"] = f"Bearer {token}"
    return headers


async def close_client():
    """httpx 클라이언트 종료"""
    await _client.aclose()


async def _get_json(
    path: str,
    token: str | None = None,
    params: dict | None = None,
    username: str | None = None,
) -> Any:
    """GitHub REST API GET 요청 후 JSON 반환

    Args:
        path: API 경로 (예: /users/octocat)
        token: GitHub 액세스 토큰
        params: 쿼리 파라미터
        username: 404 발생 시 에러 메시지에 사용할 사용자명

    Returns:
        응답 JSON

    Raises:
        NotFoundError: 404 응답
        RateLimitedError: 403/429 응답
        GitHubAPIError: 그 외 비정상 응답 또는 전송 실패
    """
    url = f"{GITHUB_API_BASE}{path}"

    try:
        response = await _client.get(url, headers=_get_headers(token), params=params)
        response.raise_for_status()
    except httpx.HTTPStatusError as e:
        status_code = e.response.status_code
        if status_code == 404:
            raise NotFoundError(username or path, detail=f"GitHub 404: {path}") from e
        if status_code in RATE_LIMIT_STATUS_CODES:
            raise RateLimitedError(detail=f"GitHub {status_code}: {path}") from e
        raise GitHubAPIError(detail=f"GitHub API error: {status_code}") from e
    except httpx.RequestError as e:
        raise GitHubAPIError(detail=f"GitHub 요청 실패: {type(e).__name__}") from e

    return response.json()


async def get_user(username: str, token: str | None = None) -> dict:
    """사용자 프로필 조회

    Args:
        username: GitHub 유저네임
        token: GitHub 액세스 토큰

    Returns:
        /users/{username} 응답 딕셔너리
    """
    data = await _get_json(f"/users/{username}", token, username=username)
    logger.info("프로필 조회 완료", username=username)
    return data


async def get_user_repos(
    username: str,
    token: str | None = None,
    per_page: int = 30,
) -> list[dict]:
    """최근 push 순 레포지토리 목록 조회

    Args:
        username: GitHub 유저네임
        token: GitHub 액세스 토큰
        per_page: 가져올 레포지토리 개수

    Returns:
        pushed_at 내림차순 레포지토리 목록
    """
    params = {"sort": "pushed", "direction": "desc", "per_page": min(per_page, 100)}
    data = await _get_json(f"/users/{username}/repos", token, params, username=username)

    logger.info("레포 목록 조회 완료", username=username, count=len(data))
    return data


async def get_commits(
    owner: str,
    repo: str,
    token: str | None = None,
    author: str | None = None,
    since: str | None = None,
    per_page: int = 30,
) -> list[dict]:
    """레포지토리 커밋 목록 조회

    Args:
        owner: 레포지토리 소유자
        repo: 레포지토리 이름
        token: GitHub 액세스 토큰
        author: 커밋 작성자 필터
        since: ISO 8601 시작 시각
        per_page: 가져올 커밋 개수

    Returns:
        sha, message(첫 줄), date 딕셔너리 목록
    """
    params: dict[str, Any] = {"per_page": min(per_page, 100)}
    if author:
        params["author"] = author
    if since:
        params["since"] = since

    data = await _get_json(f"/repos/{owner}/{repo}/commits", token, params)

    commits = [
        {
            "sha": commit["sha"],
            "message": commit["commit"]["message"].split("\n")[0],
            "date": commit["commit"]["author"]["date"],
        }
        for commit in data
    ]

    logger.info("커밋 조회 완료", repo=f"{owner}/{repo}", count=len(commits))
    return commits


async def get_commit_detail(
    owner: str, repo: str, sha: str, token: str | None = None
) -> dict:
    """개별 커밋 변경 통계 조회

    Args:
        owner: 레포지토리 소유자
        repo: 레포지토리 이름
        sha: 커밋 SHA
        token: GitHub 액세스 토큰

    Returns:
        additions, deletions, files_changed 딕셔너리
    """
    data = await _get_json(f"/repos/{owner}/{repo}/commits/{sha}", token)
    stats = data.get("stats") or {}

    logger.debug("커밋 상세 조회 완료", repo=f"{owner}/{repo}", sha=sha[:7])
    return {
        "additions": stats.get("additions") or 0,
        "deletions": stats.get("deletions") or 0,
        "files_changed": len(data.get("files") or []),
    }


async def get_repo_languages(owner: str, repo: str, token: str | None = None) -> dict[str, int]:
    """레포지토리 언어 비율 조회

    Args:
        owner: 레포지토리 소유자
        repo: 레포지토리 이름
        token: GitHub 액세스 토큰

    Returns:
        언어별 바이트 수 딕셔너리
    """
    data = await _get_json(f"/repos/{owner}/{repo}/languages", token)

    logger.debug("언어 조회 완료", repo=f"{owner}/{repo}")
    return data
