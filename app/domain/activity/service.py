import asyncio
from collections.abc import Awaitable, Sequence
from datetime import datetime, timedelta, timezone
from typing import TypeVar

from app.core.config import settings
from app.core.logging import get_logger
from app.domain.activity.constants import (
    ACTIVITY_WINDOW_DAYS,
    ANALYZED_REPO_LIMIT,
    COMMIT_DETAIL_LIMIT,
    COMMIT_FETCH_LIMIT,
    REPO_FETCH_LIMIT,
    TOP_LANGUAGE_LIMIT,
    USERNAME_PATTERN,
)
from app.domain.activity.schemas import (
    ActivitySummary,
    Commit,
    CommitActivity,
    Profile,
    Repository,
)
from app.domain.activity.tech_stack import infer_tech_stack
from app.infra.github.client import (
    get_commit_detail,
    get_commits,
    get_repo_languages,
    get_user,
    get_user_repos,
)

logger = get_logger(__name__)

T = TypeVar("T")

EMPTY_COMMIT_STATS = {"additions": 0, "deletions": 0, "files_changed": 0}


def is_valid_username(username: str | None) -> bool:
    """GitHub 사용자명 형식 검증"""
    return bool(username) and USERNAME_PATTERN.match(username) is not None


def aggregate_languages(repos: Sequence[Repository]) -> dict[str, float]:
    """레포별 언어 바이트 수를 합산하여 전체 대비 비율(소수점 1자리)로 변환

    전체 바이트 수가 0이면 빈 딕셔너리 반환
    """
    totals: dict[str, int] = {}
    for repo in repos:
        for language, size in repo.languages.items():
            totals[language] = totals.get(language, 0) + size

    grand_total = sum(totals.values())
    if grand_total <= 0:
        return {}

    return {
        language: round(size / grand_total * 100, 1)
        for language, size in totals.items()
    }


def rank_top_languages(
    distribution: dict[str, float], limit: int = TOP_LANGUAGE_LIMIT
) -> list[str]:
    """비율 내림차순 상위 언어, 동률은 삽입 순서 유지"""
    ranked = sorted(distribution.items(), key=lambda item: item[1], reverse=True)
    return [language for language, _ in ranked[:limit]]


def build_commit_activity(repos: Sequence[Repository]) -> CommitActivity:
    """커밋 수 합계와 커밋당 평균 추가/삭제 라인, 레포당 평균 커밋 수 계산"""
    commits = [commit for repo in repos for commit in repo.commits]
    total = len(commits)

    if total:
        avg_additions = round(sum(c.additions for c in commits) / total)
        avg_deletions = round(sum(c.deletions for c in commits) / total)
    else:
        avg_additions = avg_deletions = 0

    avg_per_repo = round(total / len(repos)) if repos else 0

    return CommitActivity(
        total=total,
        avg_per_repo=avg_per_repo,
        avg_additions=avg_additions,
        avg_deletions=avg_deletions,
    )


def _build_profile(user: dict) -> Profile:
    return Profile(
        name=user.get("name"),
        avatar=user.get("avatar_url") or "",
        bio=user.get("bio"),
        public_repos=user.get("public_repos") or 0,
        followers=user.get("followers") or 0,
        profile_url=user.get("html_url") or "",
        created_at=user["created_at"],
    )


async def _fetch_commits(
    owner: str,
    repo_name: str,
    username: str,
    since: str,
    semaphore: asyncio.Semaphore,
) -> list[Commit]:
    """최근 커밋과 상위 10개 커밋의 변경 통계 조회

    커밋 상세 조회 실패는 0으로 대체하고, 목록 조회 실패는 빈 목록으로 처리
    """
    token = settings.github_token or None

    async def limited(call: Awaitable[T]) -> T:
        async with semaphore:
            return await call

    try:
        raw_commits = await limited(
            get_commits(
                owner,
                repo_name,
                token,
                author=username,
                since=since,
                per_page=COMMIT_FETCH_LIMIT,
            )
        )
    except Exception as e:
        logger.warning("커밋 목록 조회 실패, 빈 목록으로 대체", repo=repo_name, error=type(e).__name__)
        return []

    async def fetch_stats(sha: str) -> dict:
        try:
            return await limited(get_commit_detail(owner, repo_name, sha, token))
        except Exception as e:
            logger.warning(
                "커밋 상세 조회 실패, 0으로 대체", repo=repo_name, sha=sha[:7], error=type(e).__name__
            )
            return EMPTY_COMMIT_STATS

    selected = raw_commits[:COMMIT_DETAIL_LIMIT]
    stats = await asyncio.gather(*[fetch_stats(c["sha"]) for c in selected])

    return [
        Commit(sha=c["sha"], message=c["message"], date=c["date"], **s)
        for c, s in zip(selected, stats, strict=True)
    ]


async def _fetch_repository(
    repo: dict,
    username: str,
    since: str,
    semaphore: asyncio.Semaphore,
) -> Repository:
    """레포지토리 단위 커밋/언어 수집, 부분 실패는 기본값으로 대체"""
    owner = (repo.get("owner") or {}).get("login") or username
    repo_name = repo["name"]
    token = settings.github_token or None

    async def fetch_languages() -> dict[str, int]:
        try:
            async with semaphore:
                return await get_repo_languages(owner, repo_name, token)
        except Exception as e:
            logger.warning("언어 조회 실패, 빈 값으로 대체", repo=repo_name, error=type(e).__name__)
            return {}

    commits, languages = await asyncio.gather(
        _fetch_commits(owner, repo_name, username, since, semaphore),
        fetch_languages(),
    )

    return Repository(
        name=repo_name,
        description=repo.get("description"),
        url=repo.get("html_url") or "",
        language=repo.get("language"),
        stars=repo.get("stargazers_count") or 0,
        forks=repo.get("forks_count") or 0,
        commits=commits,
        languages=languages,
        last_pushed=repo.get("pushed_at") or repo["created_at"],
        topics=repo.get("topics") or [],
    )


async def aggregate(username: str, now: datetime | None = None) -> ActivitySummary:
    """GitHub 사용자의 최근 90일 활동 요약 생성

    Args:
        username: GitHub 유저네임
        now: 기준 시각, 없으면 현재 UTC 시각

    Returns:
        활동 요약

    Raises:
        NotFoundError: 사용자가 존재하지 않는 경우
        RateLimitedError: GitHub 요청 한도 초과
        GitHubAPIError: 프로필/레포 목록 조회 실패
    """
    now = now or datetime.now(timezone.utc)
    token = settings.github_token or None

    user = await get_user(username, token)
    repos = await get_user_repos(username, token, per_page=REPO_FETCH_LIMIT)
    active_repos = repos[:ANALYZED_REPO_LIMIT]

    since = (now - timedelta(days=ACTIVITY_WINDOW_DAYS)).strftime("%Y-%m-%dT%H:%M:%SZ")
    semaphore = asyncio.Semaphore(settings.github_max_concurrent_requests)

    repo_data = await asyncio.gather(
        *[_fetch_repository(repo, username, since, semaphore) for repo in active_repos]
    )

    language_distribution = aggregate_languages(repo_data)
    top_languages = rank_top_languages(language_distribution)
    commit_activity = build_commit_activity(repo_data)

    summary = ActivitySummary(
        username=user.get("login") or username,
        profile=_build_profile(user),
        repos=list(repo_data),
        total_commits=commit_activity.total,
        language_distribution=language_distribution,
        top_languages=top_languages,
        commit_activity=commit_activity,
        tech_stack=infer_tech_stack(repo_data, top_languages),
        fetched_at=now,
    )

    logger.info(
        "활동 요약 생성 완료",
        username=summary.username,
        repos=len(summary.repos),
        commits=summary.total_commits,
        languages=len(language_distribution),
    )
    return summary
