import json
from collections import Counter

from app.core.logging import get_logger
from app.domain.activity.schemas import ActivitySummary
from app.domain.bullets.parsers import parse_bullets_response
from app.domain.bullets.prompts import (
    BULLET_GENERATOR_HUMAN,
    BULLET_GENERATOR_SYSTEM,
    get_mode_instructions,
)
from app.domain.bullets.schemas import BULLET_CATEGORIES, ResumeBullet
from app.infra.llm.client import generate_text

logger = get_logger(__name__)

BULLET_COUNT = 8
BULLETS_PER_CATEGORY = 2
MAX_PROMPT_COMMITS = 30
MAX_PROMPT_TOPICS = 5


def format_repo_summaries(summary: ActivitySummary) -> str:
    """레포지토리 요약을 프롬프트용 JSON으로 포맷"""
    repo_summaries = [
        {
            "name": repo.name,
            "description": repo.description,
            "language": repo.language,
            "stars": repo.stars,
            "topics": repo.topics[:MAX_PROMPT_TOPICS],
            "commitCount": len(repo.commits),
        }
        for repo in summary.repos
    ]
    return json.dumps(repo_summaries, indent=2, ensure_ascii=False)


def format_commit_messages(summary: ActivitySummary) -> str:
    """최근 커밋 메시지와 변경 규모를 프롬프트용 JSON으로 포맷, 최대 30개"""
    commit_messages = [
        {
            "repo": repo.name,
            "message": commit.message,
            "additions": commit.additions,
            "deletions": commit.deletions,
            "filesChanged": commit.files_changed,
        }
        for repo in summary.repos
        for commit in repo.commits
    ][:MAX_PROMPT_COMMITS]
    return json.dumps(commit_messages, indent=2, ensure_ascii=False)


def build_prompts(summary: ActivitySummary, mode: str) -> tuple[str, str]:
    """시스템/사용자 프롬프트 생성

    Returns:
        (system_prompt, human_prompt)
    """
    profile = summary.profile
    system_prompt = BULLET_GENERATOR_SYSTEM.format(mode_instructions=get_mode_instructions(mode))
    human_prompt = BULLET_GENERATOR_HUMAN.format(
        username=summary.username,
        profile=f"{profile.name or summary.username} - {profile.bio or 'Developer'}",
        total_commits=summary.total_commits,
        top_languages=", ".join(summary.top_languages),
        tech_stack=", ".join(summary.tech_stack),
        avg_additions=summary.commit_activity.avg_additions,
        avg_deletions=summary.commit_activity.avg_deletions,
        repo_summaries=format_repo_summaries(summary),
        commit_messages=format_commit_messages(summary),
        bullet_count=BULLET_COUNT,
        categories=", ".join(f'"{c}"' for c in BULLET_CATEGORIES),
    )
    return system_prompt, human_prompt


def _log_distribution(bullets: list[ResumeBullet]) -> None:
    """요청한 2/2/2/2 분포와 다르면 경고만 남기고 그대로 사용"""
    distribution = Counter(bullet.category for bullet in bullets)
    expected = {category: BULLETS_PER_CATEGORY for category in BULLET_CATEGORIES}

    if len(bullets) != BULLET_COUNT or dict(distribution) != expected:
        logger.warning(
            "불릿 분포 불일치",
            expected=BULLET_COUNT,
            output=len(bullets),
            distribution=dict(distribution),
        )


async def generate_bullets(
    summary: ActivitySummary,
    mode: str,
    session_id: str | None = None,
) -> list[ResumeBullet]:
    """활동 요약 기반 이력서 불릿 생성

    Args:
        summary: GitHub 활동 요약
        mode: 생성 모드 (standard/technical/impact/entry)
        session_id: 트레이싱 세션 id

    Returns:
        불릿 목록, 모델 출력이 깨져 있으면 폴백 결과 (빈 목록 가능)

    Raises:
        ConfigurationError: 생성 자격 증명 누락
        UpstreamTimeoutError: 생성 제한 시간 초과
        GenerationError: 그 외 생성 실패
    """
    logger.info("불릿 생성 요청", username=summary.username, mode=mode)

    system_prompt, human_prompt = build_prompts(summary, mode)
    raw = await generate_text(
        system_prompt,
        human_prompt,
        tags=[mode],
        session_id=session_id,
    )

    bullets = parse_bullets_response(raw)
    _log_distribution(bullets)

    logger.info("불릿 생성 완료", username=summary.username, mode=mode, count=len(bullets))
    return bullets
