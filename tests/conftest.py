"""테스트 공통 fixture"""

from datetime import datetime, timezone
from unittest.mock import MagicMock, patch

import httpx
import pytest
from httpx import ASGITransport, AsyncClient

from app.core.cache import github_cache
from app.core.limiter import limiter
from app.domain.activity.schemas import (
    ActivitySummary,
    Commit,
    CommitActivity,
    Profile,
    Repository,
)
from app.domain.bullets.schemas import ResumeBullet
from app.main import app

FIXED_NOW = datetime(2024, 6, 1, 12, 0, tzinfo=timezone.utc)


@pytest.fixture(autouse=True)
def reset_shared_state():
    """요청 제한 카운터와 서버 캐시 초기화"""
    limiter.reset()
    github_cache.clear()
    yield
    github_cache.clear()


@pytest.fixture
def sample_profile() -> Profile:
    """테스트용 프로필"""
    return Profile(
        name="The Octocat",
        avatar="https://avatars.githubusercontent.com/u/583231",
        bio="GitHub mascot",
        public_repos=8,
        followers=100,
        profile_url="https://github.com/octocat",
        created_at=datetime(2011, 1, 25, 18, 44, 36, tzinfo=timezone.utc),
    )


@pytest.fixture
def sample_repos() -> list[Repository]:
    """테스트용 레포지토리 목록"""
    return [
        Repository(
            name="shop-api",
            description="FastAPI backend with PostgreSQL",
            url="https://github.com/octocat/shop-api",
            language="Python",
            stars=12,
            forks=3,
            commits=[
                Commit(
                    sha="abc1234567",
                    message="feat: add order endpoints",
                    date=datetime(2024, 5, 20, tzinfo=timezone.utc),
                    additions=120,
                    deletions=10,
                    files_changed=4,
                ),
                Commit(
                    sha="def1234567",
                    message="fix: handle empty cart",
                    date=datetime(2024, 5, 21, tzinfo=timezone.utc),
                    additions=20,
                    deletions=6,
                    files_changed=1,
                ),
            ],
            languages={"Python": 9000, "Dockerfile": 1000},
            last_pushed=datetime(2024, 5, 21, tzinfo=timezone.utc),
            topics=["fastapi", "docker"],
        ),
        Repository(
            name="portfolio",
            description=None,
            url="https://github.com/octocat/portfolio",
            language="TypeScript",
            stars=1,
            forks=0,
            commits=[],
            languages={},
            last_pushed=datetime(2024, 4, 2, tzinfo=timezone.utc),
            topics=[],
        ),
    ]


@pytest.fixture
def sample_summary(sample_profile, sample_repos) -> ActivitySummary:
    """테스트용 활동 요약"""
    return ActivitySummary(
        username="octocat",
        profile=sample_profile,
        repos=sample_repos,
        total_commits=2,
        language_distribution={"Python": 90.0, "Dockerfile": 10.0},
        top_languages=["Python", "Dockerfile"],
        commit_activity=CommitActivity(total=2, avg_per_repo=1, avg_additions=70, avg_deletions=8),
        tech_stack=["Python", "Dockerfile", "Docker", "PostgreSQL", "REST API"],
        fetched_at=FIXED_NOW,
    )


@pytest.fixture
def sample_summary_payload(sample_summary) -> dict:
    """API 전송용 camelCase JSON"""
    return sample_summary.model_dump(mode="json", by_alias=True)


@pytest.fixture
def sample_bullets() -> list[ResumeBullet]:
    """테스트용 불릿 목록"""
    return [
        ResumeBullet(
            id=f"bullet-{i}",
            text=f"Engineered order processing feature number {i} with FastAPI",
            category=category,
            tech=["FastAPI"],
            confidence="high",
        )
        for i, category in enumerate(
            ["Architecture", "Architecture", "Feature", "Feature", "Quality", "Quality", "Tooling", "Tooling"]
        )
    ]


@pytest.fixture
def github_user_payload() -> dict:
    """GitHub /users/{username} 응답"""
    return {
        "login": "octocat",
        "name": "The Octocat",
        "avatar_url": "https://avatars.githubusercontent.com/u/583231",
        "bio": None,
        "public_repos": 8,
        "followers": 100,
        "following": 9,
        "created_at": "2011-01-25T18:44:36Z",
        "html_url": "https://github.com/octocat",
    }


@pytest.fixture
def make_repo_payload():
    """GitHub 레포지토리 응답 항목 생성 helper"""

    def _create(name: str, **overrides) -> dict:
        payload = {
            "name": name,
            "full_name": f"octocat/{name}",
            "owner": {"login": "octocat"},
            "description": None,
            "html_url": f"https://github.com/octocat/{name}",
            "language": None,
            "stargazers_count": 0,
            "forks_count": 0,
            "pushed_at": "2024-05-01T00:00:00Z",
            "created_at": "2023-01-01T00:00:00Z",
            "topics": [],
            "default_branch": "main",
        }
        payload.update(overrides)
        return payload

    return _create


@pytest.fixture
def async_client():
    """비동기 HTTP 클라이언트"""
    transport = ASGITransport(app=app)
    return AsyncClient(transport=transport, base_url="http://test")


@pytest.fixture
def mock_github_response():
    """GitHub API 응답 mock 생성"""
    mock = MagicMock()
    mock.raise_for_status = MagicMock()
    return mock


@pytest.fixture
def create_http_error():
    """HTTPStatusError 생성 helper"""

    def _create(status_code: int, message: str = "Error"):
        return httpx.HTTPStatusError(
            message,
            request=httpx.Request("GET", "https://api.github.com/test"),
            response=httpx.Response(status_code),
        )

    return _create


@pytest.fixture
def mock_generation_settings():
    """생성 자격 증명이 설정된 상태의 settings mock"""
    with patch("app.infra.llm.client.settings") as mock:
        mock.generation_timeout = 5.0
        mock.langfuse_public_key = ""
        mock.langfuse_secret_key = ""
        yield mock
