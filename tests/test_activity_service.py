"""GitHub 활동 집계 서비스 테스트"""

from datetime import datetime, timezone
from unittest.mock import AsyncMock, patch

import pytest

from app.core.exceptions import GitHubAPIError, NotFoundError, RateLimitedError
from app.domain.activity.schemas import Commit, Repository
from app.domain.activity.service import (
    aggregate,
    aggregate_languages,
    build_commit_activity,
    is_valid_username,
    rank_top_languages,
)

NOW = datetime(2024, 6, 1, tzinfo=timezone.utc)


def _repo(name: str, languages: dict[str, int] | None = None, commits: list[Commit] | None = None):
    return Repository(
        name=name,
        url=f"https://github.com/octocat/{name}",
        commits=commits or [],
        languages=languages or {},
        last_pushed=NOW,
    )


def _commit(sha: str, additions: int = 0, deletions: int = 0) -> Commit:
    return Commit(sha=sha, message="update", date=NOW, additions=additions, deletions=deletions)


def _raw_commit(sha: str) -> dict:
    return {"sha": sha, "message": f"commit {sha}", "date": "2024-05-20T00:00:00Z"}


class TestIsValidUsername:
    """is_valid_username 함수 테스트"""

    @pytest.mark.parametrize(
        "username",
        ["octocat", "a", "torvalds", "my-name", "a1-b2-c3", "A" * 39],
    )
    def test_valid(self, username):
        """유효한 사용자명"""
        assert is_valid_username(username)

    @pytest.mark.parametrize(
        "username",
        ["", None, "-octocat", "octocat-", "two--hyphens", "has space", "under_score", "A" * 40],
    )
    def test_invalid(self, username):
        """형식에 맞지 않는 사용자명"""
        assert not is_valid_username(username)


class TestAggregateLanguages:
    """aggregate_languages 함수 테스트"""

    def test_percentages_rounded_to_one_decimal(self):
        """전체 바이트 대비 비율을 소수점 1자리로 반올림"""
        repos = [_repo("a", {"JavaScript": 300, "TypeScript": 700})]

        assert aggregate_languages(repos) == {"JavaScript": 30.0, "TypeScript": 70.0}

    def test_sums_across_repositories(self):
        """여러 레포의 같은 언어는 합산"""
        repos = [
            _repo("a", {"Python": 100}),
            _repo("b", {"Python": 100, "Go": 200}),
        ]

        assert aggregate_languages(repos) == {"Python": 50.0, "Go": 50.0}

    def test_third_values(self):
        """나누어 떨어지지 않는 비율"""
        repos = [_repo("a", {"A": 1, "B": 1, "C": 1})]

        assert aggregate_languages(repos) == {"A": 33.3, "B": 33.3, "C": 33.3}

    def test_zero_total_returns_empty(self):
        """전체 바이트가 0이면 빈 딕셔너리"""
        assert aggregate_languages([_repo("a"), _repo("b", {"Python": 0})]) == {}


class TestRankTopLanguages:
    """rank_top_languages 함수 테스트"""

    def test_descending_by_percentage(self):
        """비율 내림차순"""
        assert rank_top_languages({"JavaScript": 30.0, "TypeScript": 70.0}) == [
            "TypeScript",
            "JavaScript",
        ]

    def test_limited_to_five(self):
        """최대 5개"""
        distribution = {f"L{i}": float(i) for i in range(8)}

        assert rank_top_languages(distribution) == ["L7", "L6", "L5", "L4", "L3"]

    def test_ties_keep_insertion_order(self):
        """동률은 먼저 나온 언어가 앞"""
        assert rank_top_languages({"Go": 50.0, "Rust": 50.0}) == ["Go", "Rust"]


class TestBuildCommitActivity:
    """build_commit_activity 함수 테스트"""

    def test_averages(self):
        """커밋당 평균 추가/삭제 라인과 레포당 평균 커밋 수"""
        repos = [
            _repo("a", commits=[_commit("1", 10, 2), _commit("2", 20, 4)]),
            _repo("b", commits=[_commit("3", 30, 0)]),
            _repo("c"),
        ]

        activity = build_commit_activity(repos)

        assert activity.total == 3
        assert activity.avg_additions == 20
        assert activity.avg_deletions == 2
        assert activity.avg_per_repo == 1

    def test_no_commits_yields_zeros(self):
        """커밋이 없으면 평균은 0"""
        activity = build_commit_activity([_repo("a")])

        assert activity.total == 0
        assert activity.avg_additions == 0
        assert activity.avg_deletions == 0
        assert activity.avg_per_repo == 0

    def test_no_repositories(self):
        """레포가 없어도 0으로 처리"""
        assert build_commit_activity([]).avg_per_repo == 0


class TestAggregate:
    """aggregate 함수 테스트"""

    @pytest.fixture
    def github_mocks(self, github_user_payload):
        """GitHub 클라이언트 함수 mock"""
        with (
            patch("app.domain.activity.service.get_user", new_callable=AsyncMock) as get_user,
            patch("app.domain.activity.service.get_user_repos", new_callable=AsyncMock) as get_repos,
            patch("app.domain.activity.service.get_commits", new_callable=AsyncMock) as get_commits,
            patch(
                "app.domain.activity.service.get_commit_detail", new_callable=AsyncMock
            ) as get_detail,
            patch(
                "app.domain.activity.service.get_repo_languages", new_callable=AsyncMock
            ) as get_languages,
        ):
            get_user.return_value = github_user_payload
            get_repos.return_value = []
            get_commits.return_value = []
            get_detail.return_value = {"additions": 10, "deletions": 2, "files_changed": 1}
            get_languages.return_value = {}
            yield {
                "get_user": get_user,
                "get_user_repos": get_repos,
                "get_commits": get_commits,
                "get_commit_detail": get_detail,
                "get_repo_languages": get_languages,
            }

    @pytest.mark.asyncio
    async def test_single_repository_language_scenario(self, github_mocks, make_repo_payload):
        """단일 레포 언어 비율과 상위 언어"""
        github_mocks["get_user_repos"].return_value = [make_repo_payload("web")]
        github_mocks["get_repo_languages"].return_value = {"JavaScript": 300, "TypeScript": 700}

        summary = await aggregate("octocat", now=NOW)

        assert summary.language_distribution == {"JavaScript": 30.0, "TypeScript": 70.0}
        assert summary.top_languages == ["TypeScript", "JavaScript"]
        assert summary.tech_stack[:2] == ["TypeScript", "JavaScript"]

    @pytest.mark.asyncio
    async def test_no_recent_commits(self, github_mocks, make_repo_payload):
        """최근 90일 커밋이 없어도 집계는 성공"""
        github_mocks["get_user_repos"].return_value = [make_repo_payload("linux")]

        summary = await aggregate("torvalds", now=NOW)

        assert summary.total_commits == 0
        assert summary.commit_activity.avg_additions == 0
        github_mocks["get_commit_detail"].assert_not_called()

    @pytest.mark.asyncio
    async def test_caps_repositories_and_commit_details(self, github_mocks, make_repo_payload):
        """레포 10개, 레포당 상세 조회 10개로 제한"""
        github_mocks["get_user_repos"].return_value = [
            make_repo_payload(f"repo-{i}") for i in range(15)
        ]
        github_mocks["get_commits"].return_value = [_raw_commit(f"sha{i}") for i in range(25)]

        summary = await aggregate("octocat", now=NOW)

        assert len(summary.repos) == 10
        assert [repo.name for repo in summary.repos] == [f"repo-{i}" for i in range(10)]
        assert all(len(repo.commits) == 10 for repo in summary.repos)
        assert summary.total_commits == 100
        assert github_mocks["get_commit_detail"].await_count == 100

    @pytest.mark.asyncio
    async def test_activity_window_and_author_filter(self, github_mocks, make_repo_payload):
        """최근 90일, 본인 작성 커밋만 조회"""
        github_mocks["get_user_repos"].return_value = [make_repo_payload("web")]

        await aggregate("octocat", now=NOW)

        kwargs = github_mocks["get_commits"].call_args.kwargs
        assert kwargs["author"] == "octocat"
        assert kwargs["since"] == "2024-03-03T00:00:00Z"
        assert kwargs["per_page"] == 30

    @pytest.mark.asyncio
    async def test_commit_detail_failure_substitutes_zeros(self, github_mocks, make_repo_payload):
        """커밋 상세 조회 실패는 0으로 대체"""
        github_mocks["get_user_repos"].return_value = [make_repo_payload("web")]
        github_mocks["get_commits"].return_value = [_raw_commit("ok"), _raw_commit("broken")]
        def commit_detail(owner, repo, sha, token):
            if sha == "broken":
                raise GitHubAPIError(detail="boom")
            return {"additions": 40, "deletions": 4, "files_changed": 3}

        github_mocks["get_commit_detail"].side_effect = commit_detail

        summary = await aggregate("octocat", now=NOW)

        commits = summary.repos[0].commits
        assert len(commits) == 2
        stats = {c.sha: (c.additions, c.deletions, c.files_changed) for c in commits}
        assert stats["broken"] == (0, 0, 0)
        assert summary.total_commits == 2

    @pytest.mark.asyncio
    async def test_language_failure_substitutes_empty(self, github_mocks, make_repo_payload):
        """언어 조회 실패는 빈 값으로 대체"""
        github_mocks["get_user_repos"].return_value = [
            make_repo_payload("a"),
            make_repo_payload("b"),
        ]
        def repo_languages(owner, repo, token):
            if repo == "a":
                raise RateLimitedError()
            return {"Go": 100}

        github_mocks["get_repo_languages"].side_effect = repo_languages

        summary = await aggregate("octocat", now=NOW)

        assert summary.language_distribution == {"Go": 100.0}

    @pytest.mark.asyncio
    async def test_commit_list_failure_degrades_repository(self, github_mocks, make_repo_payload):
        """커밋 목록 조회 실패 시 해당 레포만 빈 커밋"""
        github_mocks["get_user_repos"].return_value = [make_repo_payload("web")]
        github_mocks["get_commits"].side_effect = GitHubAPIError(detail="409")

        summary = await aggregate("octocat", now=NOW)

        assert summary.repos[0].commits == []
        assert summary.total_commits == 0

    @pytest.mark.asyncio
    async def test_profile_failure_is_fatal(self, github_mocks):
        """프로필 조회 실패는 전체 실패"""
        github_mocks["get_user"].side_effect = NotFoundError("ghost")

        with pytest.raises(NotFoundError):
            await aggregate("ghost", now=NOW)

        github_mocks["get_user_repos"].assert_not_called()

    @pytest.mark.asyncio
    async def test_repository_list_failure_is_fatal(self, github_mocks):
        """레포 목록 조회 실패는 전체 실패"""
        github_mocks["get_user_repos"].side_effect = RateLimitedError()

        with pytest.raises(RateLimitedError):
            await aggregate("octocat", now=NOW)

    @pytest.mark.asyncio
    async def test_repository_fields_are_mapped(self, github_mocks, make_repo_payload):
        """GitHub 응답 필드가 Repository로 매핑됨"""
        github_mocks["get_user_repos"].return_value = [
            make_repo_payload(
                "shop-api",
                description="FastAPI shop",
                language="Python",
                stargazers_count=5,
                forks_count=2,
                topics=["fastapi", "docker"],
                pushed_at=None,
            )
        ]

        summary = await aggregate("octocat", now=NOW)

        repo = summary.repos[0]
        assert repo.description == "FastAPI shop"
        assert repo.language == "Python"
        assert repo.stars == 5
        assert repo.forks == 2
        assert repo.url == "https://github.com/octocat/shop-api"
        assert repo.last_pushed == datetime(2023, 1, 1, tzinfo=timezone.utc)
        assert summary.profile.profile_url == "https://github.com/octocat"
        assert summary.fetched_at == NOW
        assert "Docker" in summary.tech_stack
