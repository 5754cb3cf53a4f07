"""GitHub 활동 요약 스키마.

JSON 직렬화 시 camelCase 필드명을 사용하며, 커밋의 files_changed만 snake_case를 유지한다.
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class Profile(BaseModel):
    """GitHub 프로필 스냅샷"""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    name: str | None = None
    avatar: str
    bio: str | None = None
    public_repos: int = Field(default=0, alias="publicRepos")
    followers: int = 0
    profile_url: str = Field(alias="profileUrl")
    created_at: datetime = Field(alias="createdAt")


class Commit(BaseModel):
    """커밋 정보 - 메시지는 첫 줄만 보관"""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    sha: str
    message: str
    date: datetime
    additions: int = 0
    deletions: int = 0
    files_changed: int = 0


class Repository(BaseModel):
    """레포지토리 정보"""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    name: str
    description: str | None = None
    url: str
    language: str | None = None
    stars: int = 0
    forks: int = 0
    commits: list[Commit] = Field(default_factory=list)
    languages: dict[str, int] = Field(default_factory=dict)
    last_pushed: datetime = Field(alias="lastPushed")
    topics: list[str] = Field(default_factory=list)


class CommitActivity(BaseModel):
    """커밋 활동 통계"""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    total: int = 0
    avg_per_repo: int = Field(default=0, alias="avgPerRepo")
    avg_additions: int = Field(default=0, alias="avgAdditions")
    avg_deletions: int = Field(default=0, alias="avgDeletions")


class ActivitySummary(BaseModel):
    """불릿 생성의 유일한 입력이 되는 GitHub 활동 요약"""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    username: str = Field(min_length=1)
    profile: Profile
    repos: list[Repository] = Field(default_factory=list)
    total_commits: int = Field(default=0, alias="totalCommits")
    language_distribution: dict[str, float] = Field(
        default_factory=dict, alias="languageDistribution"
    )
    top_languages: list[str] = Field(default_factory=list, alias="topLanguages")
    commit_activity: CommitActivity = Field(
        default_factory=CommitActivity, alias="commitActivity"
    )
    tech_stack: list[str] = Field(default_factory=list, alias="techStack")
    fetched_at: datetime = Field(alias="fetchedAt")
