"""기술 스택 추론 테스트"""

from datetime import datetime, timezone

from app.domain.activity.schemas import Repository
from app.domain.activity.tech_stack import build_search_corpus, infer_tech_stack

PUSHED = datetime(2024, 5, 1, tzinfo=timezone.utc)


def _repo(name: str, description: str | None = None, topics: list[str] | None = None):
    return Repository(
        name=name,
        description=description,
        url=f"https://github.com/octocat/{name}",
        last_pushed=PUSHED,
        topics=topics or [],
    )


class TestBuildSearchCorpus:
    """build_search_corpus 함수 테스트"""

    def test_combines_lowercased_fields(self):
        """토픽, 이름, 설명을 소문자로 결합"""
        corpus = build_search_corpus([_repo("My-Shop", "A Django Store", ["Payments"])])

        assert "payments" in corpus
        assert "my-shop" in corpus
        assert "a django store" in corpus

    def test_missing_description(self):
        """설명이 없어도 동작"""
        assert build_search_corpus([_repo("blog")]).strip() == "blog"


class TestInferTechStack:
    """infer_tech_stack 함수 테스트"""

    def test_languages_come_first(self):
        """주요 언어가 키워드 매칭 결과보다 앞"""
        repos = [_repo("blog", topics=["graphql"])]

        stack = infer_tech_stack(repos, ["Go", "Shell"])

        assert stack[:2] == ["Go", "Shell"]
        assert "GraphQL" in stack

    def test_table_order_and_deduplication(self):
        """테이블 순서를 따르고 언어와 중복되는 기술은 한 번만"""
        repos = [_repo("shop", "Redis cache with Docker", ["python"])]

        stack = infer_tech_stack(repos, ["Python"])

        assert stack == ["Python", "Docker", "Redis"]

    def test_substring_matching(self):
        """부분 문자열도 매칭"""
        repos = [_repo("nextjs-portfolio")]

        assert "React" in infer_tech_stack(repos, [])

    def test_limited_to_ten(self):
        """최대 10개"""
        repos = [
            _repo(
                "everything",
                "react vue angular express django docker aws graphql mongodb postgres redis "
                "tailwind rest",
            )
        ]

        stack = infer_tech_stack(repos, ["Python", "Go"])

        assert len(stack) == 10
        assert stack[:3] == ["Python", "Go", "React"]

    def test_no_signal(self):
        """언어도 키워드도 없으면 빈 목록"""
        assert infer_tech_stack([_repo("x")], []) == []

    def test_custom_patterns(self):
        """키워드 테이블 교체"""
        stack = infer_tech_stack(
            [_repo("bevy-game")], [], patterns={"Bevy": ("bevy",), "Unity": ("unity",)}
        )

        assert stack == ["Bevy"]
