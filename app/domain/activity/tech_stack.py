from collections.abc import Mapping, Sequence

from app.domain.activity.constants import TECH_PATTERNS, TECH_STACK_LIMIT
from app.domain.activity.schemas import Repository


def build_search_corpus(repos: Sequence[Repository]) -> str:
    """토픽, 소문자 레포 이름, 소문자 설명을 하나의 검색 문자열로 결합"""
    topics = [topic for repo in repos for topic in repo.topics]
    names = [repo.name.lower() for repo in repos]
    descriptions = [(repo.description or "").lower() for repo in repos]
    return " ".join([*topics, *names, *descriptions]).lower()


def infer_tech_stack(
    repos: Sequence[Repository],
    top_languages: Sequence[str],
    patterns: Mapping[str, Sequence[str]] = TECH_PATTERNS,
) -> list[str]:
    """주요 언어와 키워드 테이블로 기술 스택 추론

    Args:
        repos: 분석 대상 레포지토리
        top_languages: 비율 순으로 정렬된 주요 언어
        patterns: 정규 기술명 -> 부분 문자열 목록

    Returns:
        언어 먼저, 이후 테이블 순서로 중복 없이 최대 10개
    """
    stack = dict.fromkeys(top_languages)

    corpus = build_search_corpus(repos)
    for tech, keywords in patterns.items():
        if any(keyword in corpus for keyword in keywords):
            stack.setdefault(tech)

    return list(stack)[:TECH_STACK_LIMIT]
