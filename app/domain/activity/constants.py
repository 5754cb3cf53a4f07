"""GitHub 활동 수집 상수

수집 범위 제한값과 기술 스택 추론용 키워드 테이블
"""

import re

# GitHub 사용자명: 영숫자와 단일 하이픈, 하이픈으로 시작/끝나지 않음, 최대 39자
USERNAME_PATTERN = re.compile(r"^[a-zA-Z0-9](?:[a-zA-Z0-9]|-(?=[a-zA-Z0-9])){0,38}$")

REPO_FETCH_LIMIT = 30
ANALYZED_REPO_LIMIT = 10
COMMIT_FETCH_LIMIT = 30
COMMIT_DETAIL_LIMIT = 10
ACTIVITY_WINDOW_DAYS = 90

TOP_LANGUAGE_LIMIT = 5
TECH_STACK_LIMIT = 10

# 정규 기술명 -> 토픽/레포 이름/설명에서 찾을 소문자 부분 문자열
# 테이블 순서가 결과 순서가 되므로 항목 추가 시 순서에 유의
TECH_PATTERNS: dict[str, tuple[str, ...]] = {
    "React": ("react", "reactjs", "next", "nextjs", "gatsby"),
    "Vue": ("vue", "vuejs", "nuxt", "nuxtjs"),
    "Angular": ("angular", "angularjs"),
    "Node.js": ("node", "nodejs", "express", "fastify", "nestjs"),
    "Python": ("python", "django", "flask", "fastapi"),
    "Docker": ("docker", "container", "kubernetes", "k8s"),
    "AWS": ("aws", "lambda", "s3", "dynamodb"),
    "GraphQL": ("graphql", "apollo"),
    "MongoDB": ("mongodb", "mongoose"),
    "PostgreSQL": ("postgres", "postgresql", "prisma"),
    "Redis": ("redis",),
    "TypeScript": ("typescript", "ts"),
    "Tailwind CSS": ("tailwind", "tailwindcss"),
    "REST API": ("api", "rest", "restful"),
}
