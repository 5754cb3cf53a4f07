"""LLM 응답 파서.

JSON 배열 파싱을 우선 시도하고, 실패하면 줄 단위 휴리스틱으로 불릿을 추출한다.
모델 출력이 깨져 있어도 예외를 던지지 않는다.
"""

import json
import re
import uuid
from typing import Any

from app.core.logging import get_logger
from app.domain.bullets.schemas import (
    BULLET_CATEGORIES,
    CONFIDENCE_LEVELS,
    DEFAULT_CATEGORY,
    DEFAULT_CONFIDENCE,
    ResumeBullet,
)

logger = get_logger(__name__)

FALLBACK_BULLET_LIMIT = 8
FALLBACK_MIN_LINE_LENGTH = 20

CODE_FENCE_START = re.compile(r"^```[a-zA-Z]*\s*")
CODE_FENCE_END = re.compile(r"\s*```$")
BULLET_MARKER = re.compile(r"^[-•*]\s*")
LEADING_QUOTE = re.compile(r'^"\s*')
TRAILING_QUOTE = re.compile(r'"\s*,?$')
JSON_PUNCTUATION = ("{", "[", "}", "]")


def new_bullet_id() -> str:
    """응답 내에서 고유한 불릿 id 생성"""
    return f"bullet-{uuid.uuid4().hex[:12]}"


def strip_code_fence(text: str) -> str:
    """앞뒤 ``` 코드 블록 마커 제거"""
    cleaned = text.strip()
    cleaned = CODE_FENCE_START.sub("", cleaned, count=1)
    cleaned = CODE_FENCE_END.sub("", cleaned, count=1)
    return cleaned.strip()


def coerce_category(value: Any) -> str:
    return value if value in BULLET_CATEGORIES else DEFAULT_CATEGORY


def coerce_confidence(value: Any) -> str:
    return value if value in CONFIDENCE_LEVELS else DEFAULT_CONFIDENCE


def coerce_tech(value: Any) -> list[str]:
    if not isinstance(value, list):
        return []
    return [str(item) for item in value]


def _coerce_bullet(item: Any) -> ResumeBullet | None:
    """배열 원소 하나를 불릿으로 변환, 텍스트가 비어 있으면 None"""
    if not isinstance(item, dict):
        return None

    text = str(item.get("text") or "").strip()
    if not text:
        return None

    return ResumeBullet(
        id=new_bullet_id(),
        text=text,
        category=coerce_category(item.get("category")),
        tech=coerce_tech(item.get("tech")),
        confidence=coerce_confidence(item.get("confidence")),
    )


def parse_json_bullets(text: str) -> list[ResumeBullet]:
    """JSON 배열 응답 파싱

    Raises:
        ValueError: JSON이 아니거나 배열이 아닌 경우
    """
    parsed = json.loads(strip_code_fence(text))
    if not isinstance(parsed, list):
        raise ValueError("응답이 JSON 배열이 아닙니다")

    bullets = [_coerce_bullet(item) for item in parsed]
    return [bullet for bullet in bullets if bullet is not None]


def _clean_line(line: str) -> str:
    line = BULLET_MARKER.sub("", line)
    line = LEADING_QUOTE.sub("", line)
    line = TRAILING_QUOTE.sub("", line)
    return line.strip()


def extract_bullets_from_text(text: str) -> list[ResumeBullet]:
    """JSON 파싱 실패 시 원문에서 줄 단위로 불릿 추출

    20자 이하 줄과 JSON 구두점으로 시작하는 줄은 제외하고 최대 8개까지
    Feature/medium 불릿으로 감싼다.
    """
    lines = [line.strip() for line in text.splitlines()]
    candidates = [
        line
        for line in lines
        if len(line) > FALLBACK_MIN_LINE_LENGTH and not line.startswith(JSON_PUNCTUATION)
    ]

    bullets = []
    for line in candidates:
        cleaned = _clean_line(line)
        if not cleaned:
            continue
        bullets.append(
            ResumeBullet(
                id=new_bullet_id(),
                text=cleaned,
                category=DEFAULT_CATEGORY,
                tech=[],
                confidence=DEFAULT_CONFIDENCE,
            )
        )
        if len(bullets) >= FALLBACK_BULLET_LIMIT:
            break

    return bullets


def parse_bullets_response(text: str) -> list[ResumeBullet]:
    """LLM 응답을 불릿 목록으로 변환, 파싱 실패 시 텍스트 폴백"""
    try:
        bullets = parse_json_bullets(text)
        logger.info("불릿 JSON 파싱 완료", count=len(bullets))
        return bullets
    except (ValueError, RecursionError) as e:
        logger.warning(
            "불릿 JSON 파싱 실패, 텍스트 폴백",
            error=str(e),
            response_length=len(text),
        )

    bullets = extract_bullets_from_text(text)
    logger.info("텍스트 폴백 추출 완료", count=len(bullets))
    return bullets
