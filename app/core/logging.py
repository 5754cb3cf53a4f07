"""
structlog 기반 로깅 설정

서버와 CLI가 같은 설정을 공유한다.
- 개발 환경: 컬러 콘솔 출력, 프로덕션: JSON 출력
- request_id, username 컨텍스트 자동 주입
- CLI는 stdout을 결과 출력에 쓰므로 로그를 stderr로 보낸다
"""

import logging
import re
import sys
from typing import TextIO

import structlog

from app.core.config import settings
from app.core.context import get_request_id, get_username

SECRET_PATTERNS = (
    (re.compile(r"(Bearer\s+)\S+", re.IGNORECASE), r"\1***"),
    (re.compile(r"((?:api[_-]?)?key=)[^&\s]+", re.IGNORECASE), r"\1***"),
    (re.compile(r"(token=)[^&\s]+", re.IGNORECASE), r"\1***"),
    # GitHub 토큰 (ghp_, gho_, ghs_, github_pat_ ...)
    (re.compile(r"\b(?:gh[pousr]_|github_pat_)[A-Za-z0-9_]{20,}"), "***"),
    # Google API 키
    (re.compile(r"\bAIza[0-9A-Za-z_-]{30,}"), "***"),
)

NOISY_LOGGERS = (
    "httpcore",
    "httpx",
    "urllib3",
    "anyio",
    "langfuse",
    "langchain",
    "langchain_google_genai",
    "google",
    "openai",
)


def mask_secrets(value: str) -> str:
    """토큰/API 키 마스킹"""
    for pattern, replacement in SECRET_PATTERNS:
        value = pattern.sub(replacement, value)
    return value


def add_context_processor(logger: logging.Logger, method_name: str, event_dict: dict) -> dict:
    """request_id와 조회 대상 username 주입, 명시적으로 넘긴 값이 우선"""
    request_id = get_request_id()
    if request_id:
        event_dict.setdefault("request_id", request_id)

    username = get_username()
    if username:
        event_dict.setdefault("username", username)

    return event_dict


def mask_secrets_processor(logger: logging.Logger, method_name: str, event_dict: dict) -> dict:
    """프로덕션 로그의 문자열 값에서 비밀값 제거"""
    if not settings.is_production:
        return event_dict

    return {
        key: mask_secrets(value) if isinstance(value, str) else value
        for key, value in event_dict.items()
    }


def _shared_processors() -> list:
    processors: list = [
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        add_context_processor,
        mask_secrets_processor,
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]
    if settings.is_production:
        processors.append(structlog.processors.format_exc_info)
    return processors


def setup_logging(level: str | None = None, stream: TextIO | None = None) -> None:
    """structlog 설정 초기화

    Args:
        level: 로그 레벨, 없으면 LOG_LEVEL 설정값
        stream: 출력 스트림, 없으면 stdout
    """
    log_level = getattr(logging, (level or settings.log_level).upper(), logging.INFO)
    shared_processors = _shared_processors()

    if settings.is_production:
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=stream is None or stream.isatty())

    structlog.configure(
        processors=[*shared_processors, structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    handler = logging.StreamHandler(stream or sys.stdout)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=shared_processors,
            processors=[structlog.stdlib.ProcessorFormatter.remove_processors_meta, renderer],
        )
    )

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(log_level)

    # uvicorn 로그도 루트 핸들러 하나로 출력
    for logger_name in ("uvicorn", "uvicorn.error", "uvicorn.access"):
        logging.getLogger(logger_name).handlers.clear()

    for logger_name in NOISY_LOGGERS:
        logging.getLogger(logger_name).setLevel(max(log_level, logging.WARNING))


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """structlog 로거 반환"""
    return structlog.get_logger(name)
