"""
요청 추적 미들웨어

- 요청마다 request_id 부여 (안전한 형식의 X-Request-ID 헤더는 그대로 이어받음)
- 응답 상태에 따라 로그 레벨 구분: 5xx error, 4xx warning
- X-Request-ID 응답 헤더 추가
"""

import re
import time

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

from app.core.context import clear_context, set_request_id
from app.core.logging import get_logger

logger = get_logger(__name__)

UNTRACKED_PATHS = frozenset({"/health", "/docs", "/openapi.json", "/redoc", "/favicon.ico"})

# 로그 주입을 막기 위해 영숫자, 하이픈, 밑줄만 허용
REQUEST_ID_PATTERN = re.compile(r"^[A-Za-z0-9_-]{1,64}$")


def _incoming_request_id(request: Request) -> str | None:
    value = request.headers.get("X-Request-ID")
    if value and REQUEST_ID_PATTERN.match(value):
        return value
    return None


def _client_ip(request: Request) -> str:
    forwarded = request.headers.get("X-Forwarded-For")
    if forwarded:
        return forwarded.split(",")[0].strip()
    return request.client.host if request.client else "unknown"


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """request_id 부여와 요청 단위 접근 로그"""

    async def dispatch(self, request: Request, call_next) -> Response:
        if request.url.path in UNTRACKED_PATHS:
            return await call_next(request)

        request_id = set_request_id(_incoming_request_id(request))
        started = time.perf_counter()
        fields = {"method": request.method, "path": request.url.path}

        logger.info("요청 수신", client_ip=_client_ip(request), **fields)

        try:
            response = await call_next(request)
        except Exception as e:
            logger.error(
                "요청 처리 중 예외",
                error=type(e).__name__,
                duration_ms=_elapsed_ms(started),
                **fields,
            )
            raise
        finally:
            clear_context()

        status_code = response.status_code
        if status_code >= 500:
            log = logger.error
        elif status_code >= 400:
            log = logger.warning
        else:
            log = logger.info
        log(
            "요청 완료",
            request_id=request_id,
            status_code=status_code,
            duration_ms=_elapsed_ms(started),
            **fields,
        )

        response.headers["X-Request-ID"] = request_id
        return response


def _elapsed_ms(started: float) -> float:
    return round((time.perf_counter() - started) * 1000, 2)
