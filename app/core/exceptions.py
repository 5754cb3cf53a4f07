from enum import Enum

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from app.core.config import settings


class ErrorCode(str, Enum):
    """에러 코드 열거형"""

    INVALID_INPUT = "INVALID_INPUT"
    GITHUB_NOT_FOUND = "GITHUB_NOT_FOUND"
    GITHUB_RATE_LIMITED = "GITHUB_RATE_LIMITED"
    GITHUB_API_ERROR = "GITHUB_API_ERROR"
    CONFIGURATION_ERROR = "CONFIGURATION_ERROR"
    GENERATION_TIMEOUT = "GENERATION_TIMEOUT"
    GENERATION_FAILED = "GENERATION_FAILED"
    INTERNAL_ERROR = "INTERNAL_ERROR"


class CustomException(Exception):
    def __init__(
        self,
        status_code: int,
        error_code: ErrorCode | str,
        message: str,
        detail: str | None = None,
    ):
        self.status_code = status_code
        self.error_code = error_code
        self.message = message
        self.detail = detail
        super().__init__(message)


class InvalidInputError(CustomException):
    def __init__(self, message: str = "Invalid request", detail: str | None = None):
        super().__init__(
            status_code=400,
            error_code=ErrorCode.INVALID_INPUT,
            message=message,
            detail=detail,
        )


class GitHubAPIError(CustomException):
    """GitHub 호출 실패 - 404/403 이외의 모든 비정상 응답"""

    def __init__(
        self,
        detail: str | None = None,
        *,
        status_code: int = 500,
        error_code: ErrorCode = ErrorCode.GITHUB_API_ERROR,
        message: str = "Failed to fetch GitHub data",
    ):
        super().__init__(
            status_code=status_code,
            error_code=error_code,
            message=message,
            detail=detail,
        )


class NotFoundError(GitHubAPIError):
    def __init__(self, username: str, detail: str | None = None):
        self.username = username
        super().__init__(
            detail,
            status_code=404,
            error_code=ErrorCode.GITHUB_NOT_FOUND,
            message=f'We couldn\'t find the GitHub user "{username}". Check spelling?',
        )


class RateLimitedError(GitHubAPIError):
    def __init__(self, detail: str | None = None):
        super().__init__(
            detail,
            status_code=429,
            error_code=ErrorCode.GITHUB_RATE_LIMITED,
            message="GitHub API is temporarily busy. Please try again in a few minutes.",
        )


class ConfigurationError(CustomException):
    def __init__(self, detail: str | None = None):
        super().__init__(
            status_code=500,
            error_code=ErrorCode.CONFIGURATION_ERROR,
            message="AI generation service is not configured",
            detail=detail,
        )


class UpstreamTimeoutError(CustomException):
    def __init__(self, detail: str | None = None):
        super().__init__(
            status_code=504,
            error_code=ErrorCode.GENERATION_TIMEOUT,
            message="AI is taking longer than expected. Please try again.",
            detail=detail,
        )


class GenerationError(CustomException):
    def __init__(self, detail: str | None = None):
        super().__init__(
            status_code=500,
            error_code=ErrorCode.GENERATION_FAILED,
            message="Failed to generate resume bullets",
            detail=detail,
        )


def _format_validation_error(exc: RequestValidationError) -> str:
    """첫 번째 검증 에러를 사람이 읽을 수 있는 메시지로 변환"""
    errors = exc.errors()
    if not errors:
        return "Invalid request"
    first = errors[0]
    location = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
    message = str(first.get("msg", "Invalid value")).removeprefix("Value error, ")
    return f"{location}: {message}" if location else message


def register_exception_handlers(app):
    @app.exception_handler(CustomException)
    async def custom_exception_handler(request: Request, exc: CustomException):
        content = {
            "error": exc.error_code,
            "message": exc.message,
        }
        if exc.detail and not settings.is_production:
            content["detail"] = exc.detail

        return JSONResponse(
            status_code=exc.status_code,
            content=content,
        )

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        return await custom_exception_handler(
            request, InvalidInputError(_format_validation_error(exc))
        )
