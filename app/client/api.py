from typing import Literal, TypeVar
from urllib.parse import quote

import httpx
from pydantic import BaseModel, ValidationError

from app.core.logging import get_logger
from app.domain.activity.schemas import ActivitySummary
from app.domain.bullets.schemas import GenerateResponse

logger = get_logger(__name__)

ErrorType = Literal["github", "ai", "network"]

NETWORK_ERROR_MESSAGE = "Network error. Please check your connection."
INVALID_RESPONSE_MESSAGE = "Unexpected response from server. Please try again."

ModelT = TypeVar("ModelT", bound=BaseModel)


class ApiError(Exception):
    """API 호출 실패 - 표시용 분류(github/ai/network)를 함께 보관"""

    def __init__(self, message: str, status: int, error_type: ErrorType):
        self.message = message
        self.status = status
        self.error_type = error_type
        super().__init__(message)


def _error_message(response: httpx.Response, default: str) -> str:
    try:
        body = response.json()
    except ValueError:
        return default
    if not isinstance(body, dict):
        return default
    return body.get("message") or default


def _parse_body(response: httpx.Response, model: type[ModelT], error_type: ErrorType) -> ModelT:
    """성공 응답 본문 검증, 형식이 맞지 않으면 서버 측 분류의 ApiError"""
    try:
        return model.model_validate(response.json())
    except (ValidationError, ValueError) as e:
        logger.warning("응답 형식 오류", model=model.__name__, error=type(e).__name__)
        raise ApiError(INVALID_RESPONSE_MESSAGE, response.status_code, error_type) from e


class ResumeGitApi:
    """ResumeGit 서버 HTTP 클라이언트"""

    def __init__(
        self,
        base_url: str,
        timeout: float = 180.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self._client = httpx.AsyncClient(
            base_url=base_url.rstrip("/"),
            timeout=timeout,
            transport=transport,
        )

    async def aclose(self) -> None:
        await self._client.aclose()

    async def __aenter__(self) -> "ResumeGitApi":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def fetch_github_data(self, username: str) -> ActivitySummary:
        """GET /github/{username}

        Raises:
            ApiError: 서버 오류나 응답 형식 오류(github), 네트워크 오류(network)
        """
        try:
            response = await self._client.get(f"/github/{quote(username, safe='')}")
        except httpx.HTTPError as e:
            logger.warning("GitHub 데이터 요청 실패", error=type(e).__name__)
            raise ApiError(NETWORK_ERROR_MESSAGE, 0, "network") from e

        if response.is_error:
            raise ApiError(
                _error_message(response, "Failed to fetch GitHub data"),
                response.status_code,
                "github",
            )
        return _parse_body(response, ActivitySummary, "github")

    async def generate_bullets(self, github_data: ActivitySummary, mode: str) -> GenerateResponse:
        """POST /generate

        Raises:
            ApiError: 서버 오류나 응답 형식 오류(ai), 네트워크 오류(network)
        """
        payload = {
            "githubData": github_data.model_dump(mode="json", by_alias=True),
            "mode": mode,
        }
        try:
            response = await self._client.post("/generate", json=payload)
        except httpx.HTTPError as e:
            logger.warning("불릿 생성 요청 실패", error=type(e).__name__)
            raise ApiError(NETWORK_ERROR_MESSAGE, 0, "network") from e

        if response.is_error:
            raise ApiError(
                _error_message(response, "Failed to generate resume bullets"),
                response.status_code,
                "ai",
            )
        return _parse_body(response, GenerateResponse, "ai")
