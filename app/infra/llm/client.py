import asyncio
import os

import httpx
from langchain_core.messages import BaseMessage, HumanMessage, SystemMessage
from langfuse.langchain import CallbackHandler

from app.core.config import settings
from app.core.exceptions import (
    CustomException,
    GenerationError,
    UpstreamTimeoutError,
)
from app.core.logging import get_logger
from app.infra.llm.factory import get_generator_client

logger = get_logger(__name__)

if settings.langfuse_public_key:
    os.environ["LANGFUSE_PUBLIC_KEY"] = settings.langfuse_public_key
if settings.langfuse_secret_key:
    os.environ["LANGFUSE_SECRET_KEY"] = settings.langfuse_secret_key
if settings.langfuse_base_url:
    os.environ["LANGFUSE_HOST"] = settings.langfuse_base_url


def get_langfuse_handler() -> CallbackHandler | None:
    """Langfuse 콜백 핸들러 반환"""
    if not settings.langfuse_public_key or not settings.langfuse_secret_key:
        return None

    return CallbackHandler()


def _is_timeout(error: Exception) -> bool:
    """프로바이더별 타임아웃 예외 판별"""
    if isinstance(error, (asyncio.TimeoutError, httpx.TimeoutException)):
        return True
    message = str(error).lower()
    return "timeout" in message or "timed out" in message or "deadline" in message


def message_text(message: BaseMessage) -> str:
    """채팅 모델 응답에서 텍스트만 추출

    Gemini는 content를 파트 리스트로 돌려주는 경우가 있다.
    """
    content = message.content
    if isinstance(content, str):
        return content

    parts = []
    for part in content:
        if isinstance(part, str):
            parts.append(part)
        elif isinstance(part, dict) and part.get("type") == "text":
            parts.append(part.get("text", ""))
    return "".join(parts)


async def generate_text(
    system_prompt: str,
    human_prompt: str,
    tags: list[str] | None = None,
    session_id: str | None = None,
) -> str:
    """생성 모델 호출 후 응답 원문 반환

    Raises:
        ConfigurationError: 생성 자격 증명 누락
        UpstreamTimeoutError: 제한 시간 초과
        GenerationError: 그 외 모델 호출 실패
    """
    client = get_generator_client()
    llm = client.get_chat_model()

    langfuse_handler = get_langfuse_handler()
    config = {
        "callbacks": [langfuse_handler] if langfuse_handler else [],
        "metadata": {
            "langfuse_session_id": session_id,
            "langfuse_tags": ["bullets", *(tags or [])],
        },
    }
    messages = [
        SystemMessage(content=system_prompt),
        HumanMessage(content=human_prompt),
    ]

    logger.debug("생성 모델 호출", provider=client.provider, model=client.get_model_name())
    try:
        result = await asyncio.wait_for(
            llm.ainvoke(messages, config=config),
            timeout=settings.generation_timeout,
        )
    except CustomException:
        raise
    except Exception as e:
        if _is_timeout(e):
            logger.error("생성 모델 타임아웃", timeout=settings.generation_timeout)
            raise UpstreamTimeoutError(detail=type(e).__name__) from e
        logger.error("생성 모델 호출 실패", error=type(e).__name__, detail=str(e))
        raise GenerationError(detail=str(e)) from e

    text = message_text(result)
    logger.debug("생성 모델 응답 수신", length=len(text))
    return text
