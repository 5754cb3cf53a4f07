from app.core.config import settings
from app.core.exceptions import ConfigurationError
from app.core.logging import get_logger
from app.infra.llm.base import BaseLLMClient
from app.infra.llm.gemini_client import GeminiClient
from app.infra.llm.openai_client import OpenAIClient
from app.infra.llm.vllm_client import VLLMClient

logger = get_logger(__name__)

PROVIDERS: dict[str, type[BaseLLMClient]] = {
    client.provider: client for client in (GeminiClient, OpenAIClient, VLLMClient)
}

_generator_client: BaseLLMClient | None = None


def get_generator_client() -> BaseLLMClient:
    """LLM_PROVIDER 설정에 맞는 불릿 생성 클라이언트 반환

    자격 증명은 기동 시점이 아니라 첫 생성 요청 시점에 검사한다.
    실패한 초기화는 캐시하지 않으므로 설정을 고치면 다음 요청부터 동작한다.

    Raises:
        ConfigurationError: 자격 증명 누락 또는 지원하지 않는 프로바이더
    """
    global _generator_client

    if _generator_client is not None:
        return _generator_client

    provider = settings.llm_provider.lower()
    client_class = PROVIDERS.get(provider)
    if client_class is None:
        raise ConfigurationError(f"지원하지 않는 LLM 프로바이더: {provider}")

    _generator_client = client_class()
    logger.info(
        "생성 모델 클라이언트 초기화",
        provider=provider,
        model=_generator_client.get_model_name(),
    )
    return _generator_client


def reset_clients() -> None:
    """클라이언트 캐시 초기화 - 테스트용"""
    global _generator_client
    _generator_client = None
