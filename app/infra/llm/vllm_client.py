from langchain_core.language_models import BaseChatModel
from langchain_openai import ChatOpenAI

from app.core.config import settings
from app.core.exceptions import ConfigurationError
from app.infra.llm.base import GENERATION_MAX_RETRIES, GENERATION_TEMPERATURE, BaseLLMClient


class VLLMClient(BaseLLMClient):
    """vLLM 클라이언트 - OpenAI 호환 자체 호스팅 엔드포인트"""

    provider = "vllm"

    def __init__(self):
        if not settings.vllm_api_url:
            raise ConfigurationError("VLLM_API_URL이 설정되지 않았습니다")

        # 인증 없는 vLLM 서버도 api_key 값 자체는 요구함
        self._model = ChatOpenAI(
            model=settings.vllm_model,
            api_key=settings.vllm_api_key or "EMPTY",
            base_url=settings.vllm_api_url,
            timeout=settings.generation_timeout,
            max_retries=GENERATION_MAX_RETRIES,
            temperature=GENERATION_TEMPERATURE,
        )

    def get_chat_model(self) -> BaseChatModel:
        return self._model

    def get_model_name(self) -> str:
        return settings.vllm_model or "vllm"
