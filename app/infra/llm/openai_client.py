from langchain_core.language_models import BaseChatModel
from langchain_openai import ChatOpenAI

from app.core.config import settings
from app.core.exceptions import ConfigurationError
from app.infra.llm.base import GENERATION_MAX_RETRIES, GENERATION_TEMPERATURE, BaseLLMClient


class OpenAIClient(BaseLLMClient):
    """OpenAI 클라이언트 - LLM_PROVIDER=openai"""

    provider = "openai"

    def __init__(self):
        if not settings.openai_api_key:
            raise ConfigurationError("OPENAI_API_KEY가 설정되지 않았습니다")

        self._model = ChatOpenAI(
            model=settings.openai_model,
            api_key=settings.openai_api_key,
            timeout=settings.generation_timeout,
            max_retries=GENERATION_MAX_RETRIES,
            temperature=GENERATION_TEMPERATURE,
        )

    def get_chat_model(self) -> BaseChatModel:
        return self._model

    def get_model_name(self) -> str:
        return settings.openai_model
