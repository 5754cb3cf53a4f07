from langchain_core.language_models import BaseChatModel
from langchain_google_genai import ChatGoogleGenerativeAI, HarmBlockThreshold, HarmCategory

from app.core.config import settings
from app.core.exceptions import ConfigurationError
from app.infra.llm.base import GENERATION_MAX_RETRIES, GENERATION_TEMPERATURE, BaseLLMClient

SAFETY_SETTINGS = {
    category: HarmBlockThreshold.BLOCK_MEDIUM_AND_ABOVE
    for category in (
        HarmCategory.HARM_CATEGORY_HARASSMENT,
        HarmCategory.HARM_CATEGORY_HATE_SPEECH,
        HarmCategory.HARM_CATEGORY_SEXUALLY_EXPLICIT,
        HarmCategory.HARM_CATEGORY_DANGEROUS_CONTENT,
    )
}


class GeminiClient(BaseLLMClient):
    """Gemini 클라이언트 - 기본 불릿 생성 모델"""

    provider = "gemini"

    def __init__(self):
        if not settings.gemini_api_key:
            raise ConfigurationError("GEMINI_API_KEY가 설정되지 않았습니다")

        self._model = ChatGoogleGenerativeAI(
            model=settings.gemini_model,
            google_api_key=settings.gemini_api_key,
            timeout=settings.generation_timeout,
            max_retries=GENERATION_MAX_RETRIES,
            temperature=GENERATION_TEMPERATURE,
            max_output_tokens=8192,
            top_p=0.8,
            top_k=40,
            safety_settings=SAFETY_SETTINGS,
        )

    def get_chat_model(self) -> BaseChatModel:
        return self._model

    def get_model_name(self) -> str:
        return settings.gemini_model
