from abc import ABC, abstractmethod

from langchain_core.language_models import BaseChatModel

# 재시도는 사용자가 직접 다시 요청하는 방식만 허용
GENERATION_MAX_RETRIES = 0
GENERATION_TEMPERATURE = 0.2


class BaseLLMClient(ABC):
    """불릿 생성 모델 클라이언트

    자격 증명은 생성자에서 검사하고, 누락 시 ConfigurationError를 던진다.
    """

    provider: str

    @abstractmethod
    def get_chat_model(self) -> BaseChatModel:
        """LangChain 채팅 모델 반환"""

    @abstractmethod
    def get_model_name(self) -> str:
        """모델 이름 반환"""
