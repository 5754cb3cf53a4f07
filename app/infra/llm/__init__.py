from app.infra.llm.base import BaseLLMClient
from app.infra.llm.client import generate_text, message_text
from app.infra.llm.factory import PROVIDERS, get_generator_client, reset_clients

__all__ = [
    "PROVIDERS",
    "BaseLLMClient",
    "generate_text",
    "get_generator_client",
    "message_text",
    "reset_clients",
]
