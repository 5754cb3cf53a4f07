from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict


class ClientSettings(BaseSettings):
    """CLI 클라이언트 설정 - RESUMEGIT_ 접두사 환경 변수"""

    api_url: str = "http://localhost:8000/api"
    cache_dir: Path = Path.home() / ".cache" / "resumegit"
    cache_ttl_seconds: int = 3600
    timeout: float = 180.0

    model_config = SettingsConfigDict(
        env_prefix="RESUMEGIT_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )


client_settings = ClientSettings()
