from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """애플리케이션 설정"""

    environment: str = "development"

    # LLM 프로바이더 선택: "gemini", "openai" 또는 "vllm"
    llm_provider: str = "gemini"

    # Gemini 설정 - 기본 불릿 생성용
    gemini_api_key: str = ""
    gemini_model: str = "gemini-2.5-flash"

    # OpenAI 설정 - 개발/테스트용
    openai_api_key: str = ""
    openai_model: str = "gpt-4o-mini"

    # vLLM 설정 - 자체 호스팅용
    vllm_api_url: str = ""
    vllm_api_key: str = ""
    vllm_model: str = ""

    # GitHub
    github_token: str = ""

    # Timeout 설정
    github_timeout: float = 30.0
    generation_timeout: float = 120.0

    # 동시 요청 제한
    github_max_concurrent_requests: int = 10

    # 캐시 설정
    cache_ttl_seconds: int = 3600

    # 요청 제한 설정
    rate_limit_default: str = "30/minute"

    # 로깅 설정
    log_level: str = "INFO"

    # CORS 설정
    cors_allowed_origins: str = ""

    # Langfuse 설정
    langfuse_public_key: str = ""
    langfuse_secret_key: str = ""
    langfuse_base_url: str = "https://cloud.langfuse.com"

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    @property
    def is_production(self) -> bool:
        return self.environment.lower() == "production"

    @property
    def cors_origins(self) -> list[str]:
        """쉼표로 구분된 CORS 허용 origin 목록"""
        return [o.strip() for o in self.cors_allowed_origins.split(",") if o.strip()]

    def missing_generation_credentials(self) -> list[str]:
        """선택된 LLM 프로바이더에 필요한 설정 중 누락된 항목 반환

        누락은 기동 시점이 아니라 생성 요청 시점에 검사한다.
        """
        provider = self.llm_provider.lower()
        if provider == "gemini" and not self.gemini_api_key:
            return ["GEMINI_API_KEY"]
        if provider == "openai" and not self.openai_api_key:
            return ["OPENAI_API_KEY"]
        if provider == "vllm" and not self.vllm_api_url:
            return ["VLLM_API_URL"]
        return []


settings = Settings()
