"""불릿 생성 API 스키마."""

from pydantic import BaseModel, ConfigDict, Field, field_validator

from app.domain.activity.schemas import ActivitySummary
from app.domain.bullets.schemas import DEFAULT_MODE, GENERATE_MODES


class GenerateRequest(BaseModel):
    """불릿 생성 요청."""

    model_config = ConfigDict(populate_by_name=True)

    github_data: ActivitySummary | None = Field(default=None, alias="githubData")
    mode: str = DEFAULT_MODE

    @field_validator("mode")
    @classmethod
    def validate_mode(cls, v: str) -> str:
        if v not in GENERATE_MODES:
            raise ValueError(f"Mode must be one of: {', '.join(GENERATE_MODES)}")
        return v
