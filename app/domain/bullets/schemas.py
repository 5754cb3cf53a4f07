from datetime import datetime
from typing import Literal, get_args

from pydantic import BaseModel, ConfigDict, Field

GenerateMode = Literal["standard", "technical", "impact", "entry"]
BulletCategory = Literal["Architecture", "Feature", "Quality", "Tooling"]
Confidence = Literal["low", "medium", "high"]

GENERATE_MODES: tuple[str, ...] = get_args(GenerateMode)
BULLET_CATEGORIES: tuple[str, ...] = get_args(BulletCategory)
CONFIDENCE_LEVELS: tuple[str, ...] = get_args(Confidence)

DEFAULT_MODE: GenerateMode = "standard"
DEFAULT_CATEGORY: BulletCategory = "Feature"
DEFAULT_CONFIDENCE: Confidence = "medium"


class ResumeBullet(BaseModel):
    """생성된 이력서 불릿"""

    model_config = ConfigDict(frozen=True)

    id: str
    text: str = Field(min_length=1)
    category: BulletCategory = DEFAULT_CATEGORY
    tech: list[str] = Field(default_factory=list)
    confidence: Confidence = DEFAULT_CONFIDENCE


class GenerateResponse(BaseModel):
    """불릿 생성 결과"""

    model_config = ConfigDict(populate_by_name=True)

    success: bool = True
    bullets: list[ResumeBullet]
    mode: GenerateMode
    username: str
    generated_at: datetime = Field(alias="generatedAt")
