"""
클라이언트 애플리케이션 상태

상태는 불변 레코드 하나이며, 모든 전이 함수는 새 AppState를 반환한다.
사용자 편집은 원본 불릿을 건드리지 않고 edited_bullets 오버레이에만 기록된다.
"""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from app.client.api import ErrorType
from app.domain.activity.schemas import ActivitySummary
from app.domain.bullets.schemas import DEFAULT_MODE, GenerateMode, ResumeBullet

AppStatus = Literal["idle", "loading-github", "loading-ai", "success", "error"]

ERROR_TITLES: dict[str, str] = {
    "github": "GitHub Error",
    "ai": "Generation Error",
    "network": "Network Error",
}


class AppError(BaseModel):
    """사용자 표시용 에러"""

    model_config = ConfigDict(frozen=True)

    title: str
    message: str
    type: ErrorType


class AppState(BaseModel):
    """클라이언트 상태 스냅샷"""

    model_config = ConfigDict(frozen=True)

    username: str = ""
    github_data: ActivitySummary | None = None
    bullets: tuple[ResumeBullet, ...] = ()
    edited_bullets: dict[str, str] = Field(default_factory=dict)
    mode: GenerateMode = DEFAULT_MODE
    status: AppStatus = "idle"
    error: AppError | None = None

    @property
    def is_loading(self) -> bool:
        return self.status in ("loading-github", "loading-ai")


def error_for(error_type: ErrorType, message: str | None) -> AppError:
    """에러 분류를 표시용 제목과 함께 AppError로 변환"""
    return AppError(
        title=ERROR_TITLES[error_type],
        message=message or "Something went wrong. Please try again.",
        type=error_type,
    )


def start_lookup(state: AppState, username: str) -> AppState:
    return state.model_copy(
        update={"username": username, "status": "loading-github", "error": None}
    )


def github_loaded(state: AppState, github_data: ActivitySummary) -> AppState:
    return state.model_copy(update={"github_data": github_data})


def start_generation(state: AppState) -> AppState:
    return state.model_copy(update={"status": "loading-ai", "error": None})


def bullets_loaded(state: AppState, bullets: list[ResumeBullet]) -> AppState:
    """불릿 목록 전체 교체, 기존 편집 오버레이는 폐기"""
    return state.model_copy(
        update={"bullets": tuple(bullets), "edited_bullets": {}, "status": "success"}
    )


def change_mode(state: AppState, mode: GenerateMode) -> AppState:
    return state.model_copy(update={"mode": mode})


def edit_bullet(state: AppState, bullet_id: str, text: str) -> AppState:
    return state.model_copy(
        update={"edited_bullets": {**state.edited_bullets, bullet_id: text}}
    )


def fail(state: AppState, error: AppError) -> AppState:
    return state.model_copy(update={"error": error, "status": "error"})


def bullet_text(state: AppState, bullet: ResumeBullet) -> str:
    """편집된 텍스트가 있으면 그것을, 없으면 원본 텍스트 반환"""
    return state.edited_bullets.get(bullet.id, bullet.text)


def format_bullets(state: AppState) -> str:
    """전체 복사용 텍스트 - 불릿 기호를 붙이고 빈 줄로 구분"""
    return "\n\n".join(f"• {bullet_text(state, bullet)}" for bullet in state.bullets)
