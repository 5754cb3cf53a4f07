from datetime import datetime, timezone

from fastapi import APIRouter

from app.api.schemas import GenerateRequest
from app.core.context import get_request_id, set_username
from app.core.exceptions import InvalidInputError
from app.core.logging import get_logger
from app.domain.bullets.schemas import GenerateResponse
from app.domain.bullets.service import generate_bullets

router = APIRouter(prefix="/generate", tags=["generate"])
logger = get_logger(__name__)


@router.post("", response_model=GenerateResponse)
async def generate(request: GenerateRequest) -> GenerateResponse:
    if request.github_data is None:
        raise InvalidInputError("GitHub data is required")

    github_data = request.github_data
    set_username(github_data.username)

    bullets = await generate_bullets(
        github_data,
        request.mode,
        session_id=get_request_id(),
    )

    return GenerateResponse(
        success=True,
        bullets=bullets,
        mode=request.mode,
        username=github_data.username,
        generated_at=datetime.now(timezone.utc),
    )
