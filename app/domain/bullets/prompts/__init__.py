from app.domain.bullets.prompts.generation import (
    BULLET_GENERATOR_HUMAN,
    BULLET_GENERATOR_SYSTEM,
)
from app.domain.bullets.prompts.modes import (
    MODE_INSTRUCTIONS,
    MODE_LABELS,
    get_mode_instructions,
)

__all__ = [
    "BULLET_GENERATOR_SYSTEM",
    "BULLET_GENERATOR_HUMAN",
    "MODE_INSTRUCTIONS",
    "MODE_LABELS",
    "get_mode_instructions",
]
