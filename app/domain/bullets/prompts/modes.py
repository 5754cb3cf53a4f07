"""생성 모드별 프롬프트 지시문"""

MODE_INSTRUCTIONS: dict[str, str] = {
    "standard": """MODE: Standard
Focus on: Balanced mix of technical depth and business impact. Professional tone suitable for mid-level engineering roles.""",
    "technical": """MODE: Technical Lead
Focus on: Architecture decisions, code review leadership, technical mentoring, system design, performance optimization, scalability considerations, and technical debt reduction.""",
    "impact": """MODE: Impact-Focused
Focus on: Business metrics, user impact, team productivity improvements, cost savings, performance improvements with specific percentages, launch milestones, and customer-facing improvements.""",
    "entry": """MODE: Entry Level
Focus on: Learning agility, collaboration with team members, exposure to modern tech stacks, project contributions, code quality practices, and proactive communication.""",
}

MODE_LABELS: dict[str, str] = {
    "standard": "Standard",
    "technical": "Technical Lead",
    "impact": "Impact-Focused",
    "entry": "Entry Level",
}


def get_mode_instructions(mode: str) -> str:
    """모드 지시문 반환, 알 수 없는 모드는 standard로 처리"""
    return MODE_INSTRUCTIONS.get(mode, MODE_INSTRUCTIONS["standard"])
