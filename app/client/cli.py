"""click CLI 엔트리포인트.

resumegit USERNAME 명령으로 GitHub 활동 기반 이력서 불릿을 생성합니다.
"""

from __future__ import annotations

import asyncio
import json
import sys

import click

from app.client.api import ResumeGitApi
from app.client.cache import FileCache, bullets_key
from app.client.config import client_settings
from app.client.session import lookup, regenerate
from app.client.state import AppState, bullet_text, edit_bullet, format_bullets
from app.core.logging import setup_logging
from app.domain.bullets.prompts import MODE_LABELS
from app.domain.bullets.schemas import GENERATE_MODES

CONFIDENCE_LABELS = {
    "high": "High confidence",
    "medium": "Medium confidence",
    "low": "Low confidence - verify this",
}


async def _run(
    username: str,
    mode: str,
    api_url: str,
    cache: FileCache | None,
    fresh: bool = False,
) -> AppState:
    """조회 실행, fresh면 캐시된 불릿 대신 새로 생성

    캐시 미스였다면 lookup이 이미 새로 생성했으므로 재생성하지 않는다.
    """
    had_cached_bullets = (
        fresh
        and cache is not None
        and cache.get(bullets_key(username.strip(), mode)) is not None
    )
    state = AppState(mode=mode)
    async with ResumeGitApi(api_url, timeout=client_settings.timeout) as api:
        state = await lookup(state, username, api, cache)
        if had_cached_bullets and state.status == "success":
            state = await regenerate(state, mode, api, cache)
        return state


def _parse_edits(ctx, param, values: tuple[str, ...]) -> dict[str, str]:
    edits = {}
    for value in values:
        bullet_id, sep, text = value.partition("=")
        if not sep or not bullet_id.strip() or not text.strip():
            raise click.BadParameter(f"ID=TEXT 형식이어야 합니다: {value!r}")
        edits[bullet_id.strip()] = text.strip()
    return edits


def _apply_edits(state: AppState, edits: dict[str, str]) -> AppState:
    known_ids = {bullet.id for bullet in state.bullets}
    for bullet_id, text in edits.items():
        if bullet_id not in known_ids:
            click.echo(
                click.style(f"알 수 없는 불릿 id, 편집 무시: {bullet_id}", fg="yellow"), err=True
            )
            continue
        state = edit_bullet(state, bullet_id, text)
    return state


def _render(state: AppState) -> None:
    data = state.github_data
    if data is not None:
        profile = data.profile
        click.echo(click.style(f"{profile.name or data.username} (@{data.username})", bold=True))
        click.echo(
            f"  커밋 {data.total_commits}개 · 레포 {len(data.repos)}개 · "
            f"언어 {', '.join(data.top_languages) or '-'}"
        )
        if data.tech_stack:
            click.echo(f"  기술 스택: {', '.join(data.tech_stack)}")
        click.echo("")

    click.echo(click.style(f"[{MODE_LABELS[state.mode]}]", fg="cyan"))
    for bullet in state.bullets:
        click.echo(f"• {bullet_text(state, bullet)}")
        meta = f"  {bullet.category} · {CONFIDENCE_LABELS[bullet.confidence]}"
        if bullet.tech:
            meta += f" · {', '.join(bullet.tech)}"
        click.echo(click.style(meta, dim=True))


@click.command()
@click.version_option(version="1.0.0", prog_name="resumegit")
@click.argument("username", required=False)
@click.option(
    "--mode",
    type=click.Choice(GENERATE_MODES),
    default="standard",
    show_default=True,
    help="생성 모드",
)
@click.option("--api-url", default=None, help="ResumeGit 서버 API 주소")
@click.option("--no-cache", is_flag=True, default=False, help="로컬 캐시 사용 안 함")
@click.option("--clear-cache", is_flag=True, default=False, help="로컬 캐시 삭제")
@click.option(
    "--regenerate",
    "fresh",
    is_flag=True,
    default=False,
    help="캐시된 불릿을 무시하고 새로 생성 (실패 시 기존 불릿 유지)",
)
@click.option(
    "--edit",
    "edits",
    multiple=True,
    metavar="ID=TEXT",
    callback=_parse_edits,
    help="출력 전에 불릿 텍스트 교체 (여러 번 지정 가능)",
)
@click.option("--json", "as_json", is_flag=True, default=False, help="결과를 JSON으로 출력")
@click.option("--plain", is_flag=True, default=False, help="복사용 불릿 텍스트만 출력")
def main(
    username: str | None,
    mode: str,
    api_url: str | None,
    no_cache: bool,
    clear_cache: bool,
    fresh: bool,
    edits: dict[str, str],
    as_json: bool,
    plain: bool,
) -> None:
    """GitHub 사용자의 최근 커밋 활동으로 이력서 불릿을 생성합니다."""
    setup_logging("WARNING", stream=sys.stderr)

    cache = FileCache(client_settings.cache_dir, client_settings.cache_ttl_seconds)

    if clear_cache:
        removed = cache.clear_all()
        click.echo(f"캐시 {removed}개 삭제")
        if not username:
            return

    if not username:
        raise click.UsageError("USERNAME이 필요합니다")

    state = asyncio.run(
        _run(
            username,
            mode,
            api_url or client_settings.api_url,
            None if no_cache else cache,
            fresh=fresh,
        )
    )

    if state.error is not None:
        click.echo(click.style(f"{state.error.title}: {state.error.message}", fg="red"), err=True)
        sys.exit(1)

    state = _apply_edits(state, edits)

    if as_json:
        payload = {
            "username": state.username,
            "mode": state.mode,
            "bullets": [
                {**bullet.model_dump(), "text": bullet_text(state, bullet)}
                for bullet in state.bullets
            ],
        }
        click.echo(json.dumps(payload, indent=2, ensure_ascii=False))
    elif plain:
        click.echo(format_bullets(state))
    else:
        _render(state)


if __name__ == "__main__":
    main()
