"""
TTL 기반 인메모리 응답 캐시

- 만료 판정은 조회 시점에 수행하고 만료된 항목은 그 자리에서 제거
- 저장 시 sweep 주기(기본 TTL)가 지났으면 만료 항목을 일괄 정리
- 캐시 실패는 로깅 후 무시 - 캐시는 성능 최적화일 뿐 정합성 의존 대상이 아님
"""

import time
from dataclasses import dataclass
from typing import Any, Callable

from app.core.config import settings
from app.core.logging import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class CacheEntry:
    """캐시 항목 - payload와 생성 시각"""

    value: Any
    created_at: float


class TTLCache:
    """고정 TTL 키-값 캐시"""

    def __init__(
        self,
        ttl_seconds: float,
        clock: Callable[[], float] = time.monotonic,
        sweep_interval: float | None = None,
    ):
        self.ttl_seconds = ttl_seconds
        self.sweep_interval = ttl_seconds if sweep_interval is None else sweep_interval
        self._clock = clock
        self._entries: dict[str, CacheEntry] = {}
        self._last_sweep: float | None = None

    def get(self, key: str) -> Any | None:
        """캐시 조회, 없거나 만료되었으면 None"""
        try:
            entry = self._entries.get(key)
            if entry is None:
                return None

            if self._clock() - entry.created_at > self.ttl_seconds:
                self._entries.pop(key, None)
                logger.debug("캐시 만료", key=key)
                return None

            return entry.value
        except Exception as e:
            logger.warning("캐시 조회 실패", key=key, error=type(e).__name__)
            return None

    def set(self, key: str, value: Any) -> None:
        """캐시 저장, 기존 항목은 무조건 덮어씀"""
        try:
            now = self._clock()
            if self._last_sweep is None or now - self._last_sweep >= self.sweep_interval:
                self._purge_expired(now)
            self._entries[key] = CacheEntry(value=value, created_at=now)
        except Exception as e:
            logger.warning("캐시 저장 실패", key=key, error=type(e).__name__)

    def _purge_expired(self, now: float) -> None:
        expired = [
            key
            for key, entry in self._entries.items()
            if now - entry.created_at > self.ttl_seconds
        ]
        for key in expired:
            del self._entries[key]
        self._last_sweep = now
        if expired:
            logger.debug("만료 캐시 정리", removed=len(expired), remaining=len(self._entries))

    def clear(self) -> None:
        """전체 캐시 초기화 - 테스트용"""
        self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)


github_cache = TTLCache(ttl_seconds=settings.cache_ttl_seconds)


def github_cache_key(username: str) -> str:
    """GitHub 활동 요약 캐시 키"""
    return f"github:{username.lower()}"
