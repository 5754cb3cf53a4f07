"""
파일 기반 클라이언트 캐시

- 항목 하나당 JSON 파일 하나: {"key", "timestamp", "data"}
- 조회 시 TTL이 지난 항목은 파일을 삭제하고 없는 것으로 처리
- 읽기/쓰기 실패는 모두 무시 - 캐시가 없어도 동작에는 지장이 없음
"""

import hashlib
import json
import time
from pathlib import Path
from typing import Any, Callable

from app.core.logging import get_logger

logger = get_logger(__name__)

CACHE_PREFIX = "resumegit"


def github_key(username: str) -> str:
    """활동 요약 캐시 키"""
    return f"github:{username.lower()}"


def bullets_key(username: str, mode: str) -> str:
    """생성 결과 캐시 키 - username + mode"""
    return f"bullets:{username.lower()}:{mode}"


class FileCache:
    """TTL 기반 파일 캐시"""

    def __init__(
        self,
        cache_dir: str | Path,
        ttl_seconds: float,
        clock: Callable[[], float] = time.time,
    ):
        self.cache_dir = Path(cache_dir)
        self.ttl_seconds = ttl_seconds
        self._clock = clock

    def _path(self, key: str) -> Path:
        digest = hashlib.sha256(key.encode("utf-8")).hexdigest()
        return self.cache_dir / f"{CACHE_PREFIX}_{digest}.json"

    def get(self, key: str) -> Any | None:
        """캐시 조회, 없거나 만료/손상되었으면 None"""
        path = self._path(key)
        try:
            if not path.is_file():
                return None
            entry = json.loads(path.read_text(encoding="utf-8"))
            if not isinstance(entry, dict) or entry.get("key") != key:
                return None

            if self._clock() - float(entry["timestamp"]) > self.ttl_seconds:
                path.unlink(missing_ok=True)
                logger.debug("캐시 만료", key=key)
                return None

            return entry.get("data")
        except (OSError, ValueError, KeyError, TypeError) as e:
            logger.debug("캐시 조회 실패", key=key, error=type(e).__name__)
            return None

    def set(self, key: str, data: Any) -> None:
        """캐시 저장, 실패 시 무시"""
        entry = {"key": key, "timestamp": self._clock(), "data": data}
        try:
            self.cache_dir.mkdir(parents=True, exist_ok=True)
            self._path(key).write_text(json.dumps(entry, ensure_ascii=False), encoding="utf-8")
        except (OSError, TypeError, ValueError) as e:
            logger.warning("캐시 저장 실패", key=key, error=type(e).__name__)

    def clear_all(self) -> int:
        """모든 캐시 파일 삭제 후 삭제 개수 반환"""
        removed = 0
        try:
            for path in self.cache_dir.glob(f"{CACHE_PREFIX}_*.json"):
                path.unlink(missing_ok=True)
                removed += 1
        except OSError as e:
            logger.warning("캐시 삭제 실패", error=type(e).__name__)
        return removed
