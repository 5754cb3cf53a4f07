"""
요청 단위 로그 컨텍스트

request_id와 조회 대상 username을 하나의 불변 레코드로 묶어 ContextVar에 보관한다.
값을 바꿀 때는 새 레코드로 교체하므로 동시 요청끼리 섞이지 않는다.
"""

import uuid
from contextvars import ContextVar
from dataclasses import dataclass, replace


@dataclass(frozen=True)
class RequestContext:
    request_id: str | None = None
    username: str | None = None


_EMPTY = RequestContext()
_request_context: ContextVar[RequestContext] = ContextVar("request_context", default=_EMPTY)


def new_request_id() -> str:
    """8자리 request_id 생성"""
    return uuid.uuid4().hex[:8]


def get_request_id() -> str | None:
    return _request_context.get().request_id


def set_request_id(request_id: str | None = None) -> str:
    """request_id 설정, 없으면 새로 생성해서 반환"""
    request_id = request_id or new_request_id()
    _request_context.set(replace(_request_context.get(), request_id=request_id))
    return request_id


def get_username() -> str | None:
    return _request_context.get().username


def set_username(username: str | None) -> None:
    """조회 대상 GitHub username 설정"""
    _request_context.set(replace(_request_context.get(), username=username))


def clear_context() -> None:
    _request_context.set(_EMPTY)
