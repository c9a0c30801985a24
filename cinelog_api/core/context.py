from contextvars import ContextVar
from typing import Optional

_trace_id: ContextVar[str] = ContextVar("trace_id", default="-")
_caller_id: ContextVar[Optional[int]] = ContextVar("caller_id", default=None)


def get_trace_id() -> str:
    return _trace_id.get()


def set_trace_id(value: str) -> None:
    _trace_id.set(value)


def get_caller_id() -> Optional[int]:
    return _caller_id.get()


def set_caller_id(value: Optional[int]) -> None:
    _caller_id.set(value)
