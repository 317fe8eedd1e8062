"""
Script execution capability consumed by the bridge.

The bridge only needs ``execute(script) -> primitive``. Browser drivers expose
that under different names, so `coerce_executor()` adapts the common shapes:

- WebDriver style ``execute_script(...)``: the result of a script body is only
  returned when the body says ``return``, so the statement is prefixed.
- CDP session style ``eval_js(expression)``: expressions evaluate to their value.
- Anything already exposing ``execute(script)``, or a plain callable.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any, Protocol, runtime_checkable

from .errors import UnsupportedCapability


@runtime_checkable
class ScriptExecutor(Protocol):
    def execute(self, script: str) -> Any: ...


class WebDriverExecutor:
    def __init__(self, driver: Any) -> None:
        self.driver = driver

    def execute(self, script: str) -> Any:
        body = script if script.lstrip().startswith("return ") else f"return {script}"
        return self.driver.execute_script(body)

    def __eq__(self, other: object) -> bool:
        return isinstance(other, WebDriverExecutor) and other.driver is self.driver

    def __hash__(self) -> int:
        return hash((WebDriverExecutor, id(self.driver)))


class SessionExecutor:
    def __init__(self, session: Any) -> None:
        self.session = session

    def execute(self, script: str) -> Any:
        return self.session.eval_js(script)

    def __eq__(self, other: object) -> bool:
        return isinstance(other, SessionExecutor) and other.session is self.session

    def __hash__(self) -> int:
        return hash((SessionExecutor, id(self.session)))


class CallableExecutor:
    def __init__(self, fn: Callable[[str], Any]) -> None:
        self.fn = fn

    def execute(self, script: str) -> Any:
        return self.fn(script)

    def __eq__(self, other: object) -> bool:
        return isinstance(other, CallableExecutor) and other.fn is self.fn

    def __hash__(self) -> int:
        return hash((CallableExecutor, id(self.fn)))


def coerce_executor(obj: Any) -> ScriptExecutor:
    """Return a `ScriptExecutor` for `obj` or raise `UnsupportedCapability`."""
    if obj is None:
        raise UnsupportedCapability(obj, "no executor supplied")
    if callable(getattr(obj, "execute_script", None)):
        return WebDriverExecutor(obj)
    if callable(getattr(obj, "eval_js", None)):
        return SessionExecutor(obj)
    if callable(getattr(obj, "execute", None)):
        return obj
    if callable(obj):
        return CallableExecutor(obj)
    raise UnsupportedCapability(obj)


__all__ = [
    "CallableExecutor",
    "ScriptExecutor",
    "SessionExecutor",
    "WebDriverExecutor",
    "coerce_executor",
]
