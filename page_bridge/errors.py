"""
Error taxonomy for the script bridge.

Provides:
- BridgeError: common base for everything raised by the bridge
- UnsupportedCapability: the executor cannot run scripts at all
- ExecutionFailure: the page script engine rejected or threw on a statement
- ScriptResultMissing: a statement produced no value where one was expected
- DecodeFailure: a typed accessor could not parse the returned primitive
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


class BridgeError(Exception):
    pass


class UnsupportedCapability(BridgeError):
    """Raised at construction when the executor cannot execute scripts."""

    def __init__(self, executor: Any, reason: str = "") -> None:
        self.executor = executor
        detail = reason or "object exposes no script execution entry point"
        super().__init__(f"{type(executor).__name__} does not support script execution: {detail}")


class ExecutionFailure(BridgeError):
    """The host script engine failed while running a rendered statement."""

    def __init__(self, statement: str, message: str) -> None:
        self.statement = statement
        super().__init__(f"{message} (statement: {statement})")


class ScriptResultMissing(BridgeError):
    def __init__(self, statement: str) -> None:
        self.statement = statement
        super().__init__(f"Script returned no value (statement: {statement})")


@dataclass(eq=False)
class DecodeFailure(BridgeError, ValueError):
    """Structured decode error; keeps the raw value for diagnostics."""

    raw: Any
    target: str
    statement: str = ""
    kind: str = "malformed-primitive"

    def __post_init__(self) -> None:
        super().__init__(str(self))

    def __str__(self) -> str:
        where = f" (statement: {self.statement})" if self.statement else ""
        return f"Cannot decode {self.raw!r} as {self.target}: {self.kind}{where}"

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": True,
            "kind": self.kind,
            "target": self.target,
            "raw": self.raw,
            "statement": self.statement,
        }


__all__ = [
    "BridgeError",
    "DecodeFailure",
    "ExecutionFailure",
    "ScriptResultMissing",
    "UnsupportedCapability",
]
