"""
Script bridge to an object embedded in a rendered page.

The page can only be reached by submitting a script statement and reading a
single primitive back. `ScriptBridge` resolves how the object is addressed
once (one round-trip for the host identity), then renders every accessor
through one `StatementBuilder`:

    bridge = ScriptBridge(session, "panel1", scope_key="app")
    bridge.get_direct_property("isLoaded")        # document['panel1'].isLoaded;
    bridge.call_content_method("findName", "b1")  # document['panel1'].content.findName('b1');
    bridge.set_scoped_content_property("x", "1")  # document['panel1'].content.app.x='1';

A bridge is used by one caller at a time; strategy and root path never change
after construction.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Any, TypeVar

from .decode import as_text, decode_bool, decode_enum, decode_int
from .errors import BridgeError, ExecutionFailure, ScriptResultMissing
from .executor import ScriptExecutor, coerce_executor
from .resolver import HOST_IDENTITY_SCRIPT, AddressingStrategy, resolve, root_path
from .statement import Namespace, QuotingPolicy, ScriptStatement, StatementBuilder

logger = logging.getLogger("page_bridge.bridge")

E = TypeVar("E", bound=Enum)


class ScriptBridge:
    def __init__(
        self,
        executor: Any,
        object_id: str,
        scope_key: str | None = None,
        *,
        quoting: QuotingPolicy = QuotingPolicy.ESCAPE,
        root: str | None = None,
    ) -> None:
        self._executor: ScriptExecutor = coerce_executor(executor)
        self.object_id = object_id
        self.scope_key = scope_key or None
        self.quoting = quoting

        strategy: AddressingStrategy | None = None
        if root is None:
            identity = as_text(self._run(HOST_IDENTITY_SCRIPT), HOST_IDENTITY_SCRIPT)
            strategy = resolve(identity)
            root = root_path(object_id, strategy, quoting)
            logger.info("Embedded object %r addressed via %s", object_id, strategy.prefix)

        self._strategy = strategy
        self._root = root
        self._builder = StatementBuilder(root, self.scope_key, quoting)

    @classmethod
    def with_root(
        cls,
        executor: Any,
        root: str,
        scope_key: str | None = None,
        *,
        object_id: str = "",
        quoting: QuotingPolicy = QuotingPolicy.ESCAPE,
    ) -> ScriptBridge:
        """Build a bridge on an explicit root prefix; no host identity round-trip."""
        return cls(executor, object_id, scope_key, quoting=quoting, root=root)

    @classmethod
    def via_document(
        cls,
        executor: Any,
        object_id: str,
        scope_key: str | None = None,
        *,
        quoting: QuotingPolicy = QuotingPolicy.ESCAPE,
    ) -> ScriptBridge:
        root = root_path(object_id, AddressingStrategy.VIA_DOCUMENT, quoting)
        return cls(executor, object_id, scope_key, quoting=quoting, root=root)

    @classmethod
    def via_global_document(
        cls,
        executor: Any,
        object_id: str,
        scope_key: str | None = None,
        *,
        quoting: QuotingPolicy = QuotingPolicy.ESCAPE,
    ) -> ScriptBridge:
        root = root_path(object_id, AddressingStrategy.VIA_GLOBAL_DOCUMENT, quoting)
        return cls(executor, object_id, scope_key, quoting=quoting, root=root)

    # ─────────────────────────────────────────────────────────────────────────
    # State
    # ─────────────────────────────────────────────────────────────────────────

    @property
    def root(self) -> str:
        return self._root

    @property
    def strategy(self) -> AddressingStrategy | None:
        """Resolved strategy; None when the bridge was built on an explicit root."""
        return self._strategy

    @property
    def executor(self) -> ScriptExecutor:
        return self._executor

    @property
    def statements(self) -> StatementBuilder:
        return self._builder

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ScriptBridge):
            return NotImplemented
        return self._executor == other._executor and self._root == other._root

    def __hash__(self) -> int:
        return hash(self._root)

    def __repr__(self) -> str:
        return f"ScriptBridge(root={self._root!r}, scope_key={self.scope_key!r})"

    # ─────────────────────────────────────────────────────────────────────────
    # Execution
    # ─────────────────────────────────────────────────────────────────────────

    def _run(self, statement: str | ScriptStatement, *, expect_result: bool = True) -> Any:
        text = str(statement)
        logger.debug("execute %s", text)
        try:
            raw = self._executor.execute(text)
        except BridgeError:
            raise
        except Exception as exc:  # noqa: BLE001
            raise ExecutionFailure(text, str(exc) or type(exc).__name__) from exc
        if raw is None and expect_result:
            raise ScriptResultMissing(text)
        return raw

    def execute(self, statement: ScriptStatement, *, expect_result: bool = True) -> Any:
        """Submit a pre-built statement and return the raw primitive."""
        return self._run(statement, expect_result=expect_result)

    # Generic accessors; the named ones below delegate here.

    def call(self, namespace: Namespace, name: str, *args: object, scoped: bool = False) -> str:
        statement = self._builder.call(namespace, name, args, scoped=scoped)
        return as_text(self._run(statement), str(statement))

    def get(self, namespace: Namespace, name: str, *, scoped: bool = False) -> str:
        statement = self._builder.get(namespace, name, scoped=scoped)
        return as_text(self._run(statement), str(statement))

    def set(self, namespace: Namespace, name: str, value: object, *, scoped: bool = True) -> str | None:
        statement = self._builder.set(namespace, name, value, scoped=scoped)
        raw = self._run(statement, expect_result=False)
        return None if raw is None else as_text(raw, str(statement))

    # ─────────────────────────────────────────────────────────────────────────
    # Raw accessors
    # ─────────────────────────────────────────────────────────────────────────

    def call_direct_method(self, name: str, *args: object) -> str:
        return self.call(Namespace.DIRECT, name, *args)

    def call_content_method(self, name: str, *args: object) -> str:
        return self.call(Namespace.CONTENT, name, *args)

    def call_scoped_content_method(self, name: str, *args: object) -> str:
        return self.call(Namespace.CONTENT, name, *args, scoped=True)

    def get_direct_property(self, name: str) -> str:
        return self.get(Namespace.DIRECT, name)

    def get_content_property(self, name: str) -> str:
        return self.get(Namespace.CONTENT, name)

    def get_settings_property(self, name: str) -> str:
        return self.get(Namespace.SETTINGS, name)

    def get_scoped_content_property(self, name: str) -> str:
        return self.get(Namespace.CONTENT, name, scoped=True)

    def set_scoped_content_property(self, name: str, value: object) -> str | None:
        return self.set(Namespace.CONTENT, name, value, scoped=True)

    # ─────────────────────────────────────────────────────────────────────────
    # Typed accessors
    # ─────────────────────────────────────────────────────────────────────────

    def get_bool(self, namespace: Namespace, name: str, *, scoped: bool = False) -> bool:
        statement = self._builder.get(namespace, name, scoped=scoped)
        return decode_bool(self._run(statement), str(statement))

    def get_int(self, namespace: Namespace, name: str, *, scoped: bool = False) -> int:
        statement = self._builder.get(namespace, name, scoped=scoped)
        return decode_int(self._run(statement), str(statement))

    def get_enum(self, namespace: Namespace, name: str, enum_cls: type[E], *, scoped: bool = False) -> E:
        statement = self._builder.get(namespace, name, scoped=scoped)
        return decode_enum(self._run(statement), enum_cls, str(statement))

    def call_bool(self, namespace: Namespace, name: str, *args: object, scoped: bool = False) -> bool:
        statement = self._builder.call(namespace, name, args, scoped=scoped)
        return decode_bool(self._run(statement), str(statement))


__all__ = ["ScriptBridge"]
