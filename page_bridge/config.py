from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Any

from .bridge import ScriptBridge
from .statement import QuotingPolicy


def _env_flag(raw: str | None) -> bool:
    return (raw or "").strip().lower() in {"1", "true", "yes", "on"}


@dataclass
class BridgeConfig:
    object_id: str = ""
    scope_key: str | None = None
    root_prefix: str | None = None
    quoting: QuotingPolicy = QuotingPolicy.ESCAPE
    cdp_host: str = "127.0.0.1"
    cdp_port: int = 9222
    target_url: str | None = None
    timeout: float = 5.0
    trace: bool = False

    @staticmethod
    def normalize_quoting(raw: str | None) -> QuotingPolicy:
        mode = (raw or "").strip().lower()
        if mode in {"verbatim", "raw", "legacy", "none", "off"}:
            return QuotingPolicy.VERBATIM
        return QuotingPolicy.ESCAPE

    @classmethod
    def from_env(cls) -> BridgeConfig:
        port = int(os.environ.get("PAGE_BRIDGE_CDP_PORT", "9222"))
        timeout = float(os.environ.get("PAGE_BRIDGE_TIMEOUT", "5"))
        return cls(
            object_id=os.environ.get("PAGE_BRIDGE_OBJECT_ID", "").strip(),
            scope_key=os.environ.get("PAGE_BRIDGE_SCOPE_KEY", "").strip() or None,
            root_prefix=os.environ.get("PAGE_BRIDGE_ROOT_PREFIX", "").strip() or None,
            quoting=cls.normalize_quoting(os.environ.get("PAGE_BRIDGE_QUOTING")),
            cdp_host=os.environ.get("PAGE_BRIDGE_CDP_HOST", "127.0.0.1").strip() or "127.0.0.1",
            cdp_port=port,
            target_url=os.environ.get("PAGE_BRIDGE_TARGET_URL", "").strip() or None,
            timeout=timeout,
            trace=_env_flag(os.environ.get("PAGE_BRIDGE_TRACE")),
        )

    @property
    def cdp_endpoint(self) -> str:
        return f"http://{self.cdp_host}:{self.cdp_port}"


def build_bridge(executor: Any, config: BridgeConfig) -> ScriptBridge:
    """Construct a `ScriptBridge` from config; an explicit root prefix skips host detection."""
    if config.root_prefix:
        return ScriptBridge.with_root(
            executor,
            config.root_prefix,
            config.scope_key,
            object_id=config.object_id,
            quoting=config.quoting,
        )
    if not config.object_id:
        raise ValueError("An object id is required (set PAGE_BRIDGE_OBJECT_ID or pass --object-id)")
    return ScriptBridge(executor, config.object_id, config.scope_key, quoting=config.quoting)
