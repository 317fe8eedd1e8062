from __future__ import annotations

from typing import Any

import pytest

from page_bridge.config import BridgeConfig, build_bridge
from page_bridge.resolver import HOST_IDENTITY_SCRIPT, AddressingStrategy
from page_bridge.statement import QuotingPolicy

_ENV = [
    "PAGE_BRIDGE_OBJECT_ID",
    "PAGE_BRIDGE_SCOPE_KEY",
    "PAGE_BRIDGE_ROOT_PREFIX",
    "PAGE_BRIDGE_QUOTING",
    "PAGE_BRIDGE_CDP_HOST",
    "PAGE_BRIDGE_CDP_PORT",
    "PAGE_BRIDGE_TARGET_URL",
    "PAGE_BRIDGE_TIMEOUT",
    "PAGE_BRIDGE_TRACE",
]


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in _ENV:
        monkeypatch.delenv(name, raising=False)


def test_defaults() -> None:
    config = BridgeConfig.from_env()
    assert config.object_id == ""
    assert config.scope_key is None
    assert config.root_prefix is None
    assert config.quoting is QuotingPolicy.ESCAPE
    assert config.cdp_endpoint == "http://127.0.0.1:9222"
    assert config.timeout == 5.0
    assert config.trace is False


def test_from_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("PAGE_BRIDGE_OBJECT_ID", " panel1 ")
    monkeypatch.setenv("PAGE_BRIDGE_SCOPE_KEY", "app")
    monkeypatch.setenv("PAGE_BRIDGE_QUOTING", "legacy")
    monkeypatch.setenv("PAGE_BRIDGE_CDP_HOST", "10.0.0.5")
    monkeypatch.setenv("PAGE_BRIDGE_CDP_PORT", "9333")
    monkeypatch.setenv("PAGE_BRIDGE_TARGET_URL", "/silverlight/")
    monkeypatch.setenv("PAGE_BRIDGE_TIMEOUT", "2.5")
    monkeypatch.setenv("PAGE_BRIDGE_TRACE", "yes")
    config = BridgeConfig.from_env()
    assert config.object_id == "panel1"
    assert config.scope_key == "app"
    assert config.quoting is QuotingPolicy.VERBATIM
    assert config.cdp_endpoint == "http://10.0.0.5:9333"
    assert config.target_url == "/silverlight/"
    assert config.timeout == 2.5
    assert config.trace is True


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        (None, QuotingPolicy.ESCAPE),
        ("", QuotingPolicy.ESCAPE),
        ("ESCAPE", QuotingPolicy.ESCAPE),
        ("something", QuotingPolicy.ESCAPE),
        ("verbatim", QuotingPolicy.VERBATIM),
        ("raw", QuotingPolicy.VERBATIM),
        (" off ", QuotingPolicy.VERBATIM),
    ],
)
def test_normalize_quoting(raw: str | None, expected: QuotingPolicy) -> None:
    assert BridgeConfig.normalize_quoting(raw) is expected


class DummyPage:
    def __init__(self) -> None:
        self.scripts: list[str] = []

    def execute(self, script: str) -> Any:
        self.scripts.append(script)
        return "Mozilla/4.0 (compatible; MSIE 8.0)"


def test_build_bridge_detects_host() -> None:
    page = DummyPage()
    bridge = build_bridge(page, BridgeConfig(object_id="panel1", scope_key="k"))
    assert page.scripts == [HOST_IDENTITY_SCRIPT]
    assert bridge.strategy is AddressingStrategy.VIA_GLOBAL_DOCUMENT
    assert bridge.scope_key == "k"


def test_build_bridge_with_root_override() -> None:
    page = DummyPage()
    bridge = build_bridge(page, BridgeConfig(object_id="panel1", root_prefix="top.frames[0].document['panel1']."))
    assert page.scripts == []
    assert bridge.root == "top.frames[0].document['panel1']."


def test_build_bridge_requires_object_id() -> None:
    with pytest.raises(ValueError, match="object id"):
        build_bridge(DummyPage(), BridgeConfig())
