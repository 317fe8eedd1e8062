"""
Chrome DevTools Protocol transport for the script bridge.

- CdpConnection: low-level CDP WebSocket connection (websocket-client)
- CdpScriptExecutor: `Runtime.evaluate` as a bridge script executor
- list_targets / find_page_target / open_page_executor: attach to a page
  exposed on the remote debugging port
"""

from __future__ import annotations

import json
import logging
import time
from contextlib import suppress
from typing import Any
from urllib.error import URLError
from urllib.request import Request, urlopen

import websocket

from .config import BridgeConfig

logger = logging.getLogger("page_bridge.cdp")


class HttpClientError(Exception):
    pass


def _http_get_json(url: str, timeout: float = 2.0) -> Any:
    """Fetch JSON from URL."""
    req = Request(url, headers={"User-Agent": "page-bridge/1.0"})
    try:
        with urlopen(req, timeout=timeout) as resp:
            return json.loads(resp.read().decode())
    except (URLError, TimeoutError) as exc:
        raise HttpClientError(str(exc)) from exc


class CdpConnection:
    """Low-level CDP WebSocket connection."""

    def __init__(self, ws_url: str, timeout: float = 5.0, *, ws: Any = None):
        if ws is None:
            try:
                ws = websocket.create_connection(ws_url, timeout=timeout)
            except (OSError, websocket.WebSocketException) as exc:
                raise HttpClientError(f"Cannot connect to {ws_url}: {exc}") from exc
        self.ws = ws
        self.ws_url = ws_url
        self.timeout = timeout
        self._next_id = 1

    def send(self, method: str, params: dict[str, Any] | None = None) -> dict[str, Any]:
        """Send CDP command and wait for response."""
        msg_id = self._next_id
        self._next_id += 1

        msg: dict[str, Any] = {"id": msg_id, "method": method}
        if params:
            msg["params"] = params

        try:
            self.ws.send(json.dumps(msg))
        except Exception as exc:  # noqa: BLE001
            raise HttpClientError(str(exc)) from exc
        return self._recv_until(msg_id)

    def _recv_until(self, expected_id: int) -> dict[str, Any]:
        """Wait for response with specific ID."""
        deadline = time.time() + self.timeout
        while True:
            remaining = deadline - time.time()
            if remaining <= 0:
                raise HttpClientError("CDP response timed out")

            # Small socket timeout so the overall deadline is enforced here.
            try:
                self.ws.settimeout(min(0.5, remaining))
                raw = self.ws.recv()
            except Exception as exc:  # noqa: BLE001
                msg = str(exc).lower()
                if isinstance(exc, (TimeoutError, websocket.WebSocketTimeoutException)) or "timed out" in msg:
                    continue
                raise HttpClientError(str(exc)) from exc

            try:
                data = json.loads(raw)
            except json.JSONDecodeError:
                continue
            if not isinstance(data, dict):
                continue

            if data.get("id") == expected_id:
                if "error" in data:
                    raise HttpClientError(str(data["error"]))
                return data.get("result", {})

    def close(self) -> None:
        """Close the WebSocket connection."""
        with suppress(Exception):
            self.ws.close()


def _exception_message(details: dict[str, Any]) -> str:
    exc = details.get("exception")
    if isinstance(exc, dict):
        desc = exc.get("description") or exc.get("value")
        if desc:
            return str(desc).splitlines()[0]
    return str(details.get("text") or "Script threw an exception")


class CdpScriptExecutor:
    """Evaluate bridge statements in a page via `Runtime.evaluate`."""

    def __init__(self, conn: CdpConnection) -> None:
        self.conn = conn
        self._runtime_enabled = False

    def __enter__(self) -> CdpScriptExecutor:
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()

    def close(self) -> None:
        self.conn.close()

    def enable_runtime(self) -> None:
        if not self._runtime_enabled:
            self.conn.send("Runtime.enable")
            self._runtime_enabled = True

    def execute(self, script: str) -> Any:
        self.enable_runtime()
        result = self.conn.send(
            "Runtime.evaluate",
            {
                "expression": script,
                "returnByValue": True,
                "awaitPromise": True,
            },
        )
        details = result.get("exceptionDetails")
        if isinstance(details, dict):
            raise HttpClientError(_exception_message(details))

        value = result.get("result")
        if not isinstance(value, dict):
            return None
        # undefined has no "value" field; null is an object with subtype null.
        if value.get("type") == "undefined":
            return None
        if value.get("type") == "object" and value.get("subtype") == "null":
            return None
        # NaN, Infinity, -0 and bigints come back unserialized, without "value".
        if "unserializableValue" in value:
            return value["unserializableValue"]
        return value.get("value")


# ─────────────────────────────────────────────────────────────────────────────
# Target discovery
# ─────────────────────────────────────────────────────────────────────────────


def list_targets(config: BridgeConfig) -> list[dict[str, Any]]:
    targets = _http_get_json(f"{config.cdp_endpoint}/json/list", timeout=config.timeout)
    return targets if isinstance(targets, list) else []


def find_page_target(config: BridgeConfig) -> dict[str, Any]:
    """First page target, optionally the first whose URL contains `config.target_url`."""
    for target in list_targets(config):
        if not isinstance(target, dict) or target.get("type") != "page":
            continue
        if not target.get("webSocketDebuggerUrl"):
            continue
        if config.target_url and config.target_url not in str(target.get("url") or ""):
            continue
        return target
    wanted = f" matching {config.target_url!r}" if config.target_url else ""
    raise HttpClientError(f"No page target{wanted} on {config.cdp_endpoint}")


def open_page_executor(config: BridgeConfig) -> CdpScriptExecutor:
    target = find_page_target(config)
    logger.info("Attaching to %s (%s)", target.get("url"), target.get("id"))
    conn = CdpConnection(str(target["webSocketDebuggerUrl"]), timeout=config.timeout)
    return CdpScriptExecutor(conn)


__all__ = [
    "CdpConnection",
    "CdpScriptExecutor",
    "HttpClientError",
    "find_page_target",
    "list_targets",
    "open_page_executor",
]
