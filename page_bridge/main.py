"""
Command line entry point for the script bridge.

Examples:
    page-bridge --object-id panel1 get isLoaded
    page-bridge --object-id panel1 call findName Button1 --namespace content
    page-bridge --object-id panel1 --scope-key app set title hello
    page-bridge --object-id panel1 --dry-run --host-identity "MSIE 8.0" get isLoaded

Without --dry-run the bridge attaches to the first page on the Chrome remote
debugging port (PAGE_BRIDGE_CDP_HOST / PAGE_BRIDGE_CDP_PORT).
"""

from __future__ import annotations

import argparse
import logging
import sys
from collections.abc import Sequence
from dataclasses import replace
from typing import Any

from .bridge import ScriptBridge
from .cdp import HttpClientError, open_page_executor
from .config import BridgeConfig, build_bridge
from .decode import as_text
from .errors import BridgeError
from .resolver import resolve, root_path
from .statement import Namespace, ScriptStatement, StatementBuilder

logger = logging.getLogger("page_bridge")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="page-bridge", description="Drive an object embedded in a web page")
    parser.add_argument("--object-id", help="Id of the embedded object (default: PAGE_BRIDGE_OBJECT_ID)")
    parser.add_argument("--scope-key", help="Scope key under the content namespace")
    parser.add_argument("--root", help="Explicit root prefix, skips host detection")
    parser.add_argument("--quoting", choices=["escape", "verbatim"], help="Argument quoting policy")
    parser.add_argument("--dry-run", action="store_true", help="Print the rendered statement without executing it")
    parser.add_argument("--host-identity", default="", help="Host identity used to pick the root in --dry-run")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log every statement")

    sub = parser.add_subparsers(dest="command", required=True)

    def _member_args(p: argparse.ArgumentParser, default_ns: str = "direct") -> None:
        p.add_argument("name", help="Member name")
        p.add_argument("--namespace", "-n", default=default_ns, choices=["direct", "content", "settings"])
        p.add_argument("--scoped", action="store_true", help="Insert the scope key after content.")

    call = sub.add_parser("call", help="Call a method")
    _member_args(call)
    call.add_argument("args", nargs="*", help="Method arguments (passed as strings)")

    get = sub.add_parser("get", help="Read a property")
    _member_args(get)

    put = sub.add_parser("set", help="Write a scoped content property")
    put.add_argument("name", help="Member name")
    put.add_argument("value", help="Value to assign")

    sub.add_parser("probe", help="Show how the embedded object is addressed")
    return parser


def _config_from_args(args: argparse.Namespace) -> BridgeConfig:
    config = BridgeConfig.from_env()
    overrides: dict[str, Any] = {}
    if args.object_id:
        overrides["object_id"] = args.object_id
    if args.scope_key:
        overrides["scope_key"] = args.scope_key
    if args.root:
        overrides["root_prefix"] = args.root
    if args.quoting:
        overrides["quoting"] = BridgeConfig.normalize_quoting(args.quoting)
    if args.verbose:
        overrides["trace"] = True
    return replace(config, **overrides)


def _statement(builder: StatementBuilder, args: argparse.Namespace) -> ScriptStatement:
    if args.command == "set":
        return builder.set(Namespace.CONTENT, args.name, args.value, scoped=True)
    namespace = Namespace.parse(args.namespace)
    if args.command == "call":
        return builder.call(namespace, args.name, args.args, scoped=args.scoped)
    return builder.get(namespace, args.name, scoped=args.scoped)


def _dry_run(args: argparse.Namespace, config: BridgeConfig) -> str:
    root = config.root_prefix
    if not root:
        if not config.object_id:
            raise ValueError("An object id is required (set PAGE_BRIDGE_OBJECT_ID or pass --object-id)")
        root = root_path(config.object_id, resolve(args.host_identity), config.quoting)
    if args.command == "probe":
        return root
    builder = StatementBuilder(root, config.scope_key, config.quoting)
    return _statement(builder, args).render()


def _execute(bridge: ScriptBridge, args: argparse.Namespace) -> str | None:
    if args.command == "probe":
        strategy = bridge.strategy.prefix if bridge.strategy is not None else "explicit root"
        return f"{bridge.root} ({strategy})"
    statement = _statement(bridge.statements, args)
    raw = bridge.execute(statement, expect_result=args.command != "set")
    return None if raw is None else as_text(raw, str(statement))


def main(argv: Sequence[str] | None = None) -> int:
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(levelname)s %(message)s",
    )
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        config = _config_from_args(args)
        if config.trace:
            logger.setLevel(logging.DEBUG)
        if args.dry_run:
            output: str | None = _dry_run(args, config)
        else:
            with open_page_executor(config) as executor:
                bridge = build_bridge(executor, config)
                output = _execute(bridge, args)
    except (BridgeError, HttpClientError, ValueError) as exc:
        print(f"page-bridge: {exc}", file=sys.stderr)
        return 1

    if output is not None:
        print(output)
    return 0


if __name__ == "__main__":
    sys.exit(main())
