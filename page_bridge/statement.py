"""
Script statement rendering for the embedded object.

Every accessor of the bridge ends up here: a statement is the root path of
the embedded object, an optional namespace segment, a member, and one of
``(args)`` / nothing / ``=value`` followed by a single ``;``.

Quoting of argument values is centralized in `quote()` so that the three
namespaces share one encoder. `parse_statement()` is the inverse used by
diagnostics and tests.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from enum import Enum


class StatementSyntaxError(ValueError):
    pass


class Namespace(str, Enum):
    DIRECT = "direct"
    CONTENT = "content"
    SETTINGS = "settings"

    @property
    def segment(self) -> str:
        if self is Namespace.DIRECT:
            return ""
        return f"{self.value}."

    @classmethod
    def parse(cls, raw: str | None) -> Namespace:
        value = (raw or "").strip().lower()
        if value in {"", "direct", "object", "root"}:
            return cls.DIRECT
        if value in {"content", "contents"}:
            return cls.CONTENT
        if value in {"settings", "setting"}:
            return cls.SETTINGS
        raise ValueError(f"Unknown namespace: {raw!r} (expected direct, content or settings)")


class StatementKind(str, Enum):
    CALL = "call"
    GET = "get"
    SET = "set"


class QuotingPolicy(str, Enum):
    ESCAPE = "escape"
    VERBATIM = "verbatim"


# Characters that would terminate or corrupt a single-quoted script literal.
_ESCAPES: dict[str, str] = {
    "\\": "\\\\",
    "'": "\\'",
    "\n": "\\n",
    "\r": "\\r",
    "\u2028": "\\u2028",
    "\u2029": "\\u2029",
}
_UNESCAPES: dict[str, str] = {"\\": "\\", "'": "'", "n": "\n", "r": "\r"}


def quote(value: object, policy: QuotingPolicy = QuotingPolicy.ESCAPE) -> str:
    text = value if isinstance(value, str) else str(value)
    if policy is QuotingPolicy.ESCAPE:
        text = "".join(_ESCAPES.get(ch, ch) for ch in text)
    return f"'{text}'"


def render_arguments(args: Iterable[object], policy: QuotingPolicy = QuotingPolicy.ESCAPE) -> str:
    """Render a call argument list without the surrounding parentheses.

    No arguments render as an empty string; otherwise each value is quoted and
    the values are comma-joined (no trailing comma).
    """
    return ",".join(quote(arg, policy) for arg in args)


@dataclass(frozen=True)
class ScriptStatement:
    root: str
    namespace: Namespace
    member: str
    kind: StatementKind
    args: tuple[str, ...] = ()
    value: str | None = None
    scope_key: str | None = None
    quoting: QuotingPolicy = QuotingPolicy.ESCAPE

    @property
    def path(self) -> str:
        scope = ""
        if self.scope_key and self.namespace is Namespace.CONTENT:
            scope = f"{self.scope_key}."
        return f"{self.root}{self.namespace.segment}{scope}{self.member}"

    def render(self) -> str:
        if self.kind is StatementKind.CALL:
            return f"{self.path}({render_arguments(self.args, self.quoting)});"
        if self.kind is StatementKind.SET:
            return f"{self.path}={quote(self.value or '', self.quoting)};"
        return f"{self.path};"

    def __str__(self) -> str:
        return self.render()


class StatementBuilder:
    """Builds statements against one root path and optional content scope key."""

    def __init__(
        self,
        root: str,
        scope_key: str | None = None,
        quoting: QuotingPolicy = QuotingPolicy.ESCAPE,
    ) -> None:
        self.root = root
        self.scope_key = scope_key or None
        self.quoting = quoting

    def _scope(self, namespace: Namespace, scoped: bool) -> str | None:
        if not scoped:
            return None
        if namespace is not Namespace.CONTENT:
            raise ValueError(f"Scope key applies to the content namespace only, not {namespace.value}")
        return self.scope_key

    def call(
        self,
        namespace: Namespace,
        member: str,
        args: Iterable[object] = (),
        *,
        scoped: bool = False,
    ) -> ScriptStatement:
        return ScriptStatement(
            root=self.root,
            namespace=namespace,
            member=member,
            kind=StatementKind.CALL,
            args=tuple(a if isinstance(a, str) else str(a) for a in args),
            scope_key=self._scope(namespace, scoped),
            quoting=self.quoting,
        )

    def get(self, namespace: Namespace, member: str, *, scoped: bool = False) -> ScriptStatement:
        return ScriptStatement(
            root=self.root,
            namespace=namespace,
            member=member,
            kind=StatementKind.GET,
            scope_key=self._scope(namespace, scoped),
            quoting=self.quoting,
        )

    def set(self, namespace: Namespace, member: str, value: object, *, scoped: bool = True) -> ScriptStatement:
        return ScriptStatement(
            root=self.root,
            namespace=namespace,
            member=member,
            kind=StatementKind.SET,
            value=value if isinstance(value, str) else str(value),
            scope_key=self._scope(namespace, scoped),
            quoting=self.quoting,
        )


# ─────────────────────────────────────────────────────────────────────────────
# Parsing
# ─────────────────────────────────────────────────────────────────────────────


def _read_literal(text: str, pos: int, policy: QuotingPolicy) -> tuple[str, int]:
    """Read a single-quoted literal starting at `pos`; return (value, index after it)."""
    if pos >= len(text) or text[pos] != "'":
        raise StatementSyntaxError(f"Expected quoted value at offset {pos}: {text!r}")
    out: list[str] = []
    i = pos + 1
    while i < len(text):
        ch = text[i]
        if ch == "'":
            return "".join(out), i + 1
        if ch == "\\" and policy is QuotingPolicy.ESCAPE:
            if i + 1 >= len(text):
                break
            nxt = text[i + 1]
            if nxt == "u":
                code = text[i + 2 : i + 6]
                if len(code) != 4:
                    raise StatementSyntaxError(f"Truncated unicode escape at offset {i}")
                try:
                    out.append(chr(int(code, 16)))
                except ValueError as exc:
                    raise StatementSyntaxError(f"Invalid unicode escape {code!r}") from exc
                i += 6
                continue
            out.append(_UNESCAPES.get(nxt, nxt))
            i += 2
            continue
        out.append(ch)
        i += 1
    raise StatementSyntaxError(f"Unterminated quoted value: {text!r}")


def _parse_arguments(text: str, policy: QuotingPolicy) -> tuple[str, ...]:
    if text == "":
        return ()
    args: list[str] = []
    pos = 0
    while True:
        value, pos = _read_literal(text, pos, policy)
        args.append(value)
        if pos == len(text):
            return tuple(args)
        if text[pos] != ",":
            raise StatementSyntaxError(f"Expected ',' at offset {pos}: {text!r}")
        pos += 1


def parse_statement(
    text: str,
    root: str,
    *,
    quoting: QuotingPolicy = QuotingPolicy.ESCAPE,
) -> ScriptStatement:
    """Parse a rendered statement back into its parts.

    The namespace is recovered from the leading segment after `root`; for the
    content namespace any dotted prefix before the member is the scope key.
    """
    if not text.startswith(root):
        raise StatementSyntaxError(f"Statement does not start with root {root!r}: {text!r}")
    if not text.endswith(";"):
        raise StatementSyntaxError(f"Statement must end with ';': {text!r}")
    body = text[len(root) : -1]

    namespace = Namespace.DIRECT
    for candidate in (Namespace.CONTENT, Namespace.SETTINGS):
        if body.startswith(candidate.segment):
            namespace = candidate
            body = body[len(candidate.segment) :]
            break

    paren = body.find("(")
    equals = body.find("=")
    args: tuple[str, ...] = ()
    value: str | None = None
    if paren != -1 and (equals == -1 or paren < equals):
        kind = StatementKind.CALL
        if not body.endswith(")"):
            raise StatementSyntaxError(f"Unbalanced argument list: {text!r}")
        path = body[:paren]
        args = _parse_arguments(body[paren + 1 : -1], quoting)
    elif equals != -1:
        kind = StatementKind.SET
        path = body[:equals]
        value, end = _read_literal(body, equals + 1, quoting)
        if end != len(body):
            raise StatementSyntaxError(f"Trailing text after assigned value: {text!r}")
    else:
        kind = StatementKind.GET
        path = body

    scope_key: str | None = None
    member = path
    if namespace is Namespace.CONTENT and "." in path:
        scope_key, member = path.rsplit(".", 1)
    if not member:
        raise StatementSyntaxError(f"Missing member name: {text!r}")

    return ScriptStatement(
        root=root,
        namespace=namespace,
        member=member,
        kind=kind,
        args=args,
        value=value,
        scope_key=scope_key,
        quoting=quoting,
    )


__all__ = [
    "Namespace",
    "QuotingPolicy",
    "ScriptStatement",
    "StatementBuilder",
    "StatementKind",
    "StatementSyntaxError",
    "parse_statement",
    "quote",
    "render_arguments",
]
