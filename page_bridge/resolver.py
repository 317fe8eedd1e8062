"""Host identity -> addressing strategy for the embedded object."""

from __future__ import annotations

from enum import Enum

from .statement import QuotingPolicy, quote

# Read through the same execution channel as every other statement.
HOST_IDENTITY_SCRIPT = "navigator.userAgent;"


class AddressingStrategy(str, Enum):
    VIA_GLOBAL_DOCUMENT = "window.document"
    VIA_DOCUMENT = "document"

    @property
    def prefix(self) -> str:
        return self.value


# Legacy hosts only expose plugin instances through `window.document`.
# Ordered: the first marker found in the identity wins.
HOST_MARKERS: tuple[tuple[str, AddressingStrategy], ...] = (
    ("Firefox/3.", AddressingStrategy.VIA_GLOBAL_DOCUMENT),
    ("MSIE", AddressingStrategy.VIA_GLOBAL_DOCUMENT),
)

DEFAULT_STRATEGY = AddressingStrategy.VIA_DOCUMENT


def resolve(host_identity: str | None) -> AddressingStrategy:
    identity = host_identity or ""
    for marker, strategy in HOST_MARKERS:
        if marker in identity:
            return strategy
    return DEFAULT_STRATEGY


def root_path(
    object_id: str,
    strategy: AddressingStrategy,
    quoting: QuotingPolicy = QuotingPolicy.ESCAPE,
) -> str:
    """Render the prefix every statement for `object_id` starts with, e.g. ``document['panel1'].``."""
    return f"{strategy.prefix}[{quote(object_id, quoting)}]."


__all__ = [
    "AddressingStrategy",
    "DEFAULT_STRATEGY",
    "HOST_IDENTITY_SCRIPT",
    "HOST_MARKERS",
    "resolve",
    "root_path",
]
