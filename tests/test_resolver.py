from __future__ import annotations

import pytest

from page_bridge.resolver import HOST_MARKERS, AddressingStrategy, resolve, root_path
from page_bridge.statement import QuotingPolicy

IE8 = "Mozilla/4.0 (compatible; MSIE 8.0; Windows NT 6.1; Trident/4.0)"
FIREFOX3 = "Mozilla/5.0 (Windows; U; Windows NT 5.1; en-US; rv:1.9.0.1) Gecko/2008070208 Firefox/3.0.1"
FIREFOX2 = "Mozilla/5.0 (Windows; U; Windows NT 5.1; en-US; rv:1.8.1.20) Gecko/20081217 Firefox/2.0.0.20"
CHROME = "Mozilla/5.0 (X11; Linux x86_64) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/120.0 Safari/537.36"


@pytest.mark.parametrize("identity", [IE8, FIREFOX3, "xx MSIE", "Firefox/3.6"])
def test_legacy_hosts_use_global_document(identity: str) -> None:
    assert resolve(identity) is AddressingStrategy.VIA_GLOBAL_DOCUMENT


@pytest.mark.parametrize("identity", [CHROME, FIREFOX2, "Firefox/30.0", "msie", "", None])
def test_other_hosts_use_document(identity: str | None) -> None:
    assert resolve(identity) is AddressingStrategy.VIA_DOCUMENT


def test_markers_are_an_immutable_ordered_table() -> None:
    assert isinstance(HOST_MARKERS, tuple)
    assert [marker for marker, _ in HOST_MARKERS] == ["Firefox/3.", "MSIE"]


def test_root_path_per_strategy() -> None:
    assert root_path("panel1", AddressingStrategy.VIA_GLOBAL_DOCUMENT) == "window.document['panel1']."
    assert root_path("panel1", AddressingStrategy.VIA_DOCUMENT) == "document['panel1']."


def test_root_path_quotes_object_id_with_policy() -> None:
    assert root_path("a'b", AddressingStrategy.VIA_DOCUMENT) == "document['a\\'b']."
    assert root_path("a'b", AddressingStrategy.VIA_DOCUMENT, QuotingPolicy.VERBATIM) == "document['a'b']."
