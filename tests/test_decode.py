from __future__ import annotations

from enum import Enum

import pytest

from page_bridge.decode import as_text, decode_bool, decode_enum, decode_float, decode_int
from page_bridge.errors import DecodeFailure, ScriptResultMissing


class Stretch(str, Enum):
    NONE = "None"
    FILL = "Fill"
    UNIFORM = "Uniform"


def test_as_text_prints_primitives_like_the_page() -> None:
    assert as_text("abc") == "abc"
    assert as_text(True) == "true"
    assert as_text(False) == "false"
    assert as_text(42) == "42"
    assert as_text(480.0) == "480"
    assert as_text(1.5) == "1.5"
    assert as_text(float("nan")) == "NaN"
    assert as_text(float("-inf")) == "-Infinity"


def test_as_text_missing_value_is_an_error() -> None:
    with pytest.raises(ScriptResultMissing) as exc_info:
        as_text(None, "document['p'].x;")
    assert exc_info.value.statement == "document['p'].x;"


def test_as_text_keeps_empty_string() -> None:
    assert as_text("") == ""


@pytest.mark.parametrize("raw", [{"a": 1}, [1, 2], ()])
def test_as_text_rejects_objects_and_arrays(raw: object) -> None:
    with pytest.raises(DecodeFailure) as exc_info:
        as_text(raw, "document['p'].content.items;")
    assert exc_info.value.kind == "non-primitive"
    assert exc_info.value.raw == raw
    assert exc_info.value.statement == "document['p'].content.items;"


def test_decode_bool() -> None:
    assert decode_bool("true") is True
    assert decode_bool("False") is False
    assert decode_bool(" true ") is True
    assert decode_bool(True) is True


@pytest.mark.parametrize("raw", ["notabool", "", "1", "yes", 0])
def test_decode_bool_rejects_other_values(raw: object) -> None:
    with pytest.raises(DecodeFailure) as exc_info:
        decode_bool(raw, "s;")
    err = exc_info.value
    assert err.raw == raw
    assert err.target == "bool"
    assert err.kind == "malformed-primitive"
    assert err.to_dict()["statement"] == "s;"


def test_decode_int() -> None:
    assert decode_int("480") == 480
    assert decode_int("-3") == -3
    assert decode_int(60) == 60
    assert decode_int(60.0) == 60


@pytest.mark.parametrize("raw", ["4.5", "", "abc", "12px", True, 4.5])
def test_decode_int_rejects_other_values(raw: object) -> None:
    with pytest.raises(DecodeFailure):
        decode_int(raw)


def test_decode_float() -> None:
    assert decode_float("1.25") == 1.25
    assert decode_float(3) == 3.0
    with pytest.raises(DecodeFailure):
        decode_float("wide")


def test_decode_enum_by_value_then_name() -> None:
    assert decode_enum("Fill", Stretch) is Stretch.FILL
    assert decode_enum("uniform", Stretch) is Stretch.UNIFORM
    with pytest.raises(DecodeFailure) as exc_info:
        decode_enum("Squash", Stretch)
    assert exc_info.value.target == "Stretch"


def test_decode_failure_is_a_value_error() -> None:
    with pytest.raises(ValueError):
        decode_int("x")
