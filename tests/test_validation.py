"""Tests for value type validation."""

from typing import Any, Dict, List

import pytest

from easy_cache import (
    MissingTypeError,
    SupportedType,
    TypeMismatchError,
    UnsupportedTypeError,
)
from easy_cache.core.validation import assert_supported, matches, resolve_type


@pytest.mark.parametrize(
    ("annotation", "expected"),
    [
        (str, SupportedType.STRING),
        (int, SupportedType.INT),
        (float, SupportedType.DOUBLE),
        (bool, SupportedType.BOOL),
        (list[str], SupportedType.STRING_LIST),
        (List[str], SupportedType.STRING_LIST),
        (dict[str, Any], SupportedType.STRING_KEYED_MAP),
        (Dict[str, Any], SupportedType.STRING_KEYED_MAP),
        (list[dict[str, Any]], SupportedType.LIST_OF_STRING_KEYED_MAP),
        (List[Dict[str, Any]], SupportedType.LIST_OF_STRING_KEYED_MAP),
        (SupportedType.BOOL, SupportedType.BOOL),
    ],
)
def test_resolve_supported_annotations(annotation, expected) -> None:
    assert resolve_type(annotation) is expected


@pytest.mark.parametrize("annotation", [None, Any, object])
def test_resolve_missing_type(annotation) -> None:
    with pytest.raises(MissingTypeError):
        resolve_type(annotation)


@pytest.mark.parametrize(
    "annotation",
    [list[int], dict[str, int], dict[int, Any], list, dict, bytes, set[str], tuple[str, ...], "str"],
)
def test_resolve_unsupported_type(annotation) -> None:
    with pytest.raises(UnsupportedTypeError):
        resolve_type(annotation)


def test_bool_is_not_a_number() -> None:
    """Test bool does not pass as int or float even though it subclasses int."""
    assert not matches(SupportedType.INT, True)
    assert not matches(SupportedType.DOUBLE, False)
    assert matches(SupportedType.BOOL, True)


def test_int_is_not_a_double() -> None:
    assert not matches(SupportedType.DOUBLE, 1)
    assert matches(SupportedType.DOUBLE, 1.0)


def test_structured_matching() -> None:
    assert matches(SupportedType.STRING_LIST, [])
    assert matches(SupportedType.LIST_OF_STRING_KEYED_MAP, [])
    assert not matches(SupportedType.STRING_LIST, ["a", 1])
    assert not matches(SupportedType.STRING_KEYED_MAP, {1: "a"})
    assert matches(SupportedType.STRING_KEYED_MAP, {"a": [1, {"b": None}]})
    assert not matches(SupportedType.LIST_OF_STRING_KEYED_MAP, [{"a": 1}, "b"])


def test_structured_values_must_be_plain_json() -> None:
    """Test maps holding values JSON cannot reproduce are rejected."""
    assert not matches(SupportedType.STRING_KEYED_MAP, {"a": {1, 2}})
    assert not matches(SupportedType.STRING_KEYED_MAP, {"a": b"raw"})
    assert not matches(SupportedType.STRING_KEYED_MAP, {"t": (1, 2)})
    assert not matches(SupportedType.STRING_KEYED_MAP, {"a": {1: "x"}})
    assert not matches(SupportedType.LIST_OF_STRING_KEYED_MAP, [{"a": [object()]}])
    assert matches(SupportedType.STRING_KEYED_MAP, {"a": {"b": [1, 2.5, True, None, "c"]}})

    with pytest.raises(TypeMismatchError):
        assert_supported(dict[str, Any], {"a": {1, 2}}, key="aKey")


def test_assert_supported_checks_value() -> None:
    assert assert_supported(int, 3) is SupportedType.INT
    assert assert_supported(int) is SupportedType.INT

    with pytest.raises(TypeMismatchError) as exc_info:
        assert_supported(int, "3", key="aKey")

    assert exc_info.value.key == "aKey"
    assert "str is not a" in str(exc_info.value)


def test_error_categories() -> None:
    """Test validation errors are also builtin TypeError/ValueError."""
    assert issubclass(MissingTypeError, ValueError)
    assert issubclass(UnsupportedTypeError, TypeError)
    assert issubclass(TypeMismatchError, TypeError)
