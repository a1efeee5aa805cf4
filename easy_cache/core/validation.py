"""Type validation against the closed set of supported value types."""

from typing import Any, get_args, get_origin

from easy_cache.core.exceptions import MissingTypeError, TypeMismatchError, UnsupportedTypeError
from easy_cache.core.models import SupportedType

_PRIMITIVES: dict[Any, SupportedType] = {
    str: SupportedType.STRING,
    int: SupportedType.INT,
    float: SupportedType.DOUBLE,
    bool: SupportedType.BOOL,
}


def _is_string_keyed_map_annotation(annotation: Any) -> bool:
    return get_origin(annotation) is dict and get_args(annotation) == (str, Any)


def resolve_type(value_type: Any, key: str | None = None) -> SupportedType:
    """Map a caller-supplied type to its SupportedType member.

    Args:
        value_type: A SupportedType member or one of the supported annotations
        key: Cache key, for error messages

    Returns:
        The matching SupportedType

    Raises:
        MissingTypeError: If no concrete type was given
        UnsupportedTypeError: If the type is outside the supported set
    """
    if value_type is None or value_type is Any or value_type is object:
        raise MissingTypeError(key=key)
    if isinstance(value_type, SupportedType):
        return value_type
    if isinstance(value_type, type) and value_type in _PRIMITIVES:
        return _PRIMITIVES[value_type]

    origin = get_origin(value_type)
    args = get_args(value_type)
    if origin is list and len(args) == 1:
        if args[0] is str:
            return SupportedType.STRING_LIST
        if _is_string_keyed_map_annotation(args[0]):
            return SupportedType.LIST_OF_STRING_KEYED_MAP
    if _is_string_keyed_map_annotation(value_type):
        return SupportedType.STRING_KEYED_MAP

    raise UnsupportedTypeError(value_type, key=key)


def _is_json_value(value: Any) -> bool:
    """Check that a value survives a JSON round trip unchanged.

    Tuples, sets, bytes and non-string map keys are rejected because JSON
    would either refuse them or read them back as something else.
    """
    if value is None or isinstance(value, (str, int, float)):
        return True
    if isinstance(value, list):
        return all(_is_json_value(item) for item in value)
    if isinstance(value, dict):
        return _is_string_keyed_map(value)
    return False


def _is_string_keyed_map(value: Any) -> bool:
    return isinstance(value, dict) and all(
        isinstance(k, str) and _is_json_value(v) for k, v in value.items()
    )


def matches(supported_type: SupportedType, value: Any) -> bool:
    """Check that a value is an instance of a supported type.

    ``bool`` is not accepted as ``INT`` or ``DOUBLE`` and ``int`` is not
    accepted as ``DOUBLE``. Maps must hold only JSON values at every level.
    """
    if supported_type is SupportedType.STRING:
        return isinstance(value, str)
    if supported_type is SupportedType.INT:
        return isinstance(value, int) and not isinstance(value, bool)
    if supported_type is SupportedType.DOUBLE:
        return isinstance(value, float)
    if supported_type is SupportedType.BOOL:
        return isinstance(value, bool)
    if supported_type is SupportedType.STRING_LIST:
        return isinstance(value, list) and all(isinstance(item, str) for item in value)
    if supported_type is SupportedType.STRING_KEYED_MAP:
        return _is_string_keyed_map(value)
    if supported_type is SupportedType.LIST_OF_STRING_KEYED_MAP:
        return isinstance(value, list) and all(_is_string_keyed_map(item) for item in value)
    raise UnsupportedTypeError(supported_type)


def assert_supported(value_type: Any, value: Any = None, key: str | None = None) -> SupportedType:
    """Validate a requested type and, if given, the value claimed to have it.

    Args:
        value_type: Requested type
        value: Candidate value; ``None`` skips the instance check
        key: Cache key, for error messages

    Returns:
        The resolved SupportedType

    Raises:
        MissingTypeError: If no concrete type was given
        UnsupportedTypeError: If the type is outside the supported set
        TypeMismatchError: If ``value`` is not an instance of the type
    """
    supported_type = resolve_type(value_type, key=key)
    if value is not None and not matches(supported_type, value):
        raise TypeMismatchError(value_type, value, key=key)
    return supported_type
