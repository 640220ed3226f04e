from __future__ import annotations

from typing import Any, Callable, Union

from pydantic import StrictBool, StrictFloat, StrictInt, StrictStr, TypeAdapter, ValidationError

from .errors import InvalidArgumentError, TypeMismatchError

_STR = TypeAdapter(StrictStr)
_INT = TypeAdapter(StrictInt)
_BOOL = TypeAdapter(StrictBool)
_NUMBER = TypeAdapter(Union[StrictInt, StrictFloat])


def _parse(adapter: TypeAdapter, name: str, value: Any, expected: str) -> Any:
    try:
        return adapter.validate_python(value)
    except ValidationError as e:
        raise InvalidArgumentError(f"{name} must be {expected}, got {value!r}") from e


def ensure_str(name: str, value: Any) -> str:
    return _parse(_STR, name, value, "a string")


def ensure_int(name: str, value: Any) -> int:
    return _parse(_INT, name, value, "an integer")


def ensure_index(name: str, value: Any) -> int:
    index = ensure_int(name, value)
    if index < 0:
        raise InvalidArgumentError(f"{name} must be non-negative, got {index}")
    return index


def ensure_bool(name: str, value: Any) -> bool:
    return _parse(_BOOL, name, value, "a boolean")


def ensure_number(name: str, value: Any) -> int | float:
    return _parse(_NUMBER, name, value, "a number")


def ensure_callable(name: str, value: Any) -> Callable[..., Any]:
    if not callable(value):
        raise TypeMismatchError(f"{name} must be callable, got {value!r}")
    return value
