"""
Record Mapper
=============

Maps between the environment store and dataclass records.

A field takes part in mapping when its metadata carries an ``env`` key::

    @dataclass
    class ServerConfig:
        host: str = env_field("HOST", default="localhost")
        port: int = env_field("PORT", default=8080)
        debug: bool = env_field("DEBUG", default=False)
        label: str = "untagged"

Supported field types are ``str``, ``bool``, ``int`` and ``float`` (and
``Optional`` of those).
"""

import dataclasses
import os
import re
import sys
import typing
from typing import Any, Callable, Dict, List, Mapping, Optional, Tuple

from .errors import CoercionError, InvalidTargetError, UnsupportedTypeError

ENV_TAG = "env"
BITS_TAG = "env_bits"

_MISSING = dataclasses.MISSING

_TRUE_LITERALS = frozenset({"1", "t", "T", "TRUE", "true", "True"})
_FALSE_LITERALS = frozenset({"0", "f", "F", "FALSE", "false", "False"})
_INT_PATTERN = re.compile(r"[+-]?[0-9]+\Z")
_INT_WIDTHS = (8, 16, 32, 64)


def env_field(key: str, default: Any = _MISSING, default_factory: Any = _MISSING,
              bits: Optional[int] = None, **kwargs) -> Any:
    """
    Declare a dataclass field bound to an environment key.

    Args:
        key: Environment variable name
        default: Field default
        default_factory: Field default factory
        bits: Signed bit width enforced when decoding an ``int`` field
        **kwargs: Passed through to ``dataclasses.field``

    Returns:
        A dataclass field carrying the ``env`` tag
    """
    if bits is not None and bits not in _INT_WIDTHS:
        raise ValueError(f"bits must be one of {_INT_WIDTHS}, got {bits}")

    metadata = dict(kwargs.pop("metadata", None) or {})
    metadata[ENV_TAG] = key
    if bits is not None:
        metadata[BITS_TAG] = bits

    return dataclasses.field(default=default, default_factory=default_factory,
                             metadata=metadata, **kwargs)


def _parse_bool(value: str, field: dataclasses.Field) -> bool:
    if value in _TRUE_LITERALS:
        return True
    if value in _FALSE_LITERALS:
        return False
    raise ValueError("invalid boolean literal")


def _parse_int(value: str, field: dataclasses.Field) -> int:
    if not _INT_PATTERN.match(value):
        raise ValueError("invalid syntax")
    number = int(value)

    bits = field.metadata.get(BITS_TAG)
    if bits is not None:
        limit = 1 << (bits - 1)
        if not -limit <= number < limit:
            raise ValueError(f"value out of range for {bits}-bit integer")
    return number


def _parse_float(value: str, field: dataclasses.Field) -> float:
    if value != value.strip() or "_" in value:
        raise ValueError("invalid syntax")
    return float(value)


def _parse_str(value: str, field: dataclasses.Field) -> str:
    return value


_PARSERS: Dict[type, Callable[[str, dataclasses.Field], Any]] = {
    str: _parse_str,
    bool: _parse_bool,
    int: _parse_int,
    float: _parse_float,
}


def _unwrap_optional(tp: Any) -> Any:
    """Return ``T`` for ``Optional[T]``, otherwise ``tp`` unchanged."""
    args = typing.get_args(tp)
    if args and type(None) in args:
        remaining = [arg for arg in args if arg is not type(None)]
        if len(remaining) == 1:
            return remaining[0]
    return tp


def _resolve_type(cls: type, f: dataclasses.Field) -> Any:
    """
    Resolve the declared type of one field.

    String annotations (postponed evaluation or forward references) are
    evaluated in the namespace of the module defining ``cls``. An annotation
    that cannot be evaluated is returned as the raw string, which no parser
    accepts.
    """
    tp = f.type
    if isinstance(tp, str):
        module = sys.modules.get(cls.__module__)
        globalns = dict(vars(module)) if module is not None else {}
        try:
            tp = eval(tp, globalns, dict(vars(cls)))
        except (NameError, AttributeError, SyntaxError, TypeError):
            return tp
    return _unwrap_optional(tp)


def _tagged_fields(record: Any) -> List[Tuple[dataclasses.Field, str]]:
    """Fields of ``record`` carrying a non-empty ``env`` tag, in declaration order."""
    return [
        (f, f.metadata[ENV_TAG])
        for f in dataclasses.fields(record)
        if f.metadata.get(ENV_TAG)
    ]


def _is_instance(record: Any) -> bool:
    return dataclasses.is_dataclass(record) and not isinstance(record, type)


def decode(record: Any, environ: Optional[Mapping[str, str]] = None) -> None:
    """
    Populate the tagged fields of a dataclass instance from the environment.

    Unset or empty variables leave the field untouched. Decoding stops at the
    first field that fails; fields assigned before it keep their new values.

    Args:
        record: Mutable dataclass instance to populate
        environ: Store to read from (defaults to ``os.environ``)

    Raises:
        InvalidTargetError: If ``record`` is not a mutable dataclass instance
        UnsupportedTypeError: If a tagged field has an unsupported type
        CoercionError: If a value cannot be parsed into its field's type
    """
    if record is None:
        raise InvalidTargetError("record must not be None")
    if not _is_instance(record):
        raise InvalidTargetError(
            f"record must be a dataclass instance, got {type(record).__name__}"
        )
    params = getattr(type(record), "__dataclass_params__", None)
    if params is not None and params.frozen:
        raise InvalidTargetError(f"record {type(record).__name__} is frozen")

    if environ is None:
        environ = os.environ

    for f, key in _tagged_fields(record):
        value = environ.get(key, "")
        if value == "":
            continue

        field_type = _resolve_type(type(record), f)
        parser = _PARSERS.get(field_type)
        if parser is None:
            raise UnsupportedTypeError(f.name, field_type)

        try:
            parsed = parser(value, f)
        except ValueError as e:
            raise CoercionError(f.name, key, value, field_type, str(e)) from e

        setattr(record, f.name, parsed)


def _format_value(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def format_line(key: str, value: str) -> str:
    """Render one ``KEY=VALUE`` line, quoting values that contain whitespace."""
    if any(c.isspace() for c in value):
        value = f'"{value}"'
    return f"{key}={value}\n"


def encode(record: Any) -> bytes:
    """
    Serialize the tagged fields of a dataclass instance as env file lines.

    Values containing whitespace are wrapped in double quotes. Quotes and
    ``#`` inside values are not escaped.

    Args:
        record: Dataclass instance

    Returns:
        UTF-8 encoded ``KEY=VALUE`` lines in field declaration order

    Raises:
        InvalidTargetError: If ``record`` is not a dataclass instance
    """
    if not _is_instance(record):
        raise InvalidTargetError(
            f"record must be a dataclass instance, got {type(record).__name__}"
        )

    lines = [
        format_line(key, _format_value(getattr(record, f.name)))
        for f, key in _tagged_fields(record)
    ]

    return "".join(lines).encode("utf-8")
