"""Field descriptors and class reflection.

Supports dataclasses, Pydantic models and plain classes with an annotated
``__init__``. Reflection runs once per entity at registration time.
"""

from __future__ import annotations

import dataclasses
import datetime
import inspect
import types
import typing
from collections import abc
from collections.abc import Callable
from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from typing import Any, Optional, Union

from row_orm.schema.naming import snake_case


class FieldType(Enum):
    """Semantic type of a mapped field."""

    INTEGER = "integer"
    FLOAT = "float"
    TEXT = "text"
    BOOLEAN = "boolean"
    BYTES = "bytes"
    DATETIME = "datetime"
    DATE = "date"
    DECIMAL = "decimal"
    ENUM = "enum"
    ANY = "any"


@dataclass(frozen=True)
class Field:
    """One mapped column of an entity."""

    name: str
    column: str
    type: FieldType
    is_pk: bool = False
    is_virtual: bool = False
    python_type: Any = dataclasses.field(default=None, compare=False, repr=False)


@dataclass(frozen=True)
class ReflectedAttribute:
    """An attribute discovered on an entity class, before schema rules apply."""

    name: str
    annotation: Any
    required: bool


_TYPE_MAP: list[tuple[type, FieldType]] = [
    # bool before int: bool is an int subclass
    (bool, FieldType.BOOLEAN),
    (int, FieldType.INTEGER),
    (float, FieldType.FLOAT),
    (Decimal, FieldType.DECIMAL),
    (str, FieldType.TEXT),
    (bytes, FieldType.BYTES),
    (datetime.datetime, FieldType.DATETIME),
    (datetime.date, FieldType.DATE),
    (Enum, FieldType.ENUM),
]

_ZERO_VALUES: dict[FieldType, Any] = {
    FieldType.INTEGER: 0,
    FieldType.FLOAT: 0.0,
    FieldType.TEXT: "",
    FieldType.BOOLEAN: False,
    FieldType.BYTES: b"",
}

_COLLECTION_ORIGINS = (list, dict, set, frozenset, tuple)
_ABSTRACT_COLLECTIONS = (abc.Mapping, abc.Sequence, abc.Set, abc.Iterable, abc.Collection)

_BUILTIN_NAMES: dict[str, Any] = {
    "int": int,
    "float": float,
    "str": str,
    "bool": bool,
    "bytes": bytes,
    "Decimal": Decimal,
    "datetime": datetime.datetime,
    "date": datetime.date,
}


def _is_pydantic_model(cls: type) -> bool:
    """Check if a class is a Pydantic BaseModel."""
    try:
        from pydantic import BaseModel

        return isinstance(cls, type) and issubclass(cls, BaseModel)
    except ImportError:
        return False


def _annotation_from_string(annotation: str) -> Any:
    """Best-effort resolution of an annotation that cannot be evaluated."""
    text = annotation.replace(" ", "")
    nullable = False
    if text.startswith("Optional[") and text.endswith("]"):
        text, nullable = text[len("Optional[") : -1], True
    elif text.endswith("|None"):
        text, nullable = text[: -len("|None")], True
    base = text.split("[", 1)[0]
    if base.lower() in ("list", "dict", "set", "frozenset", "tuple"):
        return list
    resolved = _BUILTIN_NAMES.get(base)
    if resolved is None:
        return Any
    return Optional[resolved] if nullable else resolved


def _type_hints(target: Any) -> dict[str, Any]:
    try:
        return typing.get_type_hints(target)
    except (NameError, TypeError):
        raw = getattr(target, "__annotations__", {})
        return {
            name: _annotation_from_string(value) if isinstance(value, str) else value
            for name, value in raw.items()
        }


def reflect_attributes(cls: type) -> list[ReflectedAttribute]:
    """Discover an entity's attributes in declaration order."""
    if _is_pydantic_model(cls):
        return [
            ReflectedAttribute(name, info.annotation, info.is_required())
            for name, info in cls.model_fields.items()  # type: ignore[attr-defined]
        ]

    if dataclasses.is_dataclass(cls):
        hints = _type_hints(cls)
        return [
            ReflectedAttribute(
                f.name,
                hints.get(f.name, Any),
                f.default is dataclasses.MISSING and f.default_factory is dataclasses.MISSING,
            )
            for f in dataclasses.fields(cls)
            if f.init
        ]

    # Plain class - use annotated __init__ parameters
    try:
        sig = inspect.signature(cls.__init__)  # type: ignore[misc]
    except (ValueError, TypeError):
        return []
    hints = _type_hints(cls.__init__)  # type: ignore[misc]
    return [
        ReflectedAttribute(name, hints.get(name, Any), param.default is inspect.Parameter.empty)
        for name, param in sig.parameters.items()
        if name != "self" and param.kind not in (param.VAR_POSITIONAL, param.VAR_KEYWORD)
    ]


def unwrap_optional(annotation: Any) -> tuple[Any, bool]:
    """Strip ``None`` from ``X | None`` / ``Optional[X]``. Returns (inner, nullable)."""
    origin = typing.get_origin(annotation)
    if origin is Union or origin is types.UnionType:
        args = [arg for arg in typing.get_args(annotation) if arg is not type(None)]
        nullable = len(args) != len(typing.get_args(annotation))
        if len(args) == 1:
            return args[0], nullable
        return Any, nullable
    return annotation, False


def is_relation_attribute(annotation: Any) -> bool:
    """True for collections and nested entities, which are not columns."""
    inner, _ = unwrap_optional(annotation)
    origin = typing.get_origin(inner) or inner
    if isinstance(origin, type):
        if issubclass(origin, _COLLECTION_ORIGINS) or origin in _ABSTRACT_COLLECTIONS:
            return True
        if dataclasses.is_dataclass(origin) or _is_pydantic_model(origin):
            return True
        if hasattr(origin, "configure_entity"):
            return True
    return False


def field_type_of(annotation: Any) -> tuple[FieldType, Any]:
    """Semantic type and concrete Python type of an annotation."""
    inner, _ = unwrap_optional(annotation)
    if isinstance(inner, type):
        for python_type, field_type in _TYPE_MAP:
            if issubclass(inner, python_type):
                return field_type, inner
    return FieldType.ANY, inner


def build_field(
    attribute: ReflectedAttribute,
    *,
    column: str | None = None,
    is_pk: bool = False,
    is_virtual: bool = False,
) -> Field:
    field_type, python_type = field_type_of(attribute.annotation)
    return Field(
        name=attribute.name,
        column=column or snake_case(attribute.name),
        type=field_type,
        is_pk=is_pk,
        is_virtual=is_virtual,
        python_type=python_type,
    )


def zero_factory(annotation: Any) -> Callable[[], Any]:
    """Factory producing the zero value of an annotation.

    Nullable and unknown annotations get ``None``; collections get a fresh
    empty container on every call.
    """
    inner, nullable = unwrap_optional(annotation)
    if nullable:
        return lambda: None
    origin = typing.get_origin(inner) or inner
    if isinstance(origin, type) and issubclass(origin, _COLLECTION_ORIGINS):
        return origin  # type: ignore[no-any-return]
    field_type, _ = field_type_of(inner)
    zero = _ZERO_VALUES.get(field_type)
    return lambda: zero
