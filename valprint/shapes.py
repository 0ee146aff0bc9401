"""
Shape classification of runtime values.

Every value handed to the printer is tagged with exactly one Shape. The printer keeps one
method per Shape, so supporting a new kind of value means teaching classify() about it.
"""

# Standard library -----------------------------------------------------------------------------------------------------
import collections
import collections.abc as abc
import dataclasses
import datetime
import functools
import ipaddress
import numbers
import pathlib
import re
import types
import uuid
import weakref
from enum import Enum, unique
from typing import Any

# Classes --------------------------------------------------------------------------------------------------------------


@unique
class Shape(str, Enum):
    """
    Runtime shape of a value, in dispatch precedence order:
        - "absent": None
        - "enum": Enum members, including int and str enums
        - "scalar": bool and numbers
        - "text": str, bytes, bytearray
        - "indirection": transparent wrappers around another value
        - "reference": weak references, rendered with a '&' marker
        - "record": dataclasses, named tuples, attrs classes and plain objects
        - "sequence", "mapping", "set": containers
        - "opaque": callables, iterators, exceptions and value types shown by their text only
        - "unknown": anything else
    """
    ABSENT = "absent"
    ENUM = "enum"
    SCALAR = "scalar"
    TEXT = "text"
    INDIRECTION = "indirection"
    REFERENCE = "reference"
    RECORD = "record"
    SEQUENCE = "sequence"
    MAPPING = "mapping"
    SET = "set"
    OPAQUE = "opaque"
    UNKNOWN = "unknown"


TEXT_TYPES = (str, bytes, bytearray)

WRAPPER_TYPES = (
    collections.UserDict,
    collections.UserList,
    collections.UserString,
)

# Shown as Name(text), never expanded
CALLABLE_TYPES = (
    type,
    types.FunctionType,
    types.BuiltinFunctionType,
    types.MethodType,
    types.MethodWrapperType,
    types.WrapperDescriptorType,
    types.MethodDescriptorType,
    types.ModuleType,
    functools.partial,
)
CHANNEL_TYPES = (
    abc.Iterator,
    abc.AsyncIterator,
    abc.Awaitable,
)
VALUE_TYPES = (
    BaseException,
    datetime.date,
    datetime.time,
    datetime.timedelta,
    datetime.tzinfo,
    uuid.UUID,
    pathlib.PurePath,
    ipaddress.IPv4Address,
    ipaddress.IPv6Address,
    ipaddress.IPv4Network,
    ipaddress.IPv6Network,
    re.Pattern,
    re.Match,
    type(Ellipsis),
    type(NotImplemented),
)
OPAQUE_TYPES = CALLABLE_TYPES + CHANNEL_TYPES + VALUE_TYPES

# Container types that are never records, even when subclassed with a __dict__
CONTAINER_ABCS = (abc.Mapping, abc.Set, abc.Sequence)

# Types that can never take field exclusions
NON_RECORD_TYPES = (numbers.Number, bool, *TEXT_TYPES, *WRAPPER_TYPES, weakref.ref, Enum, *OPAQUE_TYPES)


# Methods --------------------------------------------------------------------------------------------------------------


def classify(obj: Any) -> Shape:
    """
    Tag a value with its Shape.

    Never raises: values that fit no other shape are Shape.UNKNOWN.

    Examples:
        >>> classify(None), classify(1.5), classify("x")
        (<Shape.ABSENT: 'absent'>, <Shape.SCALAR: 'scalar'>, <Shape.TEXT: 'text'>)
        >>> classify([1]), classify({1: 2}), classify(len)
        (<Shape.SEQUENCE: 'sequence'>, <Shape.MAPPING: 'mapping'>, <Shape.OPAQUE: 'opaque'>)
    """
    if obj is None:
        return Shape.ABSENT
    if isinstance(obj, Enum):
        return Shape.ENUM
    if isinstance(obj, (bool, numbers.Number)):
        return Shape.SCALAR
    if isinstance(obj, TEXT_TYPES):
        return Shape.TEXT
    if isinstance(obj, WRAPPER_TYPES):
        return Shape.INDIRECTION
    if isinstance(obj, weakref.ref):
        return Shape.REFERENCE
    if isinstance(obj, OPAQUE_TYPES):
        return Shape.OPAQUE

    # Declared records win over their container bases (named tuples are tuples)
    if _is_declared_record(obj):
        return Shape.RECORD

    if isinstance(obj, abc.Mapping):
        return Shape.MAPPING
    if isinstance(obj, abc.Set):
        return Shape.SET
    if isinstance(obj, abc.Sequence):
        return Shape.SEQUENCE

    if hasattr(obj, "__dict__") or _slot_names(type(obj)):
        return Shape.RECORD

    return Shape.UNKNOWN


def unwrap(obj: Any) -> Any:
    """Return the value wrapped by an indirection, see Shape.INDIRECTION."""
    return obj.data


def is_record_type(cls: Any) -> bool:
    """
    Check whether instances of cls render as records.

    Used to validate field exclusions at configuration time.
    """
    if not isinstance(cls, type):
        return False
    if _is_declared_record_type(cls):
        return True
    if issubclass(cls, NON_RECORD_TYPES) or issubclass(cls, CONTAINER_ABCS):
        return False
    return cls is not object


def record_fields(obj: Any) -> list[tuple[str, Any]]:
    """
    Members of a record in declaration order as (name, value) pairs.

    Includes non-public members; filtering is up to the caller. Members that cannot be read
    (unset __slots__, dataclass fields deleted at runtime) are skipped.
    """
    if dataclasses.is_dataclass(obj):
        names = [f.name for f in dataclasses.fields(obj)]
    elif _is_named_tuple(obj):
        return list(zip(obj._fields, obj))
    elif hasattr(type(obj), "__attrs_attrs__"):
        names = [a.name for a in type(obj).__attrs_attrs__]
    else:
        names = list(_slot_names(type(obj)))
        try:
            names.extend(n for n in vars(obj) if n not in names)
        except TypeError:
            # No __dict__, slots only
            pass

    fields = []
    for name in names:
        try:
            fields.append((name, getattr(obj, name)))
        except AttributeError:
            continue
    return fields


def is_public(name: str) -> bool:
    """Member names starting with an underscore are not publicly visible."""
    return not name.startswith("_")


def is_zero(obj: Any) -> bool:
    """
    Check whether a value is the zero value of its shape.

    Zero values are None, False, numeric zero, empty text and empty containers.
    Records and other objects with identity are never zero. Zero-ness is not structural: a
    record or tuple whose members are all zero is not zero itself, only an empty tuple is.

    Examples:
        >>> is_zero(0.0), is_zero(""), is_zero([]), is_zero(float("nan"))
        (True, True, True, False)
    """
    if obj is None:
        return True
    shape = classify(obj)
    if shape is Shape.SCALAR:
        try:
            return bool(obj == 0)
        except Exception:
            return False
    if shape in (Shape.TEXT, Shape.INDIRECTION, Shape.SEQUENCE, Shape.MAPPING, Shape.SET):
        try:
            return len(obj) == 0
        except Exception:
            return False
    return False


# Private Methods ------------------------------------------------------------------------------------------------------


def _is_declared_record(obj: Any) -> bool:
    return _is_declared_record_type(type(obj))


def _is_declared_record_type(cls: type) -> bool:
    return (
        dataclasses.is_dataclass(cls)
        or (issubclass(cls, tuple) and hasattr(cls, "_fields"))
        or hasattr(cls, "__attrs_attrs__")
    )


def _is_named_tuple(obj: Any) -> bool:
    return isinstance(obj, tuple) and hasattr(type(obj), "_fields")


def _slot_names(cls: type) -> tuple[str, ...]:
    """Names declared in __slots__ across the MRO, base classes first."""
    names: list[str] = []
    for klass in reversed(cls.__mro__):
        slots = klass.__dict__.get("__slots__", ())
        if isinstance(slots, str):
            slots = (slots,)
        for name in slots:
            if name not in ("__dict__", "__weakref__") and name not in names:
                names.append(name)
    return tuple(names)
