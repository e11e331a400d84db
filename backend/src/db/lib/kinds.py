"""
Type descriptors for destination slots.

A ``TypeDescriptor`` names the kind of value a slot holds and, for pointer
kinds, the element one level down. ``type_of`` builds descriptors from
ordinary Python annotations so record models can describe their fields.
"""
import dataclasses
import types
import typing
from collections.abc import Callable
from datetime import date, datetime, time
from decimal import Decimal
from enum import Enum
from typing import Any, Optional


class Kind(str, Enum):
    INVALID = "invalid"
    BOOL = "bool"
    INT = "int"
    INT8 = "int8"
    INT16 = "int16"
    INT32 = "int32"
    INT64 = "int64"
    UINT = "uint"
    UINT8 = "uint8"
    UINT16 = "uint16"
    UINT32 = "uint32"
    UINT64 = "uint64"
    UINTPTR = "uintptr"
    FLOAT32 = "float32"
    FLOAT64 = "float64"
    COMPLEX64 = "complex64"
    COMPLEX128 = "complex128"
    ARRAY = "array"
    CHAN = "chan"
    FUNC = "func"
    INTERFACE = "interface"
    MAP = "map"
    POINTER = "pointer"
    SLICE = "slice"
    STRING = "string"
    STRUCT = "struct"
    UNSAFE_POINTER = "unsafe_pointer"


VALUE_KINDS = frozenset({
    Kind.BOOL,
    Kind.INT,
    Kind.INT8,
    Kind.INT16,
    Kind.INT32,
    Kind.INT64,
    Kind.UINT,
    Kind.UINT8,
    Kind.UINT16,
    Kind.UINT32,
    Kind.UINT64,
    Kind.UINTPTR,
    Kind.FLOAT32,
    Kind.FLOAT64,
    Kind.COMPLEX64,
    Kind.COMPLEX128,
    Kind.STRING,
    Kind.STRUCT,
})


def is_value_kind(kind: Kind) -> bool:
    """True for scalar and record kinds a raw column value can be coerced into."""
    return kind in VALUE_KINDS


@dataclasses.dataclass(frozen=True)
class TypeDescriptor:
    """Kind of a destination plus, for pointers, the element it points to."""
    kind: Kind
    elem: Optional["TypeDescriptor"] = None
    py_type: Any = None

    def deref(self) -> "TypeDescriptor":
        if self.kind is not Kind.POINTER or self.elem is None:
            raise TypeError(f"deref of non-pointer type {self}")
        return self.elem

    def __str__(self) -> str:
        if self.kind is Kind.POINTER and self.elem is not None:
            return f"*{self.elem}"
        name = getattr(self.py_type, "__name__", None)
        return f"{self.kind.value}({name})" if name else self.kind.value


def pointer_to(elem: TypeDescriptor) -> TypeDescriptor:
    return TypeDescriptor(Kind.POINTER, elem=elem)


# date/time/Decimal values are records, not scalars
_SIMPLE_KINDS = (
    (bool, Kind.BOOL),
    (int, Kind.INT64),
    (float, Kind.FLOAT64),
    (complex, Kind.COMPLEX128),
    (str, Kind.STRING),
    (datetime, Kind.STRUCT),
    (date, Kind.STRUCT),
    (time, Kind.STRUCT),
    (Decimal, Kind.STRUCT),
    (bytes, Kind.SLICE),
    (bytearray, Kind.SLICE),
    (list, Kind.SLICE),
    (tuple, Kind.SLICE),
    (set, Kind.MAP),
    (frozenset, Kind.MAP),
    (dict, Kind.MAP),
)


def type_of(annotation: Any) -> TypeDescriptor:
    """Describe a Python annotation.

    ``Optional[X]`` becomes a pointer to ``X`` so nullable columns scan
    through an indirect slot. ``bytes`` is a slice of ``uint8``.
    """
    if annotation is Any or annotation is object:
        return TypeDescriptor(Kind.INTERFACE, py_type=annotation)

    origin = typing.get_origin(annotation)
    if origin is not None:
        args = [a for a in typing.get_args(annotation) if a is not type(None)]
        if len(args) < len(typing.get_args(annotation)):
            if len(args) == 1:
                return pointer_to(type_of(args[0]))
            return pointer_to(TypeDescriptor(Kind.INTERFACE, py_type=annotation))
        if origin is typing.Union or origin is getattr(types, "UnionType", None):
            return TypeDescriptor(Kind.INTERFACE, py_type=annotation)
        if not isinstance(origin, type):
            return TypeDescriptor(Kind.INTERFACE, py_type=annotation)
        annotation = origin

    if not isinstance(annotation, type):
        if callable(annotation):
            return TypeDescriptor(Kind.FUNC, py_type=annotation)
        return TypeDescriptor(Kind.INVALID, py_type=annotation)

    if annotation in (bytes, bytearray):
        return TypeDescriptor(Kind.SLICE, elem=TypeDescriptor(Kind.UINT8, py_type=int), py_type=annotation)

    for base, kind in _SIMPLE_KINDS:
        if issubclass(annotation, base):
            return TypeDescriptor(kind, py_type=annotation)

    if dataclasses.is_dataclass(annotation) or hasattr(annotation, "model_fields"):
        return TypeDescriptor(Kind.STRUCT, py_type=annotation)
    if issubclass(annotation, Callable):
        return TypeDescriptor(Kind.FUNC, py_type=annotation)
    return TypeDescriptor(Kind.INTERFACE, py_type=annotation)


@dataclasses.dataclass(frozen=True)
class FieldDescriptor:
    """A named destination field and the type it holds."""
    name: str
    type: TypeDescriptor

    @property
    def indirect(self) -> bool:
        return self.type.kind is Kind.POINTER
