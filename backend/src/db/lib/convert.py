"""
Value conversion for scanned columns.

Each destination kind has one conversion function in ``CONVERTERS``.
``convert_assign`` looks the target kind up, converts the raw column value
and stores the result in the destination ``Slot``.
"""
import json
import logging
import struct
from datetime import date, datetime, time
from decimal import Decimal, InvalidOperation
from types import MappingProxyType
from typing import Any, Callable, Mapping, Optional

from core.config import get_settings
from db.lib.kinds import Kind, TypeDescriptor

logger = logging.getLogger(__name__)

FORMAT_DATE = "%Y-%m-%d"
FORMAT_DATETIME = "%Y-%m-%d %H:%M:%S"


class ConversionError(ValueError):
    """A raw column value could not be coerced into its destination type."""

    def __init__(self, value: Any, target: TypeDescriptor, reason: str):
        self.value = value
        self.target = target
        self.reason = reason
        super().__init__(f"cannot convert {value!r} ({type(value).__name__}) to {target}: {reason}")


class Slot:
    """
    Destination for one scanned column.

    A slot starts empty. ``assign`` stores a converted value; a slot the
    scanner skipped (NULL column) keeps whatever it held before.
    """

    __slots__ = ("value", "is_set")

    def __init__(self, value: Any = None, is_set: bool = False):
        self.value = value
        self.is_set = is_set

    def assign(self, value: Any) -> None:
        self.value = value
        self.is_set = True

    def __repr__(self) -> str:
        return f"Slot(value={self.value!r}, is_set={self.is_set})"


def format_time(value: date, fmt: Optional[str] = None) -> str:
    """Format a date or datetime with the configured layout."""
    if fmt is None:
        settings = get_settings()
        fmt = settings.datetime_format if isinstance(value, datetime) else settings.date_format
    return value.strftime(fmt)


def _text(raw: Any) -> str:
    if isinstance(raw, (bytes, bytearray, memoryview)):
        return bytes(raw).decode("utf-8")
    return str(raw)


# ---------- BOOL ----------
_TRUE = {"1", "t", "true", "y", "yes", "on"}
_FALSE = {"0", "f", "false", "n", "no", "off"}


def _to_bool(raw: Any, target: TypeDescriptor) -> bool:
    if isinstance(raw, bool):
        return raw
    if isinstance(raw, int):
        if raw in (0, 1):
            return bool(raw)
        raise ConversionError(raw, target, "integer out of range for bool")
    if isinstance(raw, (str, bytes, bytearray, memoryview)):
        text = _text(raw).strip().lower()
        if text in _TRUE:
            return True
        if text in _FALSE:
            return False
        raise ConversionError(raw, target, "not a boolean literal")
    raise ConversionError(raw, target, "unsupported source type")


# ---------- INTEGERS ----------
_INT_BITS = {
    Kind.INT: 64,
    Kind.INT8: 8,
    Kind.INT16: 16,
    Kind.INT32: 32,
    Kind.INT64: 64,
}
_UINT_BITS = {
    Kind.UINT: 64,
    Kind.UINT8: 8,
    Kind.UINT16: 16,
    Kind.UINT32: 32,
    Kind.UINT64: 64,
    Kind.UINTPTR: 64,
}


def _integral(raw: Any, target: TypeDescriptor) -> int:
    if isinstance(raw, bool):
        return int(raw)
    if isinstance(raw, int):
        return raw
    if isinstance(raw, Decimal):
        if raw.is_nan() or raw.is_infinite() or raw != raw.to_integral_value():
            raise ConversionError(raw, target, "not an integral number")
        return int(raw)
    if isinstance(raw, float):
        if raw != raw or raw in (float("inf"), float("-inf")) or raw != int(raw):
            raise ConversionError(raw, target, "not an integral number")
        return int(raw)
    if isinstance(raw, (str, bytes, bytearray, memoryview)):
        try:
            return int(_text(raw).strip(), 10)
        except ValueError as e:
            raise ConversionError(raw, target, str(e)) from e
    raise ConversionError(raw, target, "unsupported source type")


def _to_int(raw: Any, target: TypeDescriptor) -> int:
    value = _integral(raw, target)
    bits = _INT_BITS[target.kind]
    if not -(1 << (bits - 1)) <= value < (1 << (bits - 1)):
        raise ConversionError(raw, target, f"value out of range for {bits}-bit integer")
    return value


def _to_uint(raw: Any, target: TypeDescriptor) -> int:
    value = _integral(raw, target)
    bits = _UINT_BITS[target.kind]
    if not 0 <= value < (1 << bits):
        raise ConversionError(raw, target, f"value out of range for unsigned {bits}-bit integer")
    return value


# ---------- FLOATS / COMPLEX ----------
def _to_float(raw: Any, target: TypeDescriptor) -> float:
    if isinstance(raw, (str, bytes, bytearray, memoryview)):
        raw = _text(raw).strip()
    try:
        value = float(raw)
    except (TypeError, ValueError) as e:
        raise ConversionError(raw, target, str(e)) from e
    if target.kind is Kind.FLOAT32:
        try:
            value = struct.unpack("f", struct.pack("f", value))[0]
        except OverflowError as e:
            raise ConversionError(raw, target, "value out of range for float32") from e
    return value


def _to_complex(raw: Any, target: TypeDescriptor) -> complex:
    if isinstance(raw, (str, bytes, bytearray, memoryview)):
        raw = _text(raw).strip().replace(" ", "")
    try:
        return complex(raw)
    except (TypeError, ValueError) as e:
        raise ConversionError(raw, target, str(e)) from e


# ---------- STRING ----------
def _to_string(raw: Any, target: TypeDescriptor) -> str:
    if isinstance(raw, str):
        return raw
    if isinstance(raw, bool):
        return "true" if raw else "false"
    if isinstance(raw, (bytes, bytearray, memoryview)):
        try:
            return _text(raw)
        except UnicodeDecodeError as e:
            raise ConversionError(raw, target, str(e)) from e
    if isinstance(raw, date):
        return format_time(raw)
    return str(raw)


# ---------- SLICE ----------
def _to_slice(raw: Any, target: TypeDescriptor) -> Any:
    if target.elem is not None and target.elem.kind is Kind.UINT8:
        if isinstance(raw, str):
            raw = raw.encode("utf-8")
        if isinstance(raw, (bytes, bytearray, memoryview)):
            return bytearray(raw) if target.py_type is bytearray else bytes(raw)
        raise ConversionError(raw, target, "unsupported source type")
    py_type = target.py_type if isinstance(target.py_type, type) else list
    if isinstance(raw, (str, bytes, bytearray)):
        try:
            raw = json.loads(raw)
        except ValueError as e:
            raise ConversionError(raw, target, str(e)) from e
    if not isinstance(raw, (list, tuple)):
        raise ConversionError(raw, target, "not a sequence")
    return py_type(raw)


# ---------- STRUCT ----------
def _parse_datetime(raw: Any, target: TypeDescriptor) -> datetime:
    if isinstance(raw, datetime):
        return raw
    if isinstance(raw, date):
        return datetime(raw.year, raw.month, raw.day)
    if not isinstance(raw, (str, bytes, bytearray, memoryview)):
        raise ConversionError(raw, target, "unsupported source type")
    text = _text(raw).strip()
    settings = get_settings()
    for fmt in (settings.datetime_format, settings.date_format):
        try:
            return datetime.strptime(text, fmt)
        except ValueError:
            continue
    try:
        return datetime.fromisoformat(text)
    except ValueError as e:
        raise ConversionError(raw, target, str(e)) from e


def _to_struct(raw: Any, target: TypeDescriptor) -> Any:
    py_type = target.py_type
    if not isinstance(py_type, type):
        raise ConversionError(raw, target, "struct target without a type")
    if isinstance(raw, py_type) and not (py_type is date and isinstance(raw, datetime)):
        return raw
    if issubclass(py_type, datetime):
        return _parse_datetime(raw, target)
    if issubclass(py_type, date):
        return _parse_datetime(raw, target).date()
    if issubclass(py_type, time):
        if isinstance(raw, datetime):
            return raw.time()
        try:
            return time.fromisoformat(_text(raw).strip())
        except (TypeError, ValueError) as e:
            raise ConversionError(raw, target, str(e)) from e
    if issubclass(py_type, Decimal):
        try:
            return Decimal(_text(raw).strip())
        except InvalidOperation as e:
            raise ConversionError(raw, target, "not a decimal number") from e
    if hasattr(py_type, "model_validate"):
        try:
            if isinstance(raw, (str, bytes, bytearray)):
                return py_type.model_validate_json(raw)
            return py_type.model_validate(raw)
        except ValueError as e:
            raise ConversionError(raw, target, str(e)) from e
    if isinstance(raw, (str, bytes, bytearray)):
        try:
            data = json.loads(raw)
        except ValueError as e:
            raise ConversionError(raw, target, str(e)) from e
        if isinstance(data, dict):
            try:
                return py_type(**data)
            except TypeError as e:
                raise ConversionError(raw, target, str(e)) from e
    raise ConversionError(raw, target, "unsupported source type")


# ---------- INTERFACE ----------
def _passthrough(raw: Any, target: TypeDescriptor) -> Any:
    return raw


Converter = Callable[[Any, TypeDescriptor], Any]

CONVERTERS: Mapping[Kind, Converter] = MappingProxyType({
    Kind.BOOL: _to_bool,
    **{kind: _to_int for kind in _INT_BITS},
    **{kind: _to_uint for kind in _UINT_BITS},
    Kind.FLOAT32: _to_float,
    Kind.FLOAT64: _to_float,
    Kind.COMPLEX64: _to_complex,
    Kind.COMPLEX128: _to_complex,
    Kind.STRING: _to_string,
    Kind.SLICE: _to_slice,
    Kind.STRUCT: _to_struct,
    Kind.INTERFACE: _passthrough,
})


def convert_assign(dest: Slot, raw: Any, indirect: bool, target: TypeDescriptor) -> None:
    """Convert ``raw`` to ``target`` and store it in ``dest``.

    ``indirect`` marks a nullable destination: a ``None`` value is stored
    as ``None``. For any other destination ``None`` is an error. Nothing is
    assigned when conversion fails.
    """
    if raw is None:
        if indirect:
            dest.assign(None)
            return
        raise ConversionError(raw, target, "NULL into non-nullable destination")

    converter = CONVERTERS.get(target.kind)
    if converter is None:
        raise ConversionError(raw, target, f"unsupported destination kind {target.kind.value}")

    try:
        value = converter(raw, target)
    except ConversionError as e:
        logger.debug(f"[Convert] {e}")
        raise
    dest.assign(value)
