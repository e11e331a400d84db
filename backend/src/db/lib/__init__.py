from db.lib.convert import ConversionError, Slot, convert_assign, format_time
from db.lib.kinds import FieldDescriptor, Kind, TypeDescriptor, is_value_kind, pointer_to, type_of
from db.lib.naming import INITIALISMS, camel_names, resolve_field
from db.lib.scanner import ScanError, scan_row

__all__ = [
    "INITIALISMS",
    "ConversionError",
    "FieldDescriptor",
    "Kind",
    "ScanError",
    "Slot",
    "TypeDescriptor",
    "camel_names",
    "convert_assign",
    "format_time",
    "is_value_kind",
    "pointer_to",
    "resolve_field",
    "scan_row",
    "type_of",
]
