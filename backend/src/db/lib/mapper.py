"""
Map query results onto record models.

Column names from ``cursor.description`` are resolved against the model's
fields, then every row goes through ``scan_row`` into a fresh set of slots.
"""
import logging
from typing import Iterator, List, Optional, Sequence, Tuple, Type, TypeVar

from pydantic import BaseModel

from core.config import get_settings
from core.models import record_fields
from db.lib.convert import Slot, convert_assign
from db.lib.kinds import FieldDescriptor, Kind, TypeDescriptor, pointer_to
from db.lib.naming import resolve_field
from db.lib.scanner import ValueConverter, scan_row

logger = logging.getLogger(__name__)

M = TypeVar("M", bound=BaseModel)

# unmatched columns are read as untyped values and dropped
_UNMATCHED = TypeDescriptor(Kind.INTERFACE)

ColumnPlan = List[Optional[Tuple[str, FieldDescriptor]]]


class _SingleRow:
    """Cursor stand-in that yields one already fetched row."""

    def __init__(self, row: Sequence):
        self._row = row

    def fetchone(self):
        row, self._row = self._row, None
        return row


def column_names(cursor) -> List[str]:
    if not cursor.description:
        raise ValueError("cursor has no result columns; execute a query first")
    return [column[0] for column in cursor.description]


def plan_columns(model: Type[BaseModel], columns: Sequence[str]) -> ColumnPlan:
    """Resolve each column to ``(key, field)`` of ``model``, ``None`` where nothing matches.

    ``key`` is the field's alias, or its attribute name when it has none.
    """
    fields = record_fields(model)
    strict = get_settings().strict_columns
    plan = []
    for column in columns:
        key, field = resolve_field(fields, column)
        if field is None:
            if strict:
                raise LookupError(f"column {column!r} matches no field of {model.__name__}")
            logger.debug(f"[Mapper] Skipping column {column!r}: no field on {model.__name__}")
            plan.append(None)
            continue
        logger.debug(f"[Mapper] Column {column!r} -> {model.__name__}.{field.name} ({key})")
        plan.append((key, field))
    return plan


def iter_records(
    cursor,
    model: Type[M],
    converter: ValueConverter = convert_assign,
) -> Iterator[M]:
    """Yield one ``model`` instance per remaining row of ``cursor``.

    Nullable (``Optional``) fields start as ``None``; other fields hit by a
    NULL column are left out so the model default applies.
    """
    plan = plan_columns(model, column_names(cursor))
    is_ptrs = [entry[1].indirect if entry else True for entry in plan]
    element_types = [entry[1].type if entry else pointer_to(_UNMATCHED) for entry in plan]

    def assign(dest: Slot, raw, indirect: bool, target: TypeDescriptor) -> None:
        if target is _UNMATCHED:
            return
        converter(dest, raw, indirect, target)

    count = 0
    while True:
        row = cursor.fetchone()
        if row is None:
            break
        values = [Slot(None, is_set=is_ptr) for is_ptr in is_ptrs]
        scan_row(_SingleRow(row), is_ptrs, element_types, values, converter=assign)
        data = {
            entry[0]: slot.value
            for entry, slot in zip(plan, values)
            if entry is not None and slot.is_set
        }
        count += 1
        yield model.model_validate(data)
    logger.debug(f"[Mapper] Scanned {count} {model.__name__} rows")


def fetch_records(cursor, model: Type[M], converter: ValueConverter = convert_assign) -> List[M]:
    return list(iter_records(cursor, model, converter=converter))


def fetch_one_record(cursor, model: Type[M], converter: ValueConverter = convert_assign) -> Optional[M]:
    """First remaining row as ``model``, or ``None`` if the cursor is exhausted."""
    return next(iter_records(cursor, model, converter=converter), None)
