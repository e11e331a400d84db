"""
Read one result row into typed destination slots.
"""
import logging
from typing import Any, Callable, Sequence

from db.lib.convert import Slot, convert_assign
from db.lib.kinds import TypeDescriptor

logger = logging.getLogger(__name__)

ValueConverter = Callable[[Slot, Any, bool, TypeDescriptor], None]


class ScanError(RuntimeError):
    """The cursor could not produce a row matching the destination slots."""


def scan_row(
    rows,
    is_ptrs: Sequence[bool],
    element_types: Sequence[TypeDescriptor],
    values: Sequence[Slot],
    converter: ValueConverter = convert_assign,
) -> None:
    """Read the next row from ``rows`` into ``values``.

    Args:
        rows: DB-API cursor positioned at an unread row.
        is_ptrs: per column, whether the destination is nullable. The target
            type is then ``element_types[i].deref()``.
        element_types: per column destination type.
        values: per column destination slot.
        converter: called as ``converter(slot, raw, is_ptr, target)`` for
            every non-NULL column.

    Raises:
        ScanError: no row is available or its width differs from the slots.
        Any error raised by the cursor or the converter, unchanged.

    NULL columns are skipped and their slots left as they were. Nothing is
    converted unless the whole row was read.
    """
    if not len(is_ptrs) == len(element_types) == len(values):
        raise ValueError(
            f"column metadata length mismatch: {len(is_ptrs)} flags, "
            f"{len(element_types)} types, {len(values)} slots"
        )

    targets = [
        element_type.deref() if is_ptr else element_type
        for is_ptr, element_type in zip(is_ptrs, element_types)
    ]

    try:
        row = rows.fetchone()
    except Exception as e:
        logger.warning(f"[Scanner] Row read failed: {type(e).__name__}: {e}")
        raise
    if row is None:
        raise ScanError("no row available to scan")
    if len(row) != len(values):
        raise ScanError(f"row has {len(row)} columns, expected {len(values)} destination slots")

    for i, raw in enumerate(row):
        if raw is None:
            continue
        converter(values[i], raw, is_ptrs[i], targets[i])
