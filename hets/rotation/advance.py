"""
Pointer advancement after an offer outcome is recorded.
"""

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Optional

from hets.rotation.records import (
    EntryState,
    RotationEntry,
    RotationPointer,
    classify,
    classify_block,
    hired_count,
    is_hired,
)

logger = logging.getLogger(__name__)


@dataclass
class AdvanceResult:
    """What the service has to persist after an outcome."""

    pointer: Optional[RotationPointer]
    next_entry: Optional[RotationEntry]
    hired: int
    complete: bool
    creates_agreement: bool


def next_to_ask(
    entries: Sequence[RotationEntry], current_id: Optional[int]
) -> Optional[RotationEntry]:
    """
    The entry to offer work to after ``current_id``.

    Scans forward in sort order from the entry after ``current_id`` for the
    first entry still awaiting a response. Falls back to the first entry on
    the list when ``current_id`` is unknown or nothing later is waiting.
    """
    ordered = sorted(entries, key=lambda e: e.sort_order)
    if not ordered:
        return None

    if current_id is not None:
        found_current = False
        for entry in ordered:
            if found_current and classify(entry) is EntryState.AWAITING_RESPONSE:
                return entry
            if not found_current and entry.equipment_id == current_id:
                found_current = True

    return ordered[0]


def advance_on_outcome(
    entries: Sequence[RotationEntry],
    updated_entry: RotationEntry,
    pointer: Optional[RotationPointer],
    equipment_count: int,
    number_of_blocks: int,
) -> AdvanceResult:
    """
    Work out the new pointer and request state once an outcome is recorded.

    ``entries`` must already carry the updated outcome. Sort orders are left
    untouched.
    """
    hired = hired_count(list(entries))
    complete = hired >= equipment_count
    creates_agreement = is_hired(updated_entry)

    current_id = pointer.current_id if pointer is not None else None
    candidate = next_to_ask(entries, current_id)

    new_pointer = None
    if candidate is not None:
        slot = classify_block(candidate.block_number, number_of_blocks)
        new_pointer = RotationPointer.at(slot, candidate.equipment)
        logger.info(
            "Next to ask moved from equipment %s to %s (%s)",
            current_id,
            candidate.equipment_id,
            slot.value,
        )

    if complete:
        logger.info("Hired %s of %s requested; request complete", hired, equipment_count)

    return AdvanceResult(
        pointer=new_pointer,
        next_entry=candidate,
        hired=hired,
        complete=complete,
        creates_agreement=creates_agreement,
    )
