"""
Rotation list construction.

The list is the concatenation of each seniority block (plus the open
block) in block order, each block in its in-block order. No rotation is
applied here; fairness between requests comes from the carry-over in
``carry_over.setup_new_rotation_list``.
"""

import logging
from collections.abc import Iterable, Sequence

from hets.rotation.records import EquipmentRecord, RotationEntry

logger = logging.getLogger(__name__)


def block_numbers(number_of_blocks: int) -> range:
    """Block numbers on a rotation list: 1..number_of_blocks, then the open block."""
    return range(1, number_of_blocks + 2)


def open_block_number(number_of_blocks: int) -> int:
    return number_of_blocks + 1


def available_in_block(
    block_equipment: Iterable[EquipmentRecord],
    busy_equipment_ids: set[int],
) -> list[EquipmentRecord]:
    """
    Equipment of one block that can be offered work, in block position order.

    Equipment already working under an active rental agreement is dropped.
    """
    available = [e for e in block_equipment if e.id not in busy_equipment_ids]
    # Missing positions sort last; id keeps the order stable
    available.sort(key=lambda e: (e.number_in_block is None, e.number_in_block or 0, e.id))
    return available


def build_rotation_list(blocks: Iterable[Sequence[EquipmentRecord]]) -> list[RotationEntry]:
    """
    Concatenate per-block equipment into one call-out list.

    Sort order runs 1..N over the whole list, not per block.
    """
    entries: list[RotationEntry] = []
    sort_order = 1

    for block in blocks:
        for equipment in block:
            entries.append(RotationEntry(equipment=equipment, sort_order=sort_order))
            sort_order += 1

    logger.debug("Built rotation list with %s entries", len(entries))
    return entries
