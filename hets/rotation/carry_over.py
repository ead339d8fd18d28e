"""
Starting point of a newly built rotation list.

Business rules:
* first request of the fiscal year for an area and type: start at #1
* otherwise continue where the most recent request of the fiscal year
  left off, block by block:
  - answered entries (Yes/No) are skipped
  - the first unanswered owner still on the new list is where that block
    continues
  - if the whole block was answered, start again at the block's first owner
    (blocks with a single member never wrap)
* the list is renumbered so each block starts at its continuation point and
  wraps around within the block
"""

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Optional

from hets.rotation.builder import block_numbers
from hets.rotation.records import (
    EntryState,
    EquipmentRecord,
    RotationEntry,
    RotationPointer,
    classify,
    classify_block,
)

logger = logging.getLogger(__name__)


@dataclass
class Continuation:
    """Where a block resumes: position within the block on the new list."""

    position: int = 0
    equipment: Optional[EquipmentRecord] = None

    @property
    def is_set(self) -> bool:
        return self.equipment is not None


@dataclass
class RotationSetup:
    """Outcome of setting up a new list."""

    entries: list[RotationEntry]
    first_on_rotation_list_id: Optional[int]
    pointer: Optional[RotationPointer]
    carried_over: bool = False


def group_by_block(
    entries: Sequence[RotationEntry], number_of_blocks: int
) -> dict[int, list[RotationEntry]]:
    """Split sorted entries by block. Entries outside blocks 1..open are left out."""
    groups: dict[int, list[RotationEntry]] = {b: [] for b in block_numbers(number_of_blocks)}

    for entry in entries:
        if entry.block_number in groups:
            groups[entry.block_number].append(entry)

    return groups


def find_continuation(
    previous_block: Sequence[RotationEntry],
    new_block: Sequence[RotationEntry],
) -> Continuation:
    """
    Scan one block of the previous list for the point to resume from.

    The wrap rule compares the number of previous entries seen so far with
    the size of the block on the NEW list; a later unanswered owner still
    overrides a wrap.
    """
    positions = {entry.equipment_id: i for i, entry in enumerate(new_block)}
    block_size = len(new_block)
    continuation = Continuation()

    for seen, entry in enumerate(previous_block, start=1):
        if classify(entry) is EntryState.RESOLVED:
            if seen >= block_size and block_size > 1:
                first_id = previous_block[0].equipment_id
                if first_id in positions:
                    position = positions[first_id]
                    continuation = Continuation(position, new_block[position].equipment)
            continue

        position = positions.get(entry.equipment_id)
        if position is None:
            # no longer available for this request
            continue

        return Continuation(position, new_block[position].equipment)

    return continuation


def _rotate(entries: list[RotationEntry], position: int) -> list[RotationEntry]:
    return entries[position:] + entries[:position]


def setup_new_rotation_list(
    entries: Sequence[RotationEntry],
    previous_entries: Optional[Sequence[RotationEntry]],
    number_of_blocks: int,
) -> RotationSetup:
    """
    Pick the first owner to call on a new list and renumber the list.

    ``previous_entries`` is the list of the most recent earlier request for
    the same area and type in the current fiscal year, or None when there
    is no such request. ``number_of_blocks`` excludes the open block.
    Entries are renumbered in place.
    """
    if not entries:
        return RotationSetup(entries=[], first_on_rotation_list_id=None, pointer=None)

    ordered = sorted(entries, key=lambda e: e.sort_order)

    if previous_entries is None:
        first = ordered[0].equipment
        slot = classify_block(first.block_number, number_of_blocks)
        logger.info(
            "No earlier request this fiscal year; starting at equipment %s (%s)",
            first.id,
            slot.value,
        )
        return RotationSetup(
            entries=ordered,
            first_on_rotation_list_id=first.id,
            pointer=RotationPointer.at(slot, first),
        )

    new_blocks = group_by_block(ordered, number_of_blocks)
    previous_blocks = group_by_block(
        sorted(previous_entries, key=lambda e: e.sort_order), number_of_blocks
    )

    continuations = {
        b: find_continuation(previous_blocks[b], new_blocks[b])
        for b in block_numbers(number_of_blocks)
    }

    start_block = next(b for b in block_numbers(number_of_blocks) if new_blocks[b])
    start = continuations[start_block]
    chosen = start.equipment if start.is_set else ordered[0].equipment

    sort_order = 0
    for b in block_numbers(number_of_blocks):
        if b < start_block:
            continue
        for entry in _rotate(new_blocks[b], continuations[b].position):
            sort_order += 1
            entry.sort_order = sort_order

    ordered.sort(key=lambda e: e.sort_order)
    slot = classify_block(chosen.block_number, number_of_blocks)

    logger.info(
        "Continuing rotation from equipment %s in block %s (%s)",
        chosen.id,
        start_block,
        "carried over" if start.is_set else "default",
    )

    return RotationSetup(
        entries=ordered,
        first_on_rotation_list_id=chosen.id,
        pointer=RotationPointer.at(slot, chosen),
        carried_over=start.is_set,
    )
