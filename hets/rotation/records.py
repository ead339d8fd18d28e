"""
Flat value records the rotation engine works on.

The engine never touches ORM objects: the service layer loads the few
fields it needs (block, position, seniority, offer state) into these
records, runs the engine, and writes the results back.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

OFFER_YES = "Yes"
OFFER_NO = "No"


@dataclass(frozen=True)
class EquipmentRecord:
    """Seniority placement of one piece of equipment."""

    id: int
    block_number: Optional[int]
    number_in_block: Optional[int] = None
    seniority: Optional[float] = None


@dataclass
class RotationEntry:
    """One position on a request's call-out list."""

    equipment: EquipmentRecord
    sort_order: int
    is_force_hire: Optional[bool] = None
    offer_response: Optional[str] = None
    entry_id: Optional[int] = None
    rental_agreement_id: Optional[int] = None

    @property
    def equipment_id(self) -> int:
        return self.equipment.id

    @property
    def block_number(self) -> Optional[int]:
        return self.equipment.block_number


class EntryState(str, Enum):
    """Where an entry stands in the offer/response flow."""

    RESOLVED = "resolved"
    FORCE_HIRE_OPEN = "force_hire_open"
    AWAITING_RESPONSE = "awaiting_response"


def is_yes(response: Optional[str]) -> bool:
    return response is not None and response.strip().lower() == OFFER_YES.lower()


def is_no(response: Optional[str]) -> bool:
    return response is not None and response.strip().lower() == OFFER_NO.lower()


def classify(entry: RotationEntry) -> EntryState:
    """
    Classify a rotation list entry.

    A Yes or No answer resolves the entry. An unanswered force hire is
    skipped when looking for the next owner to call. Anything else,
    including blank or unrecognised responses, is still awaiting a response.
    """
    if is_yes(entry.offer_response) or is_no(entry.offer_response):
        return EntryState.RESOLVED
    if entry.is_force_hire:
        return EntryState.FORCE_HIRE_OPEN
    return EntryState.AWAITING_RESPONSE


def is_hired(entry: RotationEntry) -> bool:
    """An entry counts toward the request once accepted or force hired."""
    return is_yes(entry.offer_response) or bool(entry.is_force_hire)


def hired_count(entries: list[RotationEntry]) -> int:
    return sum(1 for entry in entries if is_hired(entry))


class PointerBlock(str, Enum):
    """The three per-area pointer slots."""

    BLOCK_1 = "block1"
    BLOCK_2 = "block2"
    OPEN = "open"


def classify_block(block_number: Optional[int], number_of_blocks: int) -> PointerBlock:
    """
    Map an equipment block number to a pointer slot.

    ``number_of_blocks`` is the seniority block count without the open
    block. Any block past the second, the open block, or a missing block
    number lands in the open slot.
    """
    if block_number == 1 and block_number <= number_of_blocks:
        return PointerBlock.BLOCK_1
    if block_number == 2 and block_number <= number_of_blocks:
        return PointerBlock.BLOCK_2
    return PointerBlock.OPEN


@dataclass
class RotationPointer:
    """Value copy of a LocalAreaRotationList row."""

    block1_id: Optional[int] = None
    block1_seniority: Optional[float] = None
    block2_id: Optional[int] = None
    block2_seniority: Optional[float] = None
    open_id: Optional[int] = None
    open_seniority: Optional[float] = None
    slot: Optional[PointerBlock] = field(default=None, compare=False)

    @classmethod
    def at(cls, slot: PointerBlock, equipment: EquipmentRecord) -> RotationPointer:
        """Pointer with only ``slot`` populated."""
        pointer = cls(slot=slot)
        if slot is PointerBlock.BLOCK_1:
            pointer.block1_id = equipment.id
            pointer.block1_seniority = equipment.seniority
        elif slot is PointerBlock.BLOCK_2:
            pointer.block2_id = equipment.id
            pointer.block2_seniority = equipment.seniority
        else:
            pointer.open_id = equipment.id
            pointer.open_seniority = equipment.seniority
        return pointer

    @property
    def current_id(self) -> Optional[int]:
        """The equipment id recorded as next to ask, whichever slot holds it."""
        if self.block1_id is not None:
            return self.block1_id
        if self.block2_id is not None:
            return self.block2_id
        return self.open_id

    @property
    def populated(self) -> int:
        return sum(
            1 for value in (self.block1_id, self.block2_id, self.open_id) if value is not None
        )
