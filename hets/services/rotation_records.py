"""
Conversions between ORM rows and rotation engine records.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from hets.rotation import EquipmentRecord, PointerBlock, RotationEntry, RotationPointer

if TYPE_CHECKING:
    from hets.models.equipment import Equipment
    from hets.models.rental_agreement import LocalAreaRotationList
    from hets.models.rental_request import RentalRequestRotationList


def equipment_record(equipment: Equipment) -> EquipmentRecord:
    return EquipmentRecord(
        id=equipment.id,
        block_number=equipment.block_number,
        number_in_block=equipment.number_in_block,
        seniority=equipment.seniority,
    )


def entry_record(row: RentalRequestRotationList) -> RotationEntry:
    return RotationEntry(
        equipment=equipment_record(row.equipment),
        sort_order=row.rotation_list_sort_order,
        is_force_hire=row.is_force_hire,
        offer_response=row.offer_response,
        entry_id=row.id,
        rental_agreement_id=row.rental_agreement_id,
    )


def pointer_record(row: LocalAreaRotationList | None) -> RotationPointer | None:
    if row is None:
        return None
    return RotationPointer(
        block1_id=row.ask_next_block1_id,
        block1_seniority=row.ask_next_block1_seniority,
        block2_id=row.ask_next_block2_id,
        block2_seniority=row.ask_next_block2_seniority,
        open_id=row.ask_next_block_open_id,
        open_seniority=row.ask_next_block_open_seniority,
    )


def apply_pointer(row: LocalAreaRotationList, pointer: RotationPointer) -> None:
    """Copy all three slots so the row never keeps a stale pointer."""
    row.ask_next_block1_id = pointer.block1_id
    row.ask_next_block1_seniority = pointer.block1_seniority
    row.ask_next_block2_id = pointer.block2_id
    row.ask_next_block2_seniority = pointer.block2_seniority
    row.ask_next_block_open_id = pointer.open_id
    row.ask_next_block_open_seniority = pointer.open_seniority


def describe_slot(pointer: RotationPointer) -> str:
    return (pointer.slot or PointerBlock.OPEN).value
