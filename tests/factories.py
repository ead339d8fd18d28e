"""
Builders for engine records and transient ORM objects used across tests.
"""

from datetime import date, datetime

from hets.models import (
    DistrictEquipmentType,
    Equipment,
    EquipmentType,
    LocalArea,
    Project,
    RentalRequest,
    RentalRequestRotationList,
)
from hets.models.equipment import EQUIPMENT_STATUS_APPROVED
from hets.models.rental_request import REQUEST_STATUS_IN_PROGRESS
from hets.rotation import EquipmentRecord, RotationEntry


def make_entry(equipment_id, block, sort_order, response=None, force_hire=None, position=None):
    """Rotation entry for engine tests."""
    return RotationEntry(
        equipment=EquipmentRecord(
            id=equipment_id,
            block_number=block,
            number_in_block=position,
            seniority=float(100 - equipment_id),
        ),
        sort_order=sort_order,
        offer_response=response,
        is_force_hire=force_hire,
        entry_id=1000 + equipment_id,
    )


def make_equipment(equipment_id, block, position):
    return Equipment(
        id=equipment_id,
        equipment_code=f"EX-{equipment_id:04d}",
        owner_name=f"Owner {equipment_id}",
        local_area_id=5,
        district_equipment_type_id=3,
        block_number=block,
        number_in_block=position,
        seniority=float(100 - equipment_id),
        status=EQUIPMENT_STATUS_APPROVED,
    )


def make_request(rows=(), status=REQUEST_STATUS_IN_PROGRESS, equipment_count=1, dump_truck=False):
    """Transient rental request in local area 5 (number 7) with relationships populated."""
    local_area = LocalArea(id=5, local_area_number=7, name="Area 7")
    equipment_type = EquipmentType(
        id=1, name="Dump Truck" if dump_truck else "Excavator", is_dump_truck=dump_truck
    )
    det = DistrictEquipmentType(
        id=3,
        district_equipment_name="Excavator - Large",
        equipment_type_id=1,
        equipment_type=equipment_type,
    )
    project = Project(id=9, name="Highway 1 Resurfacing")
    return RentalRequest(
        id=42,
        local_area_id=local_area.id,
        local_area=local_area,
        district_equipment_type_id=det.id,
        district_equipment_type=det,
        project_id=project.id,
        project=project,
        status=status,
        equipment_count=equipment_count,
        expected_hours=120.0,
        expected_start_date=date(2024, 6, 3),
        expected_end_date=date(2024, 7, 31),
        created_at=datetime(2024, 5, 1, 9, 30),
        rotation_list=list(rows),
    )


def make_row(row_id, equipment, sort_order, response=None, force_hire=None, agreement=None):
    return RentalRequestRotationList(
        id=row_id,
        equipment_id=equipment.id,
        equipment=equipment,
        rotation_list_sort_order=sort_order,
        offer_response=response,
        is_force_hire=force_hire,
        rental_agreement_id=agreement.id if agreement else None,
        rental_agreement=agreement,
    )


def make_excavator_request(responses=(None, None, None), **kwargs):
    """E1, E2 in block 1 and E3 in block 2, in that call-out order."""
    e1 = make_equipment(1, 1, 1)
    e2 = make_equipment(2, 1, 2)
    e3 = make_equipment(3, 2, 1)
    rows = [
        make_row(11, e1, 1, responses[0]),
        make_row(12, e2, 2, responses[1]),
        make_row(13, e3, 3, responses[2]),
    ]
    return make_request(rows, **kwargs)
