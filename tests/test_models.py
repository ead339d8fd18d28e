"""Tests for data model imports and basic structure."""

from factories import make_excavator_request


def test_models_share_one_base():
    from hets.database import Base
    from hets.models import (
        Equipment,
        LocalAreaRotationList,
        RentalAgreement,
        RentalRequest,
        RentalRequestRotationList,
    )

    assert RentalRequest.__tablename__ == "rental_requests"
    assert RentalRequestRotationList.__tablename__ == "rental_request_rotation_list"
    assert LocalAreaRotationList.__tablename__ == "local_area_rotation_lists"
    for model in (Equipment, RentalAgreement, RentalRequest):
        assert model.__table__.metadata is Base.metadata


def test_one_pointer_row_per_area_and_type():
    from hets.models import LocalAreaRotationList

    constraints = {c.name for c in LocalAreaRotationList.__table__.constraints}
    assert "local_area_rotation_lists_unique" in constraints


def test_request_status_helpers():
    request = make_excavator_request(status="in progress")
    assert request.is_in_progress
    assert not request.is_complete

    request.status = "Complete"
    assert request.is_complete


def test_district_type_dump_truck_flag():
    request = make_excavator_request(dump_truck=True)
    assert request.district_equipment_type.is_dump_truck

    request.district_equipment_type.equipment_type = None
    assert not request.district_equipment_type.is_dump_truck


def test_equipment_approval_is_case_insensitive():
    request = make_excavator_request()
    equipment = request.rotation_list[0].equipment

    assert equipment.is_approved
    equipment.status = "APPROVED"
    assert equipment.is_approved
    equipment.status = "Archived"
    assert not equipment.is_approved


def test_agreement_numbers_are_unique():
    from hets.models import RentalAgreement

    assert RentalAgreement.__table__.c.number.unique is True
