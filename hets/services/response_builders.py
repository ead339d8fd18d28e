"""
Shared response builder utilities.

Builds API response dicts from ORM models so routers stay thin.
Relationships read here must be eager-loaded by the caller.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from hets.rotation import hired_count
from hets.services.rotation_records import entry_record

if TYPE_CHECKING:
    from hets.models.rental_agreement import RentalAgreement
    from hets.models.rental_request import (
        RentalRequest,
        RentalRequestHistory,
        RentalRequestNote,
        RentalRequestRotationList,
    )


def count_hired(request: RentalRequest) -> int:
    """Yes responses plus force hires on the request's list."""
    return hired_count([entry_record(row) for row in request.rotation_list])


def build_rental_request_base(request: RentalRequest) -> dict:
    """Common request fields shared by detail and search views."""
    return {
        "id": request.id,
        "local_area_id": request.local_area_id,
        "local_area_name": request.local_area.name if request.local_area else None,
        "district_equipment_type_id": request.district_equipment_type_id,
        "district_equipment_name": (
            request.district_equipment_type.district_equipment_name
            if request.district_equipment_type
            else None
        ),
        "project_id": request.project_id,
        "project_name": request.project.name if request.project else None,
        "status": request.status,
        "equipment_count": request.equipment_count,
        "expected_start_date": request.expected_start_date,
        "expected_end_date": request.expected_end_date,
    }


def build_rental_request_response(request: RentalRequest) -> dict:
    response = build_rental_request_base(request)
    response.update(
        {
            "yes_count": count_hired(request),
            "expected_hours": request.expected_hours,
            "first_on_rotation_list_id": request.first_on_rotation_list_id,
            "created_at": request.created_at,
        }
    )
    return response


def build_rotation_entry_response(row: RentalRequestRotationList) -> dict:
    equipment = row.equipment
    agreement = row.rental_agreement
    return {
        "id": row.id,
        "equipment_id": row.equipment_id,
        "equipment_code": equipment.equipment_code if equipment else None,
        "owner_name": equipment.owner_name if equipment else None,
        "block_number": equipment.block_number if equipment else None,
        "number_in_block": equipment.number_in_block if equipment else None,
        "seniority": equipment.seniority if equipment else None,
        "rotation_list_sort_order": row.rotation_list_sort_order,
        "is_force_hire": row.is_force_hire,
        "was_asked": row.was_asked,
        "asked_date_time": row.asked_date_time,
        "offer_response": row.offer_response,
        "offer_refusal_reason": row.offer_refusal_reason,
        "offer_response_datetime": row.offer_response_datetime,
        "offer_response_note": row.offer_response_note,
        "note": row.note,
        "rental_agreement_id": row.rental_agreement_id,
        "rental_agreement_number": agreement.number if agreement else None,
    }


def build_rotation_list_response(request: RentalRequest, number_of_blocks: int) -> dict:
    """Request with its list in call-out order; ``number_of_blocks`` includes the open block."""
    response = build_rental_request_response(request)
    rows = sorted(request.rotation_list, key=lambda r: r.rotation_list_sort_order)
    response["number_of_blocks"] = number_of_blocks
    response["rotation_list"] = [build_rotation_entry_response(row) for row in rows]
    return response


def build_agreement_summary(agreement: RentalAgreement | None) -> dict | None:
    if agreement is None:
        return None
    return {
        "id": agreement.id,
        "number": agreement.number,
        "status": agreement.status,
        "equipment_id": agreement.equipment_id,
        "project_id": agreement.project_id,
        "estimate_hours": agreement.estimate_hours,
        "estimate_start_work": agreement.estimate_start_work,
    }


def build_note_response(note: RentalRequestNote) -> dict:
    return {
        "id": note.id,
        "text": note.text,
        "is_no_longer_relevant": note.is_no_longer_relevant,
    }


def build_history_response(history: RentalRequestHistory) -> dict:
    return {
        "id": history.id,
        "history_text": history.history_text,
        "created_date": history.created_date,
    }
