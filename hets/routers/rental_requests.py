"""
Rental requests API router.
Handles rental requests, their rotation lists, notes and history.
"""

from datetime import date

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from hets.database import get_db
from hets.exceptions import InvalidRequestError
from hets.schemas import (
    HistoryCreate,
    HistoryResponse,
    NoteCreate,
    NoteResponse,
    RentalRequestCreate,
    RentalRequestResponse,
    RentalRequestSearchResult,
    RentalRequestUpdate,
    RotationListEntryUpdate,
    RotationListEntryUpdateResponse,
    RotationListResponse,
)
from hets.services.rental_requests import RentalRequestService
from hets.services.response_builders import (
    build_agreement_summary,
    build_history_response,
    build_note_response,
    build_rental_request_base,
    build_rental_request_response,
    build_rotation_entry_response,
    build_rotation_list_response,
)

router = APIRouter()


def get_service(db: AsyncSession = Depends(get_db)) -> RentalRequestService:
    return RentalRequestService(db)


def parse_id_list(value: str | None) -> list[int]:
    """Parse a comma separated id list such as "1,2,7"."""
    if not value:
        return []
    try:
        return [int(part) for part in value.split(",") if part.strip()]
    except ValueError:
        raise InvalidRequestError(f"Invalid id list: {value}")


@router.post("/rentalrequests", response_model=RentalRequestResponse, status_code=201)
async def create_rental_request(
    data: RentalRequestCreate,
    service: RentalRequestService = Depends(get_service),
):
    """
    Create a rental request and build its rotation list.

    Rejected when an In Progress request already exists for the same
    local area and equipment type.
    """
    request = await service.create(data)
    return build_rental_request_response(request)


@router.get("/rentalrequests/search", response_model=list[RentalRequestSearchResult])
async def search_rental_requests(
    localAreas: str | None = Query(None),
    project: str | None = Query(None),
    status: str | None = Query(None),
    startDate: date | None = Query(None),
    endDate: date | None = Query(None),
    service: RentalRequestService = Depends(get_service),
):
    """Search rental requests by local areas, project name, status and start date range."""
    requests = await service.search(
        local_areas=parse_id_list(localAreas),
        project=project,
        status=status,
        start_date=startDate,
        end_date=endDate,
    )
    return [build_rental_request_base(r) for r in requests]


@router.get("/rentalrequests/{request_id}", response_model=RentalRequestResponse)
async def get_rental_request(
    request_id: int,
    service: RentalRequestService = Depends(get_service),
):
    request = await service.get(request_id)
    return build_rental_request_response(request)


@router.put("/rentalrequests/{request_id}", response_model=RentalRequestResponse)
async def update_rental_request(
    request_id: int,
    data: RentalRequestUpdate,
    service: RentalRequestService = Depends(get_service),
):
    """
    Update a rental request.

    The equipment count cannot drop below what is already hired; reaching
    it completes the request.
    """
    request = await service.update(request_id, data)
    return build_rental_request_response(request)


@router.post("/rentalrequests/{request_id}/cancel", response_model=RentalRequestResponse)
async def cancel_rental_request(
    request_id: int,
    service: RentalRequestService = Depends(get_service),
):
    """Delete a request that has no rental agreements and is not complete."""
    request = await service.cancel(request_id)
    return build_rental_request_response(request)


@router.get("/rentalrequests/{request_id}/rotationList", response_model=RotationListResponse)
async def get_rotation_list(
    request_id: int,
    service: RentalRequestService = Depends(get_service),
):
    """Rotation list in call-out order. numberOfBlocks counts the open block."""
    request = await service.get(request_id)
    return build_rotation_list_response(request, service.number_of_blocks(request) + 1)


@router.put(
    "/rentalrequests/{request_id}/rotationList",
    response_model=RotationListEntryUpdateResponse,
)
async def update_rotation_list(
    request_id: int,
    data: RotationListEntryUpdate,
    service: RentalRequestService = Depends(get_service),
):
    """Record an offer outcome against one entry and advance the rotation."""
    request, row, result, agreement = await service.update_rotation_entry(request_id, data)
    return {
        "entry": build_rotation_entry_response(row),
        "request_status": request.status,
        "first_on_rotation_list_id": request.first_on_rotation_list_id,
        "next_equipment_id": result.next_entry.equipment_id if result.next_entry else None,
        "rental_agreement": build_agreement_summary(agreement),
    }


@router.post(
    "/rentalrequests/{request_id}/rotationList/recalc",
    response_model=RotationListResponse,
)
async def recalc_rotation_list(
    request_id: int,
    service: RentalRequestService = Depends(get_service),
):
    """Discard the rotation list and build it again."""
    request = await service.recalc(request_id)
    return build_rotation_list_response(request, service.number_of_blocks(request) + 1)


@router.get("/rentalrequests/{request_id}/history", response_model=list[HistoryResponse])
async def get_history(
    request_id: int,
    offset: int = Query(0, ge=0),
    limit: int | None = Query(None, ge=1),
    service: RentalRequestService = Depends(get_service),
):
    """History entries, newest first."""
    history = await service.get_history(request_id, offset, limit)
    return [build_history_response(h) for h in history]


@router.post(
    "/rentalrequests/{request_id}/history",
    response_model=HistoryResponse,
    status_code=201,
)
async def add_history(
    request_id: int,
    data: HistoryCreate,
    service: RentalRequestService = Depends(get_service),
):
    history = await service.add_history(request_id, data)
    return build_history_response(history)


@router.get("/rentalrequests/{request_id}/notes", response_model=list[NoteResponse])
async def get_notes(
    request_id: int,
    service: RentalRequestService = Depends(get_service),
):
    """Notes still relevant to the request."""
    notes = await service.get_notes(request_id)
    return [build_note_response(n) for n in notes]


@router.post("/rentalrequests/{request_id}/notes", response_model=list[NoteResponse])
async def save_note(
    request_id: int,
    data: NoteCreate,
    service: RentalRequestService = Depends(get_service),
):
    """Add a note, or update it when an id is given. Returns the relevant notes."""
    notes = await service.save_note(request_id, data)
    return [build_note_response(n) for n in notes]


@router.post("/rentalrequests/{request_id}/notes/bulk", response_model=list[NoteResponse])
async def save_notes_bulk(
    request_id: int,
    data: list[NoteCreate],
    service: RentalRequestService = Depends(get_service),
):
    notes = await service.save_notes(request_id, data)
    return [build_note_response(n) for n in notes]
