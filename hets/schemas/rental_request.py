"""
Pydantic schemas for rental requests and their rotation lists.
"""

from datetime import date, datetime
from typing import List, Optional

from pydantic import BaseModel, Field

from hets.schemas.base import BaseSchema, DateSimple, DateTimeUTC


class RentalRequestCreate(BaseModel):
    """Request model for creating a rental request."""

    local_area_id: int
    district_equipment_type_id: int
    project_id: Optional[int] = None
    equipment_count: int = Field(1, ge=1)
    expected_hours: Optional[float] = Field(None, ge=0)
    expected_start_date: Optional[date] = None
    expected_end_date: Optional[date] = None


class RentalRequestUpdate(BaseModel):
    """Request model for updating a rental request."""

    equipment_count: Optional[int] = Field(None, ge=1)
    expected_hours: Optional[float] = Field(None, ge=0)
    expected_start_date: Optional[date] = None
    expected_end_date: Optional[date] = None


class RentalRequestResponse(BaseSchema):
    """Response model for a rental request."""

    id: int
    local_area_id: int
    local_area_name: Optional[str] = None
    district_equipment_type_id: int
    district_equipment_name: Optional[str] = None
    project_id: Optional[int] = None
    project_name: Optional[str] = None
    status: str
    equipment_count: int
    # Yes responses plus force hires
    yes_count: int = 0
    expected_hours: Optional[float] = None
    expected_start_date: Optional[DateSimple] = None
    expected_end_date: Optional[DateSimple] = None
    first_on_rotation_list_id: Optional[int] = None
    created_at: Optional[DateTimeUTC] = None


class RentalRequestSearchResult(BaseSchema):
    """Row on the rental request search page."""

    id: int
    local_area_id: int
    local_area_name: Optional[str] = None
    district_equipment_name: Optional[str] = None
    project_id: Optional[int] = None
    project_name: Optional[str] = None
    status: str
    equipment_count: int
    expected_start_date: Optional[DateSimple] = None
    expected_end_date: Optional[DateSimple] = None


class RotationListEntryResponse(BaseSchema):
    """One entry on a rotation list."""

    id: int
    equipment_id: int
    equipment_code: Optional[str] = None
    owner_name: Optional[str] = None
    block_number: Optional[int] = None
    number_in_block: Optional[int] = None
    seniority: Optional[float] = None
    rotation_list_sort_order: int
    is_force_hire: Optional[bool] = None
    was_asked: Optional[bool] = None
    asked_date_time: Optional[DateTimeUTC] = None
    offer_response: Optional[str] = None
    offer_refusal_reason: Optional[str] = None
    offer_response_datetime: Optional[DateTimeUTC] = None
    offer_response_note: Optional[str] = None
    note: Optional[str] = None
    rental_agreement_id: Optional[int] = None
    rental_agreement_number: Optional[str] = None


class RotationListResponse(RentalRequestResponse):
    """Rental request with its sorted rotation list."""

    # Seniority blocks plus the open block
    number_of_blocks: int
    rotation_list: List[RotationListEntryResponse] = []


class RotationListEntryUpdate(BaseModel):
    """Offer outcome recorded against one rotation list entry."""

    id: int
    is_force_hire: Optional[bool] = None
    was_asked: Optional[bool] = None
    asked_date_time: Optional[datetime] = None
    offer_response: Optional[str] = Field(None, max_length=50)
    offer_refusal_reason: Optional[str] = Field(None, max_length=50)
    offer_response_datetime: Optional[datetime] = None
    offer_response_note: Optional[str] = Field(None, max_length=2048)
    note: Optional[str] = Field(None, max_length=2048)


class RentalAgreementSummary(BaseSchema):
    """Agreement created by a hire."""

    id: Optional[int] = None
    number: str
    status: str
    equipment_id: int
    project_id: Optional[int] = None
    estimate_hours: Optional[float] = None
    estimate_start_work: Optional[DateSimple] = None


class RotationListEntryUpdateResponse(BaseSchema):
    """Updated entry plus the request state after the outcome."""

    entry: RotationListEntryResponse
    request_status: str
    first_on_rotation_list_id: Optional[int] = None
    next_equipment_id: Optional[int] = None
    rental_agreement: Optional[RentalAgreementSummary] = None


class NoteCreate(BaseModel):
    """Add (id omitted) or update (id given) a rental request note."""

    id: Optional[int] = None
    text: str = Field(..., min_length=1, max_length=2048)
    is_no_longer_relevant: bool = False


class NoteResponse(BaseSchema):
    """Response model for a note."""

    id: int
    text: str
    is_no_longer_relevant: bool = False


class HistoryCreate(BaseModel):
    """Request model for a history entry."""

    history_text: str = Field(..., min_length=1)
    created_date: Optional[datetime] = None


class HistoryResponse(BaseSchema):
    """Response model for a history entry."""

    id: int
    history_text: str
    created_date: DateTimeUTC
