"""
Pydantic schemas for request/response validation.
"""

from hets.schemas.rental_request import (
    HistoryCreate,
    HistoryResponse,
    NoteCreate,
    NoteResponse,
    RentalAgreementSummary,
    RentalRequestCreate,
    RentalRequestResponse,
    RentalRequestSearchResult,
    RentalRequestUpdate,
    RotationListEntryResponse,
    RotationListEntryUpdate,
    RotationListEntryUpdateResponse,
    RotationListResponse,
)

__all__ = [
    # Rental requests
    "RentalRequestCreate",
    "RentalRequestUpdate",
    "RentalRequestResponse",
    "RentalRequestSearchResult",
    # Rotation list
    "RotationListEntryResponse",
    "RotationListEntryUpdate",
    "RotationListEntryUpdateResponse",
    "RotationListResponse",
    "RentalAgreementSummary",
    # Notes and history
    "NoteCreate",
    "NoteResponse",
    "HistoryCreate",
    "HistoryResponse",
]
