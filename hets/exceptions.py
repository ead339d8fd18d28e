"""
Business error hierarchy for consistent error responses.

Usage:
    from hets.exceptions import NotFoundError, RequestInProgressError

    raise NotFoundError("Rental request", request_id)
    raise RequestInProgressError()

Every error carries a HETS result code. The handler registered in main.py
converts them to JSON responses with the shape:
    {"error": "<code>", "detail": "<description>"}
"""

from fastapi import HTTPException, status

ERROR_DESCRIPTIONS: dict[str, str] = {
    "HETS-01": "Record not found",
    "HETS-04": "No record to insert",
    "HETS-05": "An In Progress rental request already exists for this area and equipment type",
    "HETS-06": "Rental request is not In Progress",
    "HETS-07": "Rental Request count cannot be less than equipment already hired",
    "HETS-09": "Rental request cannot be cancelled - rental agreements exist",
    "HETS-10": "Rental request cannot be cancelled - request is complete",
}


def get_description(code: str) -> str:
    """Look up the user-facing description for a result code."""
    return ERROR_DESCRIPTIONS.get(code, "Unknown error")


class AppError(HTTPException):
    """Base application error with a result code and a default status code."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    code: str = "HETS-00"

    def __init__(self, message: str | None = None):
        super().__init__(
            status_code=self.__class__.status_code,
            detail=message or get_description(self.code),
        )


class NotFoundError(AppError):
    """Record not found (404)."""

    status_code = status.HTTP_404_NOT_FOUND
    code = "HETS-01"

    def __init__(self, resource: str | None = None, resource_id: int | None = None):
        if resource is None:
            super().__init__()
        elif resource_id is not None:
            super().__init__(f"{resource} not found (id={resource_id})")
        else:
            super().__init__(f"{resource} not found")


class InvalidRequestError(AppError):
    """Missing or unusable input record (400)."""

    status_code = status.HTTP_400_BAD_REQUEST
    code = "HETS-04"


class RequestInProgressError(AppError):
    """A second In Progress request for the same area and type (409)."""

    status_code = status.HTTP_409_CONFLICT
    code = "HETS-05"


class RequestNotInProgressError(AppError):
    """Rotation list changes on a request that is not In Progress (409)."""

    status_code = status.HTTP_409_CONFLICT
    code = "HETS-06"


class CountBelowHiredError(AppError):
    """Equipment count lowered below what is already hired (400)."""

    status_code = status.HTTP_400_BAD_REQUEST
    code = "HETS-07"


class AgreementsExistError(AppError):
    """Cancel blocked by linked rental agreements (409)."""

    status_code = status.HTTP_409_CONFLICT
    code = "HETS-09"


class RequestCompleteError(AppError):
    """Cancel blocked because the request is complete (409)."""

    status_code = status.HTTP_409_CONFLICT
    code = "HETS-10"
