"""
SQLAlchemy models package.
All models inherit from the Base class defined in database.py.
"""

from hets.models.local_area import LocalArea, Project
from hets.models.equipment import DistrictEquipmentType, Equipment, EquipmentType
from hets.models.rental_agreement import LocalAreaRotationList, RentalAgreement
from hets.models.rental_request import (
    RentalRequest,
    RentalRequestHistory,
    RentalRequestNote,
    RentalRequestRotationList,
)

__all__ = [
    "LocalArea",
    "Project",
    "EquipmentType",
    "DistrictEquipmentType",
    "Equipment",
    "RentalAgreement",
    "LocalAreaRotationList",
    "RentalRequest",
    "RentalRequestRotationList",
    "RentalRequestNote",
    "RentalRequestHistory",
]
