"""
RentalRequest and its child tables.
Maps to rental_requests, rental_request_rotation_list, rental_request_notes
and rental_request_history.
"""

from datetime import date, datetime
from typing import TYPE_CHECKING, List, Optional

from sqlalchemy import (
    Boolean,
    Date,
    DateTime,
    Float,
    ForeignKey,
    Integer,
    String,
    Text,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from hets.database import Base

if TYPE_CHECKING:
    from hets.models.equipment import DistrictEquipmentType, Equipment
    from hets.models.local_area import LocalArea, Project
    from hets.models.rental_agreement import RentalAgreement

REQUEST_STATUS_NEW = "New"
REQUEST_STATUS_IN_PROGRESS = "In Progress"
REQUEST_STATUS_COMPLETE = "Complete"


class RentalRequest(Base):
    """A request for N pieces of one equipment type in one local area."""

    __tablename__ = "rental_requests"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    local_area_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("local_areas.id"),
        nullable=False,
    )
    district_equipment_type_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("district_equipment_types.id"),
        nullable=False,
    )
    project_id: Mapped[Optional[int]] = mapped_column(
        Integer,
        ForeignKey("projects.id", ondelete="SET NULL"),
        nullable=True,
    )
    status: Mapped[str] = mapped_column(
        String(50), default=REQUEST_STATUS_IN_PROGRESS, nullable=False
    )
    equipment_count: Mapped[int] = mapped_column(Integer, default=1, nullable=False)
    expected_hours: Mapped[Optional[float]] = mapped_column(Float, nullable=True)
    expected_start_date: Mapped[Optional[date]] = mapped_column(Date, nullable=True)
    expected_end_date: Mapped[Optional[date]] = mapped_column(Date, nullable=True)
    first_on_rotation_list_id: Mapped[Optional[int]] = mapped_column(
        Integer,
        ForeignKey("equipment.id", ondelete="SET NULL"),
        nullable=True,
    )
    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow, nullable=False)

    # Relationships
    local_area: Mapped["LocalArea"] = relationship("LocalArea")
    district_equipment_type: Mapped["DistrictEquipmentType"] = relationship("DistrictEquipmentType")
    project: Mapped[Optional["Project"]] = relationship("Project")
    first_on_rotation_list: Mapped[Optional["Equipment"]] = relationship("Equipment")

    rotation_list: Mapped[List["RentalRequestRotationList"]] = relationship(
        "RentalRequestRotationList",
        back_populates="rental_request",
        cascade="all, delete-orphan",
        order_by="RentalRequestRotationList.rotation_list_sort_order",
    )
    notes: Mapped[List["RentalRequestNote"]] = relationship(
        "RentalRequestNote",
        back_populates="rental_request",
        cascade="all, delete-orphan",
    )
    history: Mapped[List["RentalRequestHistory"]] = relationship(
        "RentalRequestHistory",
        back_populates="rental_request",
        cascade="all, delete-orphan",
    )

    @property
    def is_in_progress(self) -> bool:
        return self.status.lower() == REQUEST_STATUS_IN_PROGRESS.lower()

    @property
    def is_complete(self) -> bool:
        return self.status.lower() == REQUEST_STATUS_COMPLETE.lower()

    def __repr__(self) -> str:
        return f"<RentalRequest {self.id} ({self.status})>"


class RentalRequestRotationList(Base):
    """One (request, equipment) pairing on a request's call-out list."""

    __tablename__ = "rental_request_rotation_list"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    rental_request_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("rental_requests.id", ondelete="CASCADE"),
        nullable=False,
    )
    equipment_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("equipment.id", ondelete="CASCADE"),
        nullable=False,
    )
    rotation_list_sort_order: Mapped[int] = mapped_column(Integer, nullable=False)
    is_force_hire: Mapped[Optional[bool]] = mapped_column(Boolean, nullable=True)
    was_asked: Mapped[Optional[bool]] = mapped_column(Boolean, nullable=True)
    asked_date_time: Mapped[Optional[datetime]] = mapped_column(DateTime, nullable=True)
    offer_response: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)
    offer_refusal_reason: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)
    offer_response_datetime: Mapped[Optional[datetime]] = mapped_column(DateTime, nullable=True)
    offer_response_note: Mapped[Optional[str]] = mapped_column(String(2048), nullable=True)
    note: Mapped[Optional[str]] = mapped_column(String(2048), nullable=True)
    rental_agreement_id: Mapped[Optional[int]] = mapped_column(
        Integer,
        ForeignKey("rental_agreements.id", ondelete="SET NULL"),
        nullable=True,
    )
    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow, nullable=False)

    rental_request: Mapped["RentalRequest"] = relationship(
        "RentalRequest", back_populates="rotation_list"
    )
    equipment: Mapped["Equipment"] = relationship("Equipment")
    rental_agreement: Mapped[Optional["RentalAgreement"]] = relationship("RentalAgreement")

    def __repr__(self) -> str:
        return (
            f"<RentalRequestRotationList {self.rotation_list_sort_order}: "
            f"Equipment {self.equipment_id}>"
        )


class RentalRequestNote(Base):
    """Free-text note attached to a rental request."""

    __tablename__ = "rental_request_notes"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    rental_request_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("rental_requests.id", ondelete="CASCADE"),
        nullable=False,
    )
    text: Mapped[str] = mapped_column(String(2048), nullable=False)
    is_no_longer_relevant: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow, nullable=False)

    rental_request: Mapped["RentalRequest"] = relationship("RentalRequest", back_populates="notes")


class RentalRequestHistory(Base):
    """Audit trail entry for a rental request."""

    __tablename__ = "rental_request_history"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    rental_request_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("rental_requests.id", ondelete="CASCADE"),
        nullable=False,
    )
    history_text: Mapped[str] = mapped_column(Text, nullable=False)
    created_date: Mapped[datetime] = mapped_column(
        DateTime, default=datetime.utcnow, nullable=False
    )

    rental_request: Mapped["RentalRequest"] = relationship(
        "RentalRequest", back_populates="history"
    )
