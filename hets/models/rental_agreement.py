"""
RentalAgreement and LocalAreaRotationList models.
Maps to the rental_agreements and local_area_rotation_lists tables.
"""

from datetime import date, datetime
from typing import TYPE_CHECKING, Optional

from sqlalchemy import (
    Date,
    DateTime,
    Float,
    ForeignKey,
    Integer,
    String,
    UniqueConstraint,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from hets.database import Base

if TYPE_CHECKING:
    from hets.models.equipment import Equipment
    from hets.models.local_area import Project

AGREEMENT_STATUS_ACTIVE = "Active"
AGREEMENT_STATUS_COMPLETE = "Complete"


class RentalAgreement(Base):
    """Agreement created when a piece of equipment is hired."""

    __tablename__ = "rental_agreements"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    # Format: {fiscalYear}-{localAreaNumber}-{NNNN}
    number: Mapped[str] = mapped_column(String(30), nullable=False, unique=True)
    status: Mapped[str] = mapped_column(String(50), default=AGREEMENT_STATUS_ACTIVE, nullable=False)
    equipment_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("equipment.id", ondelete="CASCADE"),
        nullable=False,
    )
    project_id: Mapped[Optional[int]] = mapped_column(
        Integer,
        ForeignKey("projects.id", ondelete="SET NULL"),
        nullable=True,
    )
    dated_on: Mapped[Optional[datetime]] = mapped_column(DateTime, nullable=True)
    estimate_hours: Mapped[Optional[float]] = mapped_column(Float, nullable=True)
    estimate_start_work: Mapped[Optional[date]] = mapped_column(Date, nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow, nullable=False)

    equipment: Mapped["Equipment"] = relationship("Equipment")
    project: Mapped[Optional["Project"]] = relationship("Project")

    def __repr__(self) -> str:
        return f"<RentalAgreement {self.number} ({self.status})>"


class LocalAreaRotationList(Base):
    """
    Persistent "next to ask" pointer per (local area, district equipment type).

    At most one of the three ask-next ids is populated at a time.
    """

    __tablename__ = "local_area_rotation_lists"
    __table_args__ = (
        UniqueConstraint(
            "local_area_id",
            "district_equipment_type_id",
            name="local_area_rotation_lists_unique",
        ),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    local_area_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("local_areas.id", ondelete="CASCADE"),
        nullable=False,
    )
    district_equipment_type_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("district_equipment_types.id", ondelete="CASCADE"),
        nullable=False,
    )
    ask_next_block1_id: Mapped[Optional[int]] = mapped_column(
        Integer, ForeignKey("equipment.id", ondelete="SET NULL"), nullable=True
    )
    ask_next_block1_seniority: Mapped[Optional[float]] = mapped_column(Float, nullable=True)
    ask_next_block2_id: Mapped[Optional[int]] = mapped_column(
        Integer, ForeignKey("equipment.id", ondelete="SET NULL"), nullable=True
    )
    ask_next_block2_seniority: Mapped[Optional[float]] = mapped_column(Float, nullable=True)
    ask_next_block_open_id: Mapped[Optional[int]] = mapped_column(
        Integer, ForeignKey("equipment.id", ondelete="SET NULL"), nullable=True
    )
    ask_next_block_open_seniority: Mapped[Optional[float]] = mapped_column(Float, nullable=True)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False
    )

    def __repr__(self) -> str:
        return (
            f"<LocalAreaRotationList area={self.local_area_id} "
            f"type={self.district_equipment_type_id}>"
        )
