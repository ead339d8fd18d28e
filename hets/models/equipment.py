"""
EquipmentType, DistrictEquipmentType and Equipment models.
Maps to the equipment_types, district_equipment_types and equipment tables.
"""

from datetime import datetime
from typing import TYPE_CHECKING, Optional

from sqlalchemy import (
    Boolean,
    DateTime,
    Float,
    ForeignKey,
    Index,
    Integer,
    String,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from hets.database import Base

if TYPE_CHECKING:
    from hets.models.local_area import LocalArea

EQUIPMENT_STATUS_APPROVED = "Approved"
EQUIPMENT_STATUS_PENDING = "Pending"
EQUIPMENT_STATUS_ARCHIVED = "Archived"


class EquipmentType(Base):
    """Province-wide equipment category (e.g. Excavator, Dump Truck)."""

    __tablename__ = "equipment_types"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(50), unique=True, nullable=False)
    is_dump_truck: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)

    def __repr__(self) -> str:
        return f"<EquipmentType {self.name}>"


class DistrictEquipmentType(Base):
    """District-specific name for an equipment type."""

    __tablename__ = "district_equipment_types"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    district_equipment_name: Mapped[str] = mapped_column(String(150), nullable=False)
    equipment_type_id: Mapped[Optional[int]] = mapped_column(
        Integer,
        ForeignKey("equipment_types.id", ondelete="SET NULL"),
        nullable=True,
    )

    equipment_type: Mapped[Optional["EquipmentType"]] = relationship("EquipmentType")

    @property
    def is_dump_truck(self) -> bool:
        return bool(self.equipment_type and self.equipment_type.is_dump_truck)

    def __repr__(self) -> str:
        return f"<DistrictEquipmentType {self.district_equipment_name}>"


class Equipment(Base):
    """A registered piece of equipment with its seniority placement."""

    __tablename__ = "equipment"
    __table_args__ = (
        Index(
            "ix_equipment_rotation",
            "local_area_id",
            "district_equipment_type_id",
            "block_number",
        ),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    equipment_code: Mapped[str] = mapped_column(String(25), nullable=False)
    owner_name: Mapped[Optional[str]] = mapped_column(String(150), nullable=True)
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
    # Assigned by the seniority calculation, not by the rotation engine
    block_number: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    number_in_block: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    seniority: Mapped[Optional[float]] = mapped_column(Float, nullable=True)
    status: Mapped[str] = mapped_column(
        String(50), default=EQUIPMENT_STATUS_PENDING, nullable=False
    )
    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow, nullable=False)

    local_area: Mapped["LocalArea"] = relationship("LocalArea", back_populates="equipment")
    district_equipment_type: Mapped["DistrictEquipmentType"] = relationship("DistrictEquipmentType")

    @property
    def is_approved(self) -> bool:
        return self.status.lower() == EQUIPMENT_STATUS_APPROVED.lower()

    def __repr__(self) -> str:
        return f"<Equipment {self.equipment_code} (block {self.block_number})>"
