"""
LocalArea and Project models.
Maps to the local_areas and projects tables in PostgreSQL.
"""

from datetime import datetime
from typing import TYPE_CHECKING, List

from sqlalchemy import DateTime, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from hets.database import Base

if TYPE_CHECKING:
    from hets.models.equipment import Equipment


class LocalArea(Base):
    """Local area - the administrative unit rotation lists are scoped to."""

    __tablename__ = "local_areas"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    local_area_number: Mapped[int] = mapped_column(Integer, nullable=False)
    name: Mapped[str] = mapped_column(String(150), nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow, nullable=False)

    equipment: Mapped[List["Equipment"]] = relationship(
        "Equipment",
        back_populates="local_area",
    )

    def __repr__(self) -> str:
        return f"<LocalArea {self.local_area_number} {self.name}>"


class Project(Base):
    """Project that rental requests and agreements are raised against."""

    __tablename__ = "projects"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow, nullable=False)

    def __repr__(self) -> str:
        return f"<Project {self.name}>"
