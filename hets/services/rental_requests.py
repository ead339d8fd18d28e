"""
Rental request service.

Loads requests, equipment and agreements through the async session, runs
the rotation engine on flat records, and writes the results back. All work
happens inside the caller's transaction; the pointer row of the area and
equipment type is locked with SELECT ... FOR UPDATE for the rest of it.
"""

import logging
from datetime import date, datetime
from typing import Optional

from sqlalchemy import func, select
from sqlalchemy.dialects.postgresql import insert
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from hets.config import Settings, get_settings
from hets.exceptions import (
    AgreementsExistError,
    CountBelowHiredError,
    InvalidRequestError,
    NotFoundError,
    RequestCompleteError,
    RequestInProgressError,
    RequestNotInProgressError,
)
from hets.models import (
    DistrictEquipmentType,
    Equipment,
    LocalArea,
    LocalAreaRotationList,
    Project,
    RentalAgreement,
    RentalRequest,
    RentalRequestHistory,
    RentalRequestNote,
    RentalRequestRotationList,
)
from hets.models.equipment import EQUIPMENT_STATUS_APPROVED
from hets.models.rental_agreement import AGREEMENT_STATUS_ACTIVE
from hets.models.rental_request import REQUEST_STATUS_COMPLETE, REQUEST_STATUS_IN_PROGRESS
from hets.rotation import (
    AdvanceResult,
    advance_on_outcome,
    agreement_fiscal_year,
    available_in_block,
    block_numbers,
    build_rotation_list,
    fiscal_year_start,
    hired_count,
    next_agreement_number,
    setup_new_rotation_list,
)
from hets.rotation.fiscal import agreement_number_prefix
from hets.rotation.records import RotationPointer
from hets.schemas import (
    HistoryCreate,
    NoteCreate,
    RentalRequestCreate,
    RentalRequestUpdate,
    RotationListEntryUpdate,
)
from hets.services.rotation_records import (
    apply_pointer,
    describe_slot,
    entry_record,
    equipment_record,
    pointer_record,
)
from hets.services.scoring_rules import get_block_count

logger = logging.getLogger(__name__)

# Outcome fields copied from a rotation list update onto the entry
ENTRY_UPDATE_FIELDS = (
    "is_force_hire",
    "was_asked",
    "asked_date_time",
    "offer_response",
    "offer_refusal_reason",
    "offer_response_datetime",
    "offer_response_note",
    "note",
)


def utcnow() -> datetime:
    return datetime.utcnow()


def _request_options(*, with_notes: bool = False, with_history: bool = False) -> list:
    """Eager loads needed to render a request and its rotation list."""
    options = [
        selectinload(RentalRequest.local_area),
        selectinload(RentalRequest.district_equipment_type).selectinload(
            DistrictEquipmentType.equipment_type
        ),
        selectinload(RentalRequest.project),
        selectinload(RentalRequest.rotation_list).selectinload(RentalRequestRotationList.equipment),
        selectinload(RentalRequest.rotation_list).selectinload(
            RentalRequestRotationList.rental_agreement
        ),
    ]
    if with_notes:
        options.append(selectinload(RentalRequest.notes))
    if with_history:
        options.append(selectinload(RentalRequest.history))
    return options


class RentalRequestService:
    """Operations on rental requests and their rotation lists."""

    def __init__(self, db: AsyncSession, settings: Settings | None = None):
        self.db = db
        self.settings = settings or get_settings()

    # ---------------------------------------------------------
    # Loading
    # ---------------------------------------------------------

    async def get(self, request_id: int, **options) -> RentalRequest:
        result = await self.db.execute(
            select(RentalRequest)
            .where(RentalRequest.id == request_id)
            .options(*_request_options(**options))
        )
        request = result.scalar_one_or_none()
        if not request:
            raise NotFoundError("Rental request", request_id)
        return request

    def number_of_blocks(self, request: RentalRequest) -> int:
        """Seniority blocks for the request's equipment type, open block excluded."""
        det = request.district_equipment_type
        return get_block_count(bool(det and det.is_dump_truck), self.settings)

    # ---------------------------------------------------------
    # Create / update / cancel
    # ---------------------------------------------------------

    async def create(self, data: RentalRequestCreate) -> RentalRequest:
        local_area = await self.db.get(LocalArea, data.local_area_id)
        if not local_area:
            raise InvalidRequestError(f"Local area {data.local_area_id} does not exist")

        result = await self.db.execute(
            select(DistrictEquipmentType)
            .where(DistrictEquipmentType.id == data.district_equipment_type_id)
            .options(selectinload(DistrictEquipmentType.equipment_type))
        )
        det = result.scalar_one_or_none()
        if not det:
            raise InvalidRequestError(
                f"District equipment type {data.district_equipment_type_id} does not exist"
            )

        project = None
        if data.project_id is not None:
            project = await self.db.get(Project, data.project_id)
            if not project:
                raise InvalidRequestError(f"Project {data.project_id} does not exist")

        await self._lock_pointer(local_area.id, det.id)
        if await self._in_progress_exists(local_area.id, det.id):
            raise RequestInProgressError()

        request = RentalRequest(
            local_area_id=local_area.id,
            local_area=local_area,
            district_equipment_type_id=det.id,
            district_equipment_type=det,
            project_id=data.project_id,
            project=project,
            status=REQUEST_STATUS_IN_PROGRESS,
            equipment_count=data.equipment_count,
            expected_hours=data.expected_hours,
            expected_start_date=data.expected_start_date,
            expected_end_date=data.expected_end_date,
            created_at=utcnow(),
            rotation_list=[],
        )
        self.db.add(request)
        await self.db.flush()

        await self.build_rotation_list(request)
        await self.db.flush()

        logger.info(
            "Created rental request %s for area %s type %s with %s entries",
            request.id,
            local_area.id,
            det.id,
            len(request.rotation_list),
        )
        return request

    async def _in_progress_exists(self, local_area_id: int, det_id: int) -> bool:
        result = await self.db.execute(
            select(func.count(RentalRequest.id)).where(
                RentalRequest.local_area_id == local_area_id,
                RentalRequest.district_equipment_type_id == det_id,
                func.lower(RentalRequest.status) == REQUEST_STATUS_IN_PROGRESS.lower(),
            )
        )
        return (result.scalar() or 0) > 0

    async def update(self, request_id: int, data: RentalRequestUpdate) -> RentalRequest:
        request = await self.get(request_id)
        update_data = data.model_dump(exclude_unset=True)

        new_count = update_data.get("equipment_count") or request.equipment_count
        hired = hired_count([entry_record(row) for row in request.rotation_list])

        if new_count < request.equipment_count and hired > new_count:
            raise CountBelowHiredError()

        for field, value in update_data.items():
            if field == "equipment_count" and value is None:
                continue
            setattr(request, field, value)

        if request.is_in_progress and hired >= request.equipment_count:
            self._complete(request)

        await self.db.flush()
        return request

    async def cancel(self, request_id: int) -> RentalRequest:
        request = await self.get(request_id, with_notes=True, with_history=True)

        if any(row.rental_agreement_id is not None for row in request.rotation_list):
            raise AgreementsExistError()
        if request.is_complete:
            raise RequestCompleteError()

        await self.db.delete(request)
        await self.db.flush()

        logger.info("Cancelled rental request %s", request_id)
        return request

    def _complete(self, request: RentalRequest) -> None:
        request.status = REQUEST_STATUS_COMPLETE
        request.first_on_rotation_list_id = None
        logger.info("Rental request %s complete", request.id)

    # ---------------------------------------------------------
    # Search
    # ---------------------------------------------------------

    async def search(
        self,
        local_areas: Optional[list[int]] = None,
        project: Optional[str] = None,
        status: Optional[str] = None,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> list[RentalRequest]:
        query = select(RentalRequest).options(
            selectinload(RentalRequest.local_area),
            selectinload(RentalRequest.district_equipment_type),
            selectinload(RentalRequest.project),
        )

        if local_areas:
            query = query.where(RentalRequest.local_area_id.in_(local_areas))
        if project:
            query = query.join(RentalRequest.project).where(Project.name.ilike(f"%{project}%"))
        if status:
            query = query.where(func.lower(RentalRequest.status) == status.lower())
        if start_date:
            query = query.where(RentalRequest.expected_start_date >= start_date)
        if end_date:
            query = query.where(RentalRequest.expected_start_date <= end_date)

        query = query.order_by(RentalRequest.expected_start_date, RentalRequest.id)
        result = await self.db.execute(query)
        return list(result.scalars().all())

    # ---------------------------------------------------------
    # Rotation list
    # ---------------------------------------------------------

    async def build_rotation_list(self, request: RentalRequest) -> None:
        """
        Build the request's rotation list and set up the area pointer.

        Does nothing when the local area, district equipment type or its
        equipment type is missing.
        """
        det = request.district_equipment_type
        if request.local_area is None or det is None or det.equipment_type is None:
            logger.warning(
                "Rental request %s is missing local area or equipment type; "
                "rotation list not built",
                request.id,
            )
            return

        number_of_blocks = get_block_count(det.is_dump_truck, self.settings)
        equipment_by_id: dict[int, Equipment] = {}
        blocks = []

        for block in block_numbers(number_of_blocks):
            block_equipment = await self._approved_equipment(request, block)
            equipment_by_id.update((e.id, e) for e in block_equipment)
            busy = await self._busy_equipment_ids([e.id for e in block_equipment])
            blocks.append(available_in_block([equipment_record(e) for e in block_equipment], busy))

        entries = build_rotation_list(blocks)
        previous = await self._previous_rotation_entries(request)
        setup = setup_new_rotation_list(entries, previous, number_of_blocks)

        for entry in setup.entries:
            request.rotation_list.append(
                RentalRequestRotationList(
                    equipment_id=entry.equipment_id,
                    equipment=equipment_by_id[entry.equipment_id],
                    rotation_list_sort_order=entry.sort_order,
                    rental_agreement=None,
                    created_at=utcnow(),
                )
            )

        request.first_on_rotation_list_id = setup.first_on_rotation_list_id
        if setup.pointer is not None:
            await self._save_pointer(request, setup.pointer)

        logger.info(
            "Rotation list for request %s: %s entries, first on list %s",
            request.id,
            len(setup.entries),
            setup.first_on_rotation_list_id,
        )

    async def _approved_equipment(self, request: RentalRequest, block: int) -> list[Equipment]:
        result = await self.db.execute(
            select(Equipment)
            .where(
                Equipment.local_area_id == request.local_area_id,
                Equipment.district_equipment_type_id == request.district_equipment_type_id,
                Equipment.block_number == block,
                func.lower(Equipment.status) == EQUIPMENT_STATUS_APPROVED.lower(),
            )
            .order_by(Equipment.number_in_block, Equipment.id)
        )
        return list(result.scalars().all())

    async def _busy_equipment_ids(self, equipment_ids: list[int]) -> set[int]:
        """Equipment already working under an active rental agreement."""
        if not equipment_ids:
            return set()
        result = await self.db.execute(
            select(RentalAgreement.equipment_id).where(
                RentalAgreement.equipment_id.in_(equipment_ids),
                func.lower(RentalAgreement.status) == AGREEMENT_STATUS_ACTIVE.lower(),
            )
        )
        return set(result.scalars().all())

    async def _previous_rotation_entries(self, request: RentalRequest):
        """Rotation list of the latest earlier request this fiscal year, if any."""
        query = (
            select(RentalRequest)
            .where(
                RentalRequest.local_area_id == request.local_area_id,
                RentalRequest.district_equipment_type_id == request.district_equipment_type_id,
                RentalRequest.created_at >= fiscal_year_start(utcnow().date()),
            )
            .options(
                selectinload(RentalRequest.rotation_list).selectinload(
                    RentalRequestRotationList.equipment
                )
            )
            .order_by(RentalRequest.created_at.desc(), RentalRequest.id.desc())
            .limit(1)
        )
        if request.id is not None:
            query = query.where(RentalRequest.id != request.id)

        result = await self.db.execute(query)
        previous = result.scalar_one_or_none()
        if previous is None:
            return None

        logger.debug("Carrying rotation over from rental request %s", previous.id)
        return [entry_record(row) for row in previous.rotation_list]

    async def _load_pointer(
        self, local_area_id: int, det_id: int
    ) -> Optional[LocalAreaRotationList]:
        result = await self.db.execute(
            select(LocalAreaRotationList)
            .where(
                LocalAreaRotationList.local_area_id == local_area_id,
                LocalAreaRotationList.district_equipment_type_id == det_id,
            )
            .with_for_update()
        )
        return result.scalar_one_or_none()

    async def _lock_pointer(self, local_area_id: int, det_id: int) -> LocalAreaRotationList:
        """
        Lock the pointer row of an area and type, inserting an empty one first.

        Creates for the same pair wait here until the holder commits, so the
        In Progress check that follows sees the other request.
        """
        stmt = insert(LocalAreaRotationList).values(
            local_area_id=local_area_id,
            district_equipment_type_id=det_id,
            updated_at=utcnow(),
        )
        await self.db.execute(
            stmt.on_conflict_do_nothing(constraint="local_area_rotation_lists_unique")
        )
        return await self._load_pointer(local_area_id, det_id)

    async def _save_pointer(
        self,
        request: RentalRequest,
        pointer: RotationPointer,
        row: Optional[LocalAreaRotationList] = None,
    ) -> LocalAreaRotationList:
        if row is None:
            row = await self._load_pointer(
                request.local_area_id, request.district_equipment_type_id
            )
        if row is None:
            row = LocalAreaRotationList(
                local_area_id=request.local_area_id,
                district_equipment_type_id=request.district_equipment_type_id,
            )
            self.db.add(row)

        apply_pointer(row, pointer)
        row.updated_at = utcnow()
        logger.debug(
            "Pointer for area %s type %s set to equipment %s (%s)",
            request.local_area_id,
            request.district_equipment_type_id,
            pointer.current_id,
            describe_slot(pointer),
        )
        return row

    async def recalc(self, request_id: int) -> RentalRequest:
        """Discard and rebuild the rotation list of an In Progress request."""
        request = await self.get(request_id)
        if not request.is_in_progress:
            raise RequestNotInProgressError()

        request.rotation_list.clear()
        await self.db.flush()

        await self.build_rotation_list(request)
        await self.db.flush()
        return request

    async def update_rotation_entry(
        self, request_id: int, data: RotationListEntryUpdate
    ) -> tuple[RentalRequest, RentalRequestRotationList, AdvanceResult, Optional[RentalAgreement]]:
        """
        Record an offer outcome and move the area pointer on.

        Returns the request, the updated entry, the engine result and the
        agreement created by a hire, if any.
        """
        request = await self.get(request_id)
        if not request.is_in_progress:
            raise RequestNotInProgressError()

        row = next((r for r in request.rotation_list if r.id == data.id), None)
        if row is None:
            raise NotFoundError("Rotation list entry", data.id)

        outcome = data.model_dump(include=set(ENTRY_UPDATE_FIELDS), exclude_unset=True)
        for field, value in outcome.items():
            setattr(row, field, value)

        entries = [entry_record(r) for r in request.rotation_list]
        updated = next(e for e in entries if e.entry_id == row.id)

        pointer_row = await self._load_pointer(
            request.local_area_id, request.district_equipment_type_id
        )
        result = advance_on_outcome(
            entries,
            updated,
            pointer_record(pointer_row),
            request.equipment_count,
            self.number_of_blocks(request),
        )

        agreement = None
        if result.creates_agreement and row.rental_agreement_id is None:
            agreement = await self._create_agreement(request, row)

        if result.pointer is not None:
            await self._save_pointer(request, result.pointer, pointer_row)

        if result.complete:
            self._complete(request)

        await self.db.flush()
        return request, row, result, agreement

    async def _create_agreement(
        self, request: RentalRequest, row: RentalRequestRotationList
    ) -> RentalAgreement:
        now = utcnow()
        fiscal_year = agreement_fiscal_year(now.date())
        area_number = request.local_area.local_area_number
        prefix = agreement_number_prefix(fiscal_year, area_number)

        # Numbers run per local area; hold the area row while reading the highest one
        await self.db.execute(
            select(LocalArea.id).where(LocalArea.id == request.local_area_id).with_for_update()
        )

        result = await self.db.execute(
            select(RentalAgreement.number)
            .join(Equipment, RentalAgreement.equipment_id == Equipment.id)
            .where(
                Equipment.local_area_id == request.local_area_id,
                RentalAgreement.number.like(f"{prefix}%"),
            )
        )
        number = next_agreement_number(result.scalars().all(), fiscal_year, area_number)

        agreement = RentalAgreement(
            number=number,
            status=AGREEMENT_STATUS_ACTIVE,
            equipment_id=row.equipment_id,
            project_id=request.project_id,
            dated_on=now,
            estimate_hours=request.expected_hours,
            estimate_start_work=request.expected_start_date,
            created_at=now,
        )
        self.db.add(agreement)
        await self.db.flush()

        row.rental_agreement = agreement
        row.rental_agreement_id = agreement.id

        logger.info(
            "Created rental agreement %s for equipment %s on request %s",
            number,
            row.equipment_id,
            request.id,
        )
        return agreement

    # ---------------------------------------------------------
    # History and notes
    # ---------------------------------------------------------

    async def _ensure_exists(self, request_id: int) -> None:
        result = await self.db.execute(
            select(RentalRequest.id).where(RentalRequest.id == request_id)
        )
        if result.scalar_one_or_none() is None:
            raise NotFoundError("Rental request", request_id)

    async def get_history(
        self, request_id: int, offset: int = 0, limit: Optional[int] = None
    ) -> list[RentalRequestHistory]:
        await self._ensure_exists(request_id)

        query = (
            select(RentalRequestHistory)
            .where(RentalRequestHistory.rental_request_id == request_id)
            .order_by(RentalRequestHistory.created_date.desc(), RentalRequestHistory.id.desc())
            .offset(offset)
        )
        if limit is not None:
            query = query.limit(limit)

        result = await self.db.execute(query)
        return list(result.scalars().all())

    async def add_history(self, request_id: int, data: HistoryCreate) -> RentalRequestHistory:
        await self._ensure_exists(request_id)

        history = RentalRequestHistory(
            rental_request_id=request_id,
            history_text=data.history_text,
            created_date=data.created_date or utcnow(),
        )
        self.db.add(history)
        await self.db.flush()
        return history

    async def get_notes(self, request_id: int) -> list[RentalRequestNote]:
        """Notes still relevant to the request."""
        await self._ensure_exists(request_id)

        result = await self.db.execute(
            select(RentalRequestNote)
            .where(
                RentalRequestNote.rental_request_id == request_id,
                RentalRequestNote.is_no_longer_relevant.is_(False),
            )
            .order_by(RentalRequestNote.id)
        )
        return list(result.scalars().all())

    async def save_note(self, request_id: int, data: NoteCreate) -> list[RentalRequestNote]:
        await self._ensure_exists(request_id)
        await self._save_note(request_id, data)
        await self.db.flush()
        return await self.get_notes(request_id)

    async def save_notes(self, request_id: int, notes: list[NoteCreate]) -> list[RentalRequestNote]:
        await self._ensure_exists(request_id)
        if not notes:
            raise InvalidRequestError()

        for data in notes:
            await self._save_note(request_id, data)
        await self.db.flush()
        return await self.get_notes(request_id)

    async def _save_note(self, request_id: int, data: NoteCreate) -> RentalRequestNote:
        if data.id is None:
            note = RentalRequestNote(
                rental_request_id=request_id,
                text=data.text,
                is_no_longer_relevant=data.is_no_longer_relevant,
                created_at=utcnow(),
            )
            self.db.add(note)
            return note

        result = await self.db.execute(
            select(RentalRequestNote).where(
                RentalRequestNote.id == data.id,
                RentalRequestNote.rental_request_id == request_id,
            )
        )
        note = result.scalar_one_or_none()
        if not note:
            raise NotFoundError("Note", data.id)

        note.text = data.text
        note.is_no_longer_relevant = data.is_no_longer_relevant
        return note
