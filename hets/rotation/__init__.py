"""
Rotation engine: seniority call-out lists and the per-area "next to ask" pointer.

Pure functions over value records; persistence lives in hets.services.
"""

from hets.rotation.advance import AdvanceResult, advance_on_outcome, next_to_ask
from hets.rotation.builder import (
    available_in_block,
    block_numbers,
    build_rotation_list,
    open_block_number,
)
from hets.rotation.carry_over import (
    Continuation,
    RotationSetup,
    find_continuation,
    setup_new_rotation_list,
)
from hets.rotation.fiscal import (
    agreement_fiscal_year,
    fiscal_year_start,
    format_agreement_number,
    next_agreement_number,
)
from hets.rotation.records import (
    EntryState,
    EquipmentRecord,
    PointerBlock,
    RotationEntry,
    RotationPointer,
    classify,
    classify_block,
    hired_count,
    is_hired,
)

__all__ = [
    "AdvanceResult",
    "advance_on_outcome",
    "next_to_ask",
    "available_in_block",
    "block_numbers",
    "build_rotation_list",
    "open_block_number",
    "Continuation",
    "RotationSetup",
    "find_continuation",
    "setup_new_rotation_list",
    "agreement_fiscal_year",
    "fiscal_year_start",
    "format_agreement_number",
    "next_agreement_number",
    "EntryState",
    "EquipmentRecord",
    "PointerBlock",
    "RotationEntry",
    "RotationPointer",
    "classify",
    "classify_block",
    "hired_count",
    "is_hired",
]
