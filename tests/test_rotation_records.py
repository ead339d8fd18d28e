"""Tests for entry classification and pointer slots."""

from factories import make_entry

from hets.rotation import (
    EntryState,
    EquipmentRecord,
    PointerBlock,
    RotationPointer,
    classify,
    classify_block,
    hired_count,
    is_hired,
)


def test_yes_and_no_resolve_an_entry():
    assert classify(make_entry(1, 1, 1, response="Yes")) is EntryState.RESOLVED
    assert classify(make_entry(1, 1, 1, response="No")) is EntryState.RESOLVED


def test_responses_compare_case_insensitively():
    assert classify(make_entry(1, 1, 1, response="yes")) is EntryState.RESOLVED
    assert classify(make_entry(1, 1, 1, response=" NO ")) is EntryState.RESOLVED


def test_answered_force_hire_is_resolved():
    entry = make_entry(1, 1, 1, response="Yes", force_hire=True)
    assert classify(entry) is EntryState.RESOLVED


def test_unanswered_force_hire_is_open():
    assert classify(make_entry(1, 1, 1, force_hire=True)) is EntryState.FORCE_HIRE_OPEN


def test_blank_or_unknown_response_is_awaiting():
    assert classify(make_entry(1, 1, 1)) is EntryState.AWAITING_RESPONSE
    assert classify(make_entry(1, 1, 1, response="")) is EntryState.AWAITING_RESPONSE
    assert classify(make_entry(1, 1, 1, response="Maybe")) is EntryState.AWAITING_RESPONSE


def test_hired_counts_yes_and_force_hire_once():
    entries = [
        make_entry(1, 1, 1, response="Yes"),
        make_entry(2, 1, 2, force_hire=True),
        make_entry(3, 2, 3, response="Yes", force_hire=True),
        make_entry(4, 2, 4, response="No"),
        make_entry(5, 3, 5),
    ]
    assert [is_hired(e) for e in entries] == [True, True, True, False, False]
    assert hired_count(entries) == 3


def test_classify_block_two_block_type():
    assert classify_block(1, 2) is PointerBlock.BLOCK_1
    assert classify_block(2, 2) is PointerBlock.BLOCK_2
    assert classify_block(3, 2) is PointerBlock.OPEN


def test_classify_block_missing_block_is_open():
    assert classify_block(None, 2) is PointerBlock.OPEN


def test_classify_block_single_block_type():
    # block 2 is the open block when there is only one seniority block
    assert classify_block(1, 1) is PointerBlock.BLOCK_1
    assert classify_block(2, 1) is PointerBlock.OPEN


def test_classify_block_dump_truck_third_block_uses_open_slot():
    assert classify_block(3, 3) is PointerBlock.OPEN
    assert classify_block(4, 3) is PointerBlock.OPEN


def test_pointer_at_populates_exactly_one_slot():
    equipment = EquipmentRecord(id=7, block_number=2, seniority=55.5)

    for slot in PointerBlock:
        pointer = RotationPointer.at(slot, equipment)
        assert pointer.populated == 1
        assert pointer.current_id == 7
        assert pointer.slot is slot

    pointer = RotationPointer.at(PointerBlock.BLOCK_2, equipment)
    assert pointer.block2_id == 7
    assert pointer.block2_seniority == 55.5
    assert pointer.block1_id is None
    assert pointer.open_id is None


def test_empty_pointer_has_no_current_id():
    pointer = RotationPointer()
    assert pointer.current_id is None
    assert pointer.populated == 0
