"""Tests for where a new rotation list starts and how it is renumbered."""

from factories import make_entry

from hets.rotation import PointerBlock, find_continuation, setup_new_rotation_list
from hets.rotation.carry_over import group_by_block


def excavator_list():
    """Fresh E1, E2 (block 1) and E3 (block 2) list."""
    return [make_entry(1, 1, 1), make_entry(2, 1, 2), make_entry(3, 2, 3)]


def order(setup):
    return [(e.equipment_id, e.sort_order) for e in setup.entries]


def test_first_request_of_fiscal_year_starts_at_top():
    setup = setup_new_rotation_list(excavator_list(), None, number_of_blocks=2)

    assert order(setup) == [(1, 1), (2, 2), (3, 3)]
    assert setup.first_on_rotation_list_id == 1
    assert setup.pointer.slot is PointerBlock.BLOCK_1
    assert setup.pointer.block1_id == 1
    assert setup.pointer.block1_seniority == 99.0
    assert setup.pointer.populated == 1
    assert setup.carried_over is False


def test_continues_after_answered_owner():
    previous = [
        make_entry(1, 1, 1, response="Yes"),
        make_entry(2, 1, 2),
        make_entry(3, 2, 3),
    ]
    setup = setup_new_rotation_list(excavator_list(), previous, number_of_blocks=2)

    assert order(setup) == [(2, 1), (1, 2), (3, 3)]
    assert setup.first_on_rotation_list_id == 2
    assert setup.pointer.block1_id == 2
    assert setup.pointer.populated == 1
    assert setup.carried_over is True


def test_fully_answered_block_wraps_to_its_first_owner():
    previous = [
        make_entry(1, 1, 1, response="No"),
        make_entry(2, 1, 2, response="Yes"),
        make_entry(3, 2, 3),
    ]
    setup = setup_new_rotation_list(excavator_list(), previous, number_of_blocks=2)

    # wraps within block 1 instead of moving on to block 2
    assert setup.first_on_rotation_list_id == 1
    assert setup.pointer.slot is PointerBlock.BLOCK_1
    assert order(setup) == [(1, 1), (2, 2), (3, 3)]
    assert setup.carried_over is True


def test_single_member_block_never_wraps():
    entries = [make_entry(1, 1, 1), make_entry(3, 2, 2)]
    previous = [make_entry(1, 1, 1, response="Yes"), make_entry(3, 2, 2)]
    setup = setup_new_rotation_list(entries, previous, number_of_blocks=2)

    assert setup.first_on_rotation_list_id == 1
    assert setup.carried_over is False
    assert order(setup) == [(1, 1), (3, 2)]


def test_later_unanswered_owner_overrides_wrap():
    entries = [make_entry(1, 1, 1), make_entry(6, 1, 2)]
    previous = [
        make_entry(1, 1, 1, response="Yes"),
        make_entry(2, 1, 2, response="Yes"),
        make_entry(9, 1, 3, response="No"),
        make_entry(6, 1, 4),
    ]
    setup = setup_new_rotation_list(entries, previous, number_of_blocks=2)

    assert setup.first_on_rotation_list_id == 6
    assert order(setup) == [(6, 1), (1, 2)]


def test_skips_owners_no_longer_available():
    entries = [make_entry(1, 1, 1), make_entry(4, 1, 2)]
    previous = [
        make_entry(1, 1, 1, response="Yes"),
        make_entry(2, 1, 2),
        make_entry(4, 1, 3),
    ]
    setup = setup_new_rotation_list(entries, previous, number_of_blocks=2)

    assert setup.first_on_rotation_list_id == 4
    assert order(setup) == [(4, 1), (1, 2)]


def test_wrap_needs_first_owner_on_new_list():
    entries = [make_entry(2, 1, 1), make_entry(4, 1, 2)]
    previous = [make_entry(1, 1, 1, response="No"), make_entry(2, 1, 2, response="Yes")]
    setup = setup_new_rotation_list(entries, previous, number_of_blocks=2)

    assert setup.carried_over is False
    assert setup.first_on_rotation_list_id == 2
    assert order(setup) == [(2, 1), (4, 2)]


def test_each_block_rotates_independently():
    entries = [make_entry(1, 1, 1), make_entry(2, 1, 2), make_entry(3, 2, 3), make_entry(4, 2, 4)]
    previous = [
        make_entry(1, 1, 1, response="Yes"),
        make_entry(2, 1, 2),
        make_entry(3, 2, 3, response="No"),
        make_entry(4, 2, 4),
    ]
    setup = setup_new_rotation_list(entries, previous, number_of_blocks=2)

    assert order(setup) == [(2, 1), (1, 2), (4, 3), (3, 4)]
    assert setup.first_on_rotation_list_id == 2


def test_starts_in_first_non_empty_block():
    entries = [make_entry(3, 2, 1), make_entry(5, 2, 2), make_entry(8, 3, 3)]
    previous = [make_entry(3, 2, 1, response="Yes"), make_entry(5, 2, 2)]
    setup = setup_new_rotation_list(entries, previous, number_of_blocks=2)

    assert setup.first_on_rotation_list_id == 5
    assert setup.pointer.slot is PointerBlock.BLOCK_2
    assert setup.pointer.block2_id == 5
    assert setup.pointer.block1_id is None
    assert setup.pointer.open_id is None
    assert order(setup) == [(5, 1), (3, 2), (8, 3)]


def test_open_block_start_sets_open_pointer():
    entries = [make_entry(8, 3, 1), make_entry(9, 3, 2)]
    previous = [make_entry(8, 3, 1, response="No"), make_entry(9, 3, 2)]
    setup = setup_new_rotation_list(entries, previous, number_of_blocks=2)

    assert setup.first_on_rotation_list_id == 9
    assert setup.pointer.slot is PointerBlock.OPEN
    assert setup.pointer.open_id == 9
    assert setup.pointer.populated == 1


def test_previous_request_with_empty_list_defaults_to_top():
    setup = setup_new_rotation_list(excavator_list(), [], number_of_blocks=2)

    assert setup.first_on_rotation_list_id == 1
    assert setup.carried_over is False
    assert order(setup) == [(1, 1), (2, 2), (3, 3)]


def test_empty_list_has_no_starting_point():
    setup = setup_new_rotation_list([], None, number_of_blocks=2)

    assert setup.entries == []
    assert setup.first_on_rotation_list_id is None
    assert setup.pointer is None


def test_sort_order_stays_contiguous_after_renumbering():
    entries = [make_entry(i, 1 if i <= 4 else 2, i) for i in range(1, 8)]
    previous = [make_entry(i, 1 if i <= 4 else 2, i, response="No" if i in (1, 2, 5) else None)
                for i in range(1, 8)]
    setup = setup_new_rotation_list(entries, previous, number_of_blocks=2)

    assert sorted(e.sort_order for e in setup.entries) == list(range(1, 8))
    assert order(setup)[0] == (3, 1)


def test_find_continuation_nothing_answered_resumes_at_first_waiting():
    block = [make_entry(1, 1, 1), make_entry(2, 1, 2)]
    continuation = find_continuation(block, [make_entry(1, 1, 1), make_entry(2, 1, 2)])

    assert continuation.is_set
    assert continuation.position == 0
    assert continuation.equipment.id == 1


def test_find_continuation_empty_previous_block_is_unset():
    continuation = find_continuation([], [make_entry(1, 1, 1)])

    assert not continuation.is_set
    assert continuation.position == 0


def test_group_by_block_leaves_out_unknown_blocks():
    entries = [
        make_entry(1, 1, 1),
        make_entry(9, 7, 2),
        make_entry(4, 3, 3),
        make_entry(8, None, 4),
        make_entry(3, 2, 5),
    ]

    groups = group_by_block(entries, number_of_blocks=2)

    assert {b: [e.equipment_id for e in group] for b, group in groups.items()} == {
        1: [1],
        2: [3],
        3: [4],
    }
