"""Tests for the seniority block count per equipment category."""

import pytest

from hets.config import Settings
from hets.services.scoring_rules import (
    CATEGORY_DUMP_TRUCK,
    SeniorityScoringRules,
    get_block_count,
)


def test_default_block_counts(test_settings):
    assert get_block_count(False, test_settings) == 2
    assert get_block_count(True, test_settings) == 3


def test_block_counts_follow_settings():
    settings = Settings(default_total_blocks=1, dump_truck_total_blocks=4)

    assert get_block_count(False, settings) == 1
    assert get_block_count(True, settings) == 4


def test_category_lookup(test_settings):
    rules = SeniorityScoringRules(test_settings)

    assert rules.get_total_blocks() == 2
    assert rules.get_total_blocks(CATEGORY_DUMP_TRUCK) == 3


def test_unknown_category_raises(test_settings):
    with pytest.raises(KeyError):
        SeniorityScoringRules(test_settings).get_total_blocks("Crane")
