"""
Seniority scoring rules provider.

Supplies the configured number of seniority blocks per equipment category.
"""

from hets.config import Settings, get_settings

CATEGORY_DEFAULT = "Default"
CATEGORY_DUMP_TRUCK = "DumpTruck"


class SeniorityScoringRules:
    """Block counts per equipment category, read from settings."""

    def __init__(self, settings: Settings | None = None):
        settings = settings or get_settings()
        self._total_blocks = {
            CATEGORY_DEFAULT: settings.default_total_blocks,
            CATEGORY_DUMP_TRUCK: settings.dump_truck_total_blocks,
        }

    def get_total_blocks(self, category: str = CATEGORY_DEFAULT) -> int:
        """Seniority blocks for a category, not counting the open block."""
        if category not in self._total_blocks:
            raise KeyError(f"Unknown equipment category: {category}")
        return self._total_blocks[category]


def get_block_count(is_dump_truck: bool, settings: Settings | None = None) -> int:
    rules = SeniorityScoringRules(settings)
    return rules.get_total_blocks(CATEGORY_DUMP_TRUCK if is_dump_truck else CATEGORY_DEFAULT)
