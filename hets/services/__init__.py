"""
Service layer: persistence around the rotation engine.
"""

from hets.services.rental_requests import RentalRequestService
from hets.services.scoring_rules import SeniorityScoringRules, get_block_count

__all__ = ["RentalRequestService", "SeniorityScoringRules", "get_block_count"]
