"""Business logic services for the Seating Rules service."""

from .seat_inventory_store import SeatInventoryStore, SqlAlchemySeatInventoryStore
from .seat_rules_service import SeatRulesService, SeatRulesSummary

__all__ = ["SeatInventoryStore", "SqlAlchemySeatInventoryStore", "SeatRulesService", "SeatRulesSummary"]
