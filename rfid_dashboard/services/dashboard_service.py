# =======================================================================================
# rfid_dashboard/services/dashboard_service.py
# =======================================================================================

from typing import Dict

from ..database import DatabaseManager
from .event_store import EventLogStore


class DashboardService:
    """Aggregated usage statistics for the dashboard."""

    def __init__(self, db: DatabaseManager, store: EventLogStore):
        self.db = db
        self.store = store

    def get_summary(self) -> Dict[str, int]:
        """
        Three independent counts read one after another on one connection.
        They are not a single snapshot: inserts landing between the reads may
        show up in a later count and not an earlier one.
        """
        with self.db.get_connection() as conn:
            total = self.store.count_all(conn)
            unique_users = self.store.count_distinct_actors(conn)
            today = self.store.count_today(conn)

        return {
            "totalEntries": total,
            "uniqueUsers": unique_users,
            "todayEntries": today,
        }
