# =======================================================================================
# rfid_dashboard/services/event_store.py - Append-only RFID Event Log
# =======================================================================================
from typing import List
from sqlalchemy import text
from sqlalchemy.engine import Connection

from ..database import DatabaseManager
from ..models.schemas import AccessEvent

_SELECT_EVENT = """
    SELECT id, user_name, card_uid, action, status, timestamp
    FROM rfid_logs
"""


class EventLogStore:
    """Owns the rfid_logs table. Rows are inserted once and never updated or deleted."""

    def __init__(self, db: DatabaseManager, max_limit: int = 100):
        self.db = db
        self.max_limit = max_limit

    def insert(self, conn: Connection, user_name: str, card_uid: str,
               action: str, status: str) -> AccessEvent:
        """
        Insert within the caller's transaction and read the row back, so the
        returned event carries the id and timestamp the store assigned.
        """
        result = conn.execute(
            text("""
                INSERT INTO rfid_logs (user_name, card_uid, action, status)
                VALUES (:user_name, :card_uid, :action, :status)
            """),
            {"user_name": user_name, "card_uid": card_uid, "action": action, "status": status},
        )
        row = conn.execute(
            text(_SELECT_EVENT + " WHERE id = :id"),
            {"id": result.lastrowid},
        ).mappings().first()
        return AccessEvent(**row)

    def recent(self, limit: int = None) -> List[AccessEvent]:
        """Newest first, capped at max_limit."""
        limit = min(limit or self.max_limit, self.max_limit)
        rows = self.db.fetch_all(
            _SELECT_EVENT + " ORDER BY timestamp DESC, id DESC LIMIT :limit",
            {"limit": limit},
        )
        return [AccessEvent(**row) for row in rows]

    # ---------- counts used by the dashboard ----------

    def count_all(self, conn: Connection) -> int:
        return int(conn.execute(text("SELECT COUNT(*) FROM rfid_logs")).scalar() or 0)

    def count_distinct_actors(self, conn: Connection) -> int:
        return int(
            conn.execute(text("SELECT COUNT(DISTINCT user_name) FROM rfid_logs")).scalar() or 0
        )

    def count_today(self, conn: Connection) -> int:
        # CURRENT_DATE is evaluated by the store, in the store's clock
        return int(
            conn.execute(
                text("SELECT COUNT(*) FROM rfid_logs WHERE DATE(timestamp) = CURRENT_DATE")
            ).scalar() or 0
        )
