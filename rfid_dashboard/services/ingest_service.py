# =======================================================================================
# rfid_dashboard/services/ingest_service.py - Device Event Ingestion
# =======================================================================================
import logging
from typing import Optional

from ..database import DatabaseManager
from ..models.schemas import AccessEvent
from ..utils.validators import InputValidator
from .broadcaster import Broadcaster
from .event_store import EventLogStore

logger = logging.getLogger(__name__)


class IngestService:
    """Validates, persists and publishes device-reported RFID events."""

    def __init__(self, db: DatabaseManager, store: EventLogStore, broadcaster: Broadcaster):
        self.db = db
        self.store = store
        self.broadcaster = broadcaster

    def ingest(self, user_name: Optional[str], card_uid: Optional[str],
               action: Optional[str], status: Optional[str]) -> AccessEvent:
        """
        Persist the event and offer it to live viewers before returning.
        A storage failure raises StorageError and nothing is published.
        """
        fields = InputValidator.require_fields(
            {"user": user_name, "uid": card_uid, "action": action, "status": status}
        )

        # commit happens when the block exits; publish only after that
        with self.db.get_connection() as conn:
            event = self.store.insert(
                conn, fields["user"], fields["uid"], fields["action"], fields["status"]
            )

        logger.info("RFID event %s stored: %s %s (%s)",
                    event.id, event.user_name, event.action, event.status)

        self.broadcaster.publish(event)
        return event
