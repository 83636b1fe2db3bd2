# =======================================================================================
# rfid_dashboard/api/routes/rfid.py - RFID Event Endpoints
# =======================================================================================
from typing import List
from fastapi import APIRouter, Depends
from ...models.schemas import AccessEvent, IdentityClaim, RfidLogRequest, RfidLogResponse
from ...services.event_store import EventLogStore
from ...services.ingest_service import IngestService
from ..dependencies import get_event_store, get_ingest_service, require_identity

router = APIRouter()


@router.post("/rfid-log", response_model=RfidLogResponse)
def add_rfid_log(
    request: RfidLogRequest, ingest_service: IngestService = Depends(get_ingest_service)
):
    """Device endpoint: store one card event and push it to live viewers."""
    event = ingest_service.ingest(request.user, request.uid, request.action, request.status)
    return RfidLogResponse(message="Log added successfully", log=event)


@router.get("/rfid-logs", response_model=List[AccessEvent])
def get_rfid_logs(
    _: IdentityClaim = Depends(require_identity),
    event_store: EventLogStore = Depends(get_event_store),
):
    """Latest events, newest first."""
    return event_store.recent()
