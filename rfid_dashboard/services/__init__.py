# =======================================================================================
# rfid_dashboard/services/__init__.py - Services Package
# =======================================================================================
from .auth_service import AuthService
from .broadcaster import Broadcaster, Viewer
from .credential_store import CredentialStore
from .dashboard_service import DashboardService
from .event_store import EventLogStore
from .ingest_service import IngestService

__all__ = [
    "AuthService", "Broadcaster", "Viewer", "CredentialStore",
    "DashboardService", "EventLogStore", "IngestService",
]
