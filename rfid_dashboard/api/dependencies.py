# =======================================================================================
# rfid_dashboard/api/dependencies.py - FastAPI Dependencies
# =======================================================================================
from typing import Optional
from fastapi import Depends, Header, Request

from ..models.schemas import IdentityClaim
from ..services.auth_service import AuthService
from ..services.dashboard_service import DashboardService
from ..services.event_store import EventLogStore
from ..services.ingest_service import IngestService
from ..utils.exceptions import InvalidToken, MissingToken


# Components are built once by create_app() and live on app.state

def get_auth_service(request: Request) -> AuthService:
    return request.app.state.auth_service

def get_ingest_service(request: Request) -> IngestService:
    return request.app.state.ingest_service

def get_event_store(request: Request) -> EventLogStore:
    return request.app.state.event_store

def get_dashboard_service(request: Request) -> DashboardService:
    return request.app.state.dashboard_service


def parse_bearer(authorization: Optional[str]) -> str:
    """Extract the token from an `Authorization: Bearer <token>` header value."""
    if not authorization or not authorization.strip():
        raise MissingToken()

    scheme, _, token = authorization.strip().partition(" ")
    token = token.strip()
    if scheme.lower() != "bearer":
        raise InvalidToken()
    if not token:
        raise MissingToken()
    return token


def require_identity(
    authorization: Optional[str] = Header(None),
    auth_service: AuthService = Depends(get_auth_service),
) -> IdentityClaim:
    """Gate for endpoints exposing event data: 401 without a token, 403 on a bad one."""
    return auth_service.verify(parse_bearer(authorization))
