# =======================================================================================
# rfid_dashboard/main.py - FastAPI Application Entry Point
# =======================================================================================
import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from . import __version__
from .config import Config, config as default_config
from .api.routes.auth import router as auth_router
from .api.routes.dashboard import router as dashboard_router
from .api.routes.live import router as live_router
from .api.routes.rfid import router as rfid_router
from .database import DatabaseManager
from .models.schemas import HealthResponse, ServiceInfo
from .services.auth_service import AuthService
from .services.broadcaster import Broadcaster
from .services.credential_store import CredentialStore
from .services.dashboard_service import DashboardService
from .services.event_store import EventLogStore
from .services.ingest_service import IngestService
from .utils.exceptions import RFIDDashboardError, StorageError

logger = logging.getLogger(__name__)


def setup_logging(settings: Config) -> None:
    level = "DEBUG" if settings.API_DEBUG else settings.LOG_LEVEL.upper()
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )


def seed_default_user(settings: Config, store: CredentialStore, auth_service: AuthService) -> None:
    """Bootstrap identity for first access; skipped when it already exists."""
    if not settings.SEED_DEFAULT_USER:
        return
    inserted = store.seed(
        settings.DEFAULT_USER_REG_NUMBER,
        settings.DEFAULT_USER_NAME,
        settings.DEFAULT_USER_EMAIL,
        auth_service.hash_password(settings.DEFAULT_USER_PASSWORD),
    )
    if inserted:
        logger.info("Seeded default user %s", settings.DEFAULT_USER_REG_NUMBER)


@asynccontextmanager
async def lifespan(app: FastAPI):
    state = app.state
    state.db.init_schema()
    seed_default_user(state.config, state.credential_store, state.auth_service)
    logger.info("RFID Dashboard API started (env=%s)", state.config.APP_ENV)
    yield
    state.db.dispose()


def create_app(settings: Optional[Config] = None) -> FastAPI:
    settings = settings or default_config
    setup_logging(settings)

    app = FastAPI(
        title="RFID Dashboard API",
        version=__version__,
        description="Access-control event dashboard: authentication, RFID event ingestion and live fan-out",
        debug=settings.API_DEBUG,
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=[o.strip() for o in settings.CORS_ORIGINS.split(",")],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Components
    db = DatabaseManager(settings)
    credential_store = CredentialStore(db)
    event_store = EventLogStore(db, max_limit=settings.LOGS_LIMIT)
    broadcaster = Broadcaster(queue_size=settings.VIEWER_QUEUE_SIZE)
    auth_service = AuthService(credential_store, settings)

    app.state.config = settings
    app.state.db = db
    app.state.credential_store = credential_store
    app.state.event_store = event_store
    app.state.broadcaster = broadcaster
    app.state.auth_service = auth_service
    app.state.ingest_service = IngestService(db, event_store, broadcaster)
    app.state.dashboard_service = DashboardService(db, event_store)

    # Routers
    app.include_router(auth_router, prefix="/api", tags=["auth"])
    app.include_router(rfid_router, prefix="/api", tags=["rfid"])
    app.include_router(dashboard_router, prefix="/api", tags=["dashboard"])
    app.include_router(live_router, tags=["live"])

    # Errors
    @app.exception_handler(RFIDDashboardError)
    async def handle_dashboard_error(request: Request, exc: RFIDDashboardError):
        return JSONResponse(status_code=exc.status_code, content={"error": exc.message})

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation(request: Request, exc: RequestValidationError):
        errors = exc.errors()
        detail = errors[0].get("msg", "Invalid request") if errors else "Invalid request"
        return JSONResponse(status_code=400, content={"error": detail})

    @app.get("/", response_model=ServiceInfo, tags=["health"])
    def root():
        return ServiceInfo(
            message="RFID Dashboard API is live",
            status="Running",
            version=__version__,
            endpoints={
                "login": "POST /api/login",
                "register": "POST /api/register",
                "rfidLog": "POST /api/rfid-log",
                "getLogs": "GET /api/rfid-logs",
                "getStats": "GET /api/dashboard-stats",
                "live": "WS /ws",
            },
        )

    @app.get("/api/health", response_model=HealthResponse, tags=["health"])
    def api_health():
        try:
            db.fetch_one("SELECT 1")
            return HealthResponse(status="ok", dataAvailable=True, message=None)
        except StorageError as e:
            return HealthResponse(status="error", dataAvailable=False, message=e.message)

    return app


app = create_app()
