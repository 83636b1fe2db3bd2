# =======================================================================================
# rfid_dashboard/models/__init__.py - Models Package
# =======================================================================================
from .schemas import *

__all__ = [
    "Identity", "AccessEvent", "IdentityClaim", "RegisterRequest", "RegisterResponse",
    "LoginRequest", "LoginResponse", "UserInfo", "RfidLogRequest", "RfidLogResponse",
    "DashboardStats", "LiveMessage", "HealthResponse", "ServiceInfo",
]
