# =======================================================================================
# rfid_dashboard/utils/__init__.py - Utils Package
# =======================================================================================
from .exceptions import *
from .validators import *

__all__ = [
    "RFIDDashboardError", "ValidationError", "DuplicateIdentity", "InvalidCredentials",
    "MissingToken", "InvalidToken", "ExpiredToken", "StorageError",
    "ConfigurationError", "InputValidator",
]
