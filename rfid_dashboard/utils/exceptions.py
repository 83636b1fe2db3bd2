# =======================================================================================
# rfid_dashboard/utils/exceptions.py - Custom Exceptions
# =======================================================================================
class RFIDDashboardError(Exception):
    """Base exception for the RFID dashboard backend."""
    status_code = 500
    default_message = "Internal server error"

    def __init__(self, message: str = None):
        self.message = message or self.default_message
        super().__init__(self.message)

class ValidationError(RFIDDashboardError):
    """Raised when request input is missing or malformed."""
    status_code = 400
    default_message = "Invalid request"

class DuplicateIdentity(RFIDDashboardError):
    """Raised when the registration number or email is already taken."""
    status_code = 400
    default_message = "User already exists"

class InvalidCredentials(RFIDDashboardError):
    """Raised on unknown registration number or wrong password (same message for both)."""
    status_code = 400
    default_message = "Invalid credentials"

class MissingToken(RFIDDashboardError):
    status_code = 401
    default_message = "Access token required"

class InvalidToken(RFIDDashboardError):
    status_code = 403
    default_message = "Invalid token"

class ExpiredToken(InvalidToken):
    default_message = "Token expired"

class StorageError(RFIDDashboardError):
    """Raised for any underlying persistence failure."""
    status_code = 500
    default_message = "Database error"

class ConfigurationError(RFIDDashboardError):
    """Raised at startup when the configuration is unusable."""
    default_message = "Invalid configuration"
