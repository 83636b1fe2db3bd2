# =======================================================================================
# rfid_dashboard/utils/validators.py - Validation Helpers
# =======================================================================================

from typing import Dict, Optional
from .exceptions import ValidationError


class InputValidator:
    """Validates raw field values coming from devices and dashboard clients."""

    @staticmethod
    def require_fields(fields: Dict[str, Optional[str]]) -> Dict[str, str]:
        """
        Ensure every field is a non-empty string.
        Returns the stripped values, keyed like the input.
        """
        missing = [
            name for name, value in fields.items()
            if not isinstance(value, str) or not value.strip()
        ]
        if missing:
            raise ValidationError(f"Missing required fields: {', '.join(missing)}")

        return {name: value.strip() for name, value in fields.items()}
