# =======================================================================================
# rfid_dashboard/services/credential_store.py - Registered Identities
# =======================================================================================
import logging
from typing import Optional
from sqlalchemy import text
from sqlalchemy.exc import IntegrityError

from ..database import DatabaseManager
from ..models.schemas import Identity
from ..utils.exceptions import DuplicateIdentity

logger = logging.getLogger(__name__)

_SELECT_IDENTITY = """
    SELECT id, reg_number, name, email, password AS password_hash, created_at
    FROM users
"""


class CredentialStore:
    """Durable table of registered identities."""

    def __init__(self, db: DatabaseManager):
        self.db = db

    @staticmethod
    def _to_identity(row) -> Optional[Identity]:
        return Identity(**row) if row else None

    def find(self, reg_number: str) -> Optional[Identity]:
        row = self.db.fetch_one(
            _SELECT_IDENTITY + " WHERE reg_number = :reg",
            {"reg": reg_number},
        )
        return self._to_identity(row)

    def find_by_registration_or_email(self, reg_number: str, email: str) -> Optional[Identity]:
        row = self.db.fetch_one(
            _SELECT_IDENTITY + " WHERE reg_number = :reg OR email = :email",
            {"reg": reg_number, "email": email},
        )
        return self._to_identity(row)

    def create(self, reg_number: str, name: str, email: str, password_hash: str) -> Identity:
        """
        Insert a new identity. The UNIQUE constraints on reg_number and email
        decide concurrent registrations: the losing insert becomes DuplicateIdentity.
        """
        with self.db.get_connection() as conn:
            try:
                result = conn.execute(
                    text(
                        """
                        INSERT INTO users (reg_number, name, email, password)
                        VALUES (:reg, :name, :email, :password)
                        """
                    ),
                    {"reg": reg_number, "name": name, "email": email, "password": password_hash},
                )
            except IntegrityError:
                logger.info("Duplicate registration rejected for reg_number=%s", reg_number)
                raise DuplicateIdentity()

            row = conn.execute(
                text(_SELECT_IDENTITY + " WHERE id = :id"),
                {"id": result.lastrowid},
            ).mappings().first()

        return Identity(**row)

    def seed(self, reg_number: str, name: str, email: str, password_hash: str) -> bool:
        """Insert the bootstrap identity unless it already exists. Returns True if inserted."""
        if self.find_by_registration_or_email(reg_number, email):
            return False
        try:
            self.create(reg_number, name, email, password_hash)
        except DuplicateIdentity:
            return False
        return True
