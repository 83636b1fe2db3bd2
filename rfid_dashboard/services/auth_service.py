# =======================================================================================
# rfid_dashboard/services/auth_service.py - Authentication for the dashboard
# =======================================================================================

import logging
from datetime import datetime, timedelta, timezone
from typing import Optional, Tuple

from jose import jwt
from jose.exceptions import ExpiredSignatureError, JWTError
from passlib.context import CryptContext
from pydantic import EmailStr, TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from ..config import Config
from ..models.schemas import Identity, IdentityClaim
from ..utils.exceptions import (
    ConfigurationError, DuplicateIdentity, ExpiredToken, InvalidCredentials, InvalidToken,
    ValidationError,
)
from ..utils.validators import InputValidator
from .credential_store import CredentialStore

logger = logging.getLogger(__name__)

DEV_JWT_SECRET = "rfid-dashboard-dev-secret"

_email_adapter = TypeAdapter(EmailStr)


class AuthService:
    """Handles dashboard authentication (registration number / password) and session tokens."""

    def __init__(self, store: CredentialStore, settings: Config):
        self.store = store
        self.secret = self._resolve_secret(settings)
        self.algorithm = settings.JWT_ALGORITHM
        self.token_ttl = timedelta(hours=settings.TOKEN_TTL_HOURS)
        self.pwd_context = CryptContext(
            schemes=["pbkdf2_sha256"],
            deprecated="auto",
            pbkdf2_sha256__rounds=settings.PASSWORD_HASH_ROUNDS,
        )

    @staticmethod
    def _resolve_secret(settings: Config) -> str:
        if settings.JWT_SECRET:
            return settings.JWT_SECRET
        if not settings.is_development:
            raise ConfigurationError(
                f"JWT_SECRET must be set when APP_ENV={settings.APP_ENV!r}"
            )
        logger.warning("JWT_SECRET not set; using the development signing secret")
        return DEV_JWT_SECRET

    # ---------- passwords ----------

    def hash_password(self, password: str) -> str:
        return self.pwd_context.hash(password)

    def verify_password(self, plain_password: str, hashed_password: str) -> bool:
        return self.pwd_context.verify(plain_password, hashed_password)

    # ---------- registration / login ----------

    def register(self, reg_number: Optional[str], name: Optional[str],
                 email: Optional[str], password: Optional[str]) -> Identity:
        fields = InputValidator.require_fields(
            {"regNumber": reg_number, "name": name, "email": email, "password": password}
        )
        try:
            email = _email_adapter.validate_python(fields["email"])
        except PydanticValidationError:
            raise ValidationError("Invalid email address")

        if self.store.find_by_registration_or_email(fields["regNumber"], email):
            raise DuplicateIdentity()

        # hash the raw password, surrounding whitespace is part of it
        identity = self.store.create(
            fields["regNumber"], fields["name"], email, self.hash_password(password)
        )
        logger.info("Registered user id=%s reg_number=%s", identity.id, identity.reg_number)
        return identity

    def authenticate(self, reg_number: Optional[str], password: Optional[str]) -> Identity:
        """
        Unknown registration number and wrong password raise the same
        InvalidCredentials; the unknown-user path still pays for a hash check.
        """
        reg_number = reg_number.strip() if isinstance(reg_number, str) else None
        identity = self.store.find(reg_number) if reg_number else None
        if identity is None:
            self.pwd_context.dummy_verify()
            logger.info("Login failed for reg_number=%s", reg_number)
            raise InvalidCredentials()

        if not password or not self.verify_password(password, identity.password_hash):
            logger.info("Login failed for reg_number=%s", reg_number)
            raise InvalidCredentials()

        return identity

    def login(self, reg_number: Optional[str], password: Optional[str]) -> Tuple[str, Identity]:
        identity = self.authenticate(reg_number, password)
        return self.issue_token(identity), identity

    # ---------- session tokens ----------

    def issue_token(self, identity: Identity, now: Optional[datetime] = None) -> str:
        now = now or datetime.now(timezone.utc)
        payload = {
            "userId": identity.id,
            "regNumber": identity.reg_number,
            "iat": now,
            "exp": now + self.token_ttl,
        }
        return jwt.encode(payload, self.secret, algorithm=self.algorithm)

    def verify(self, token: str) -> IdentityClaim:
        """Signature and expiry check only; no store lookup."""
        try:
            payload = jwt.decode(token, self.secret, algorithms=[self.algorithm])
        except ExpiredSignatureError:
            raise ExpiredToken()
        except JWTError:
            raise InvalidToken()

        try:
            return IdentityClaim(
                userId=payload["userId"],
                regNumber=payload["regNumber"],
                exp=datetime.fromtimestamp(payload["exp"], tz=timezone.utc),
            )
        except (KeyError, TypeError, ValueError):
            raise InvalidToken()
