# =======================================================================================
# rfid_dashboard/models/schemas.py - Pydantic Models
# =======================================================================================
from datetime import datetime, timezone
from typing import Optional
from pydantic import BaseModel, Field, field_validator

# ========== Stored records ==========

class Identity(BaseModel):
    """A registered account as stored; carries the password hash, never serialised to clients."""
    id: int
    reg_number: str
    name: str
    email: str
    password_hash: str = Field(..., repr=False)
    created_at: Optional[datetime] = None


class AccessEvent(BaseModel):
    """One persisted card event. Field names match the rfid_logs columns."""
    id: int
    user_name: str
    card_uid: str
    action: str
    status: str
    timestamp: datetime

    @field_validator("timestamp")
    @classmethod
    def assume_utc(cls, value: datetime) -> datetime:
        # CURRENT_TIMESTAMP is UTC but comes back naive
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value


class IdentityClaim(BaseModel):
    """What a verified session token asserts."""
    userId: int
    regNumber: str
    exp: datetime


# ========== Auth ==========

class RegisterRequest(BaseModel):
    regNumber: Optional[str] = None
    name: Optional[str] = None
    email: Optional[str] = None
    password: Optional[str] = None


class RegisterResponse(BaseModel):
    message: str


class LoginRequest(BaseModel):
    regNumber: Optional[str] = None
    password: Optional[str] = None


class UserInfo(BaseModel):
    id: int
    regNumber: str
    name: str
    email: str

    @classmethod
    def from_identity(cls, identity: Identity) -> "UserInfo":
        return cls(
            id=identity.id,
            regNumber=identity.reg_number,
            name=identity.name,
            email=identity.email,
        )


class LoginResponse(BaseModel):
    token: str
    user: UserInfo


# ========== Device ingestion ==========

class RfidLogRequest(BaseModel):
    """Device report; validated for non-empty values by the ingestor."""
    user: Optional[str] = Field(None, description="Card holder name")
    uid: Optional[str] = Field(None, description="RFID card identifier")
    action: Optional[str] = Field(None, description="e.g. entry / exit")
    status: Optional[str] = Field(None, description="e.g. granted / denied")


class RfidLogResponse(BaseModel):
    message: str
    log: AccessEvent


# ========== Dashboard ==========

class DashboardStats(BaseModel):
    totalEntries: int
    uniqueUsers: int
    todayEntries: int


class LiveMessage(BaseModel):
    """Envelope pushed over the live channel."""
    event: str
    data: AccessEvent


class HealthResponse(BaseModel):
    status: str                 # "ok" | "error"
    dataAvailable: bool
    message: Optional[str] = None


class ServiceInfo(BaseModel):
    message: str
    status: str
    version: str
    endpoints: dict
