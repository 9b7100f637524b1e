"""Authentication data models."""

from datetime import datetime, timedelta, timezone
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

REFRESH_MARGIN = timedelta(minutes=5)

# expires_at above this is taken as epoch milliseconds
MILLISECONDS_THRESHOLD = 10**11


class Scope(str, Enum):
    """Token audience requested from the auth endpoint."""

    PERSONAL = "GIGACHAT_API_PERS"
    BUSINESS = "GIGACHAT_API_B2B"
    CORPORATE = "GIGACHAT_API_CORP"


class TokenResponse(BaseModel):
    """Auth endpoint success body."""

    access_token: str = Field(..., description="Bearer token")
    expires_at: int = Field(..., ge=0, description="Expiry, epoch seconds (milliseconds accepted)")


class Token(BaseModel):
    """Bearer token held by a client instance."""

    model_config = ConfigDict(frozen=True)

    value: str
    expires_at: datetime

    @classmethod
    def from_response(cls, resp: TokenResponse) -> "Token":
        expires_at: float = resp.expires_at
        if expires_at > MILLISECONDS_THRESHOLD:
            expires_at /= 1000
        return cls(
            value=resp.access_token,
            expires_at=datetime.fromtimestamp(expires_at, tz=timezone.utc),
        )

    def needs_refresh(self, now: datetime) -> bool:
        """True once now is within the refresh margin of expiry (inclusive)."""
        return now >= self.expires_at - REFRESH_MARGIN
