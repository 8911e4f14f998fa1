"""User profiles stored alongside identity-provider accounts."""

from pydantic import Field

from src.models.common import ElixBase, ElixRecord, UTCTimestamp

DEFAULT_ROLE = "site_manager"


class UserProfile(ElixRecord):
    id: str
    email: str
    name: str = ""
    role: str = DEFAULT_ROLE
    created_at: UTCTimestamp | None = None


class SignupRequest(ElixBase):
    email: str = Field(..., min_length=3)
    password: str = Field(..., min_length=6)
    name: str = ""
    role: str | None = None
