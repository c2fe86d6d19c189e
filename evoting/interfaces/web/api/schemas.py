"""Request bodies of the REST API."""

from datetime import datetime

from pydantic import BaseModel, EmailStr, Field


class RegisterRequest(BaseModel):
    name: str
    email: EmailStr
    password: str


class LoginRequest(BaseModel):
    email: EmailStr
    password: str


class ForgotPasswordRequest(BaseModel):
    email: EmailStr


class ResetPasswordRequest(BaseModel):
    password: str


class CandidatePair(BaseModel):
    lead_id: int
    deputy_id: int


class CreateElectionRequest(BaseModel):
    name: str
    organization: str
    description: str | None = None
    candidates: list[CandidatePair]
    witness_ids: list[int] = Field(default_factory=list)


class UpdateDraftElectionRequest(BaseModel):
    """Omitted fields stay unchanged; lists replace the current ones."""

    name: str | None = None
    organization: str | None = None
    description: str | None = None
    candidates: list[CandidatePair] | None = None
    witness_ids: list[int] | None = None


class StartElectionRequest(BaseModel):
    whitelist_start: datetime
    whitelist_hours: int
    pending_hours: int
    vote_hours: int
    public_key: str


class UpdateOngoingElectionRequest(BaseModel):
    whitelist_start: datetime | None = None
    whitelist_end: datetime | None = None
    vote_start: datetime | None = None
    vote_end: datetime | None = None
    description: str | None = None
    public_key: str | None = None


class TerminateElectionRequest(BaseModel):
    election_id: int
    note: str | None = None


class DeterminateElectionRequest(BaseModel):
    election_id: int
    whitelist_start: datetime
    whitelist_end: datetime
    vote_start: datetime
    vote_end: datetime


class RegisterWhitelistRequest(BaseModel):
    election_id: int
    address: str


class DecideWhitelistRequest(BaseModel):
    status: str = Field(description="ACCEPT or DECLINE")


class CastVoteRequest(BaseModel):
    candidate_id: int
    transaction: str | None = None


class GrantRoleRequest(BaseModel):
    role: str
