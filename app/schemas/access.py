"""Schemas for access identifier and reconciliation operations."""
import enum
from typing import List, Optional

from pydantic import BaseModel, Field

from app.utils.access import AccessRecord, AccessSpecification, ScopeKind


class IdentifierResponse(BaseModel):
    """Canonical identifier of an access."""
    identifier: str


class DecodeRequest(BaseModel):
    """Request schema for decoding an identifier."""
    identifier: str = Field(..., description="Canonical access identifier, e.g. 'grp:[2001:db8::1]:22:root'")
    scope_kind: ScopeKind = Field(
        default=ScopeKind.GROUP,
        description="'group' for group server accesses, 'guest' for group:account guest accesses",
    )


class MatchRequest(BaseModel):
    """Request schema for matching an access against listed accesses."""
    specification: AccessSpecification
    records: List[AccessRecord] = Field(default_factory=list)


class ReconcileStatus(str, enum.Enum):
    """Whether the desired access exists on the bastion."""
    PRESENT = "present"
    ABSENT = "absent"


class ReconcileResult(BaseModel):
    """Outcome of looking up a desired access among listed accesses."""
    status: ReconcileStatus
    identifier: str
    index: Optional[int] = None
    record: Optional[AccessRecord] = None
    current: Optional[AccessSpecification] = None
    drift: bool = False
    comment: Optional[str] = None
