"""
Family network domain types.

Requests and network entries are plain dataclasses owned by the stores in
``backend.family.service``; the API layer converts them to camelCase JSON.
"""

import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Optional


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class RequestStatus(str, Enum):
    pending = "pending"
    accepted = "accepted"
    declined = "declined"


class TargetKind(str, Enum):
    email = "email"
    name = "name"


@dataclass(frozen=True)
class Target:
    """Who a request is addressed to: a known email, or just a name.

    The email wins when both are given, and an email target never equals a
    name target. So a pending request to ``{toEmail: x, toName: "Jane"}``
    does not block a later request to ``{toName: "Jane"}`` alone.
    """
    kind: TargetKind
    value: str

    @classmethod
    def of(cls, to_email: Optional[str], to_name: Optional[str]) -> "Target":
        if to_email:
            return cls(TargetKind.email, to_email)
        if to_name:
            return cls(TargetKind.name, to_name)
        raise ValueError("A target needs an email or a name")


@dataclass
class FamilyRequest:
    """A connection request; leaves ``pending`` exactly once."""
    from_email: str
    relationship: str
    to_email: Optional[str] = None
    to_name: Optional[str] = None
    id: str = field(default_factory=lambda: str(uuid.uuid4()))
    status: RequestStatus = RequestStatus.pending
    created_at: datetime = field(default_factory=utcnow)
    responded_at: Optional[datetime] = None

    @property
    def target(self) -> Target:
        return Target.of(self.to_email, self.to_name)

    @property
    def is_pending(self) -> bool:
        return self.status is RequestStatus.pending

    def is_addressed_to(self, email: str) -> bool:
        return self.to_email == email or self.to_name == email

    def respond(self, status: RequestStatus) -> None:
        self.status = status
        self.responded_at = utcnow()


@dataclass
class FamilyNetworkEntry:
    """A confirmed family member as seen from the owning user's network."""
    email: str
    name: str
    relationship: str
    status: RequestStatus = RequestStatus.accepted
    added_at: datetime = field(default_factory=utcnow)
