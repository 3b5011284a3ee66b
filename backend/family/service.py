"""
Family Network Service - connection requests and confirmed family networks.

Flow:
1. A user submits a request naming a target (by email, or by name when the
   target has no account) and a relationship
2. The target accepts or declines it; a request leaves ``pending`` once
3. Acceptance appends an entry to both parties' networks, the target's entry
   carrying the inverse relationship

State is in-memory only. Every operation runs under one lock so the
duplicate checks and the accept/reject transition are atomic when FastAPI
serves requests from its thread pool.
"""

import logging
import threading
from dataclasses import dataclass
from typing import Optional

from backend.directory.users import UserDirectory
from backend.errors import Conflict, InvalidInput, InvalidState, NotFound
from backend.family.models import (
    FamilyNetworkEntry,
    FamilyRequest,
    RequestStatus,
    Target,
)
from backend.family.relationships import inverse_relationship

logger = logging.getLogger(__name__)


# =============================================================================
# STORES
# =============================================================================

class FamilyRequestStore:
    """Ordered collection of family requests."""

    def __init__(self):
        self._requests: list[FamilyRequest] = []
        self._by_id: dict[str, FamilyRequest] = {}

    def __len__(self) -> int:
        return len(self._requests)

    def add(self, request: FamilyRequest) -> None:
        self._requests.append(request)
        self._by_id[request.id] = request

    def get(self, request_id: str) -> Optional[FamilyRequest]:
        return self._by_id.get(request_id)

    def find_pending(
        self,
        from_email: str,
        target: Target,
        relationship: str,
    ) -> Optional[FamilyRequest]:
        """Find a pending request with the same sender, target and relationship."""
        for request in self._requests:
            if (
                request.is_pending
                and request.from_email == from_email
                and request.target == target
                and request.relationship == relationship
            ):
                return request
        return None

    def sent_by(self, email: str) -> list[FamilyRequest]:
        return [r for r in self._requests if r.from_email == email]

    def pending_for(self, email: str) -> list[FamilyRequest]:
        return [r for r in self._requests if r.is_pending and r.is_addressed_to(email)]


class FamilyNetworkStore:
    """
    Confirmed family members keyed by the owning user's email.

    Append-only: entries are never removed or edited.
    """

    def __init__(self):
        self._networks: dict[str, list[FamilyNetworkEntry]] = {}

    def network_of(self, email: str) -> list[FamilyNetworkEntry]:
        return list(self._networks.get(email, []))

    def add(self, owner_email: str, entry: FamilyNetworkEntry) -> None:
        self._networks.setdefault(owner_email, []).append(entry)

    def find_member(self, owner_email: str, member_email: str) -> Optional[FamilyNetworkEntry]:
        for entry in self._networks.get(owner_email, []):
            if entry.email == member_email:
                return entry
        return None

    def has_member(self, owner_email: str, *identifiers: Optional[str]) -> bool:
        """True if any member's stored email equals one of ``identifiers``."""
        wanted = {i for i in identifiers if i}
        return any(e.email in wanted for e in self._networks.get(owner_email, []))


# =============================================================================
# SERVICE
# =============================================================================

@dataclass
class FamilyRequestLists:
    sent: list[FamilyRequest]
    received: list[FamilyRequest]


@dataclass
class MutualNetwork:
    email1: str
    family1: list[FamilyNetworkEntry]
    email2: str
    family2: list[FamilyNetworkEntry]
    relationship: Optional[FamilyNetworkEntry]


class FamilyService:
    """Family request lifecycle and network queries."""

    def __init__(
        self,
        directory: UserDirectory,
        requests: Optional[FamilyRequestStore] = None,
        networks: Optional[FamilyNetworkStore] = None,
    ):
        self.directory = directory
        self.requests = requests if requests is not None else FamilyRequestStore()
        self.networks = networks if networks is not None else FamilyNetworkStore()
        self._lock = threading.RLock()

    def submit(
        self,
        from_email: Optional[str],
        relationship: Optional[str],
        to_email: Optional[str] = None,
        to_name: Optional[str] = None,
    ) -> FamilyRequest:
        """Create a pending request after the duplicate and already-family checks."""
        if not from_email or not (to_email or to_name) or not relationship:
            raise InvalidInput("Missing required fields")

        target = Target.of(to_email, to_name)

        with self._lock:
            if self.requests.find_pending(from_email, target, relationship):
                raise Conflict("Request already pending")

            # Network entries store toEmail or toName in their email field, so
            # both identifiers are checked against it.
            if self.networks.has_member(from_email, to_email, to_name):
                raise Conflict("Already in family network")

            request = FamilyRequest(
                from_email=from_email,
                to_email=to_email or None,
                to_name=to_name or None,
                relationship=relationship,
            )
            self.requests.add(request)

        logger.info(
            "Family request %s: %s -> %s:%s (%s)",
            request.id, from_email, target.kind.value, target.value, relationship,
        )
        return request

    def accept(self, request_id: str) -> FamilyRequest:
        """Accept a pending request and link both parties' networks."""
        with self._lock:
            request = self._get_pending(request_id)
            request.respond(RequestStatus.accepted)

            target_user = self.directory.get(request.to_email)
            self.networks.add(
                request.from_email,
                FamilyNetworkEntry(
                    email=request.to_email or request.to_name,
                    name=(target_user.name if target_user else None)
                    or request.to_name
                    or request.to_email,
                    relationship=request.relationship,
                ),
            )

            # A name-only target has no network of its own
            if request.to_email:
                from_user = self.directory.get(request.from_email)
                self.networks.add(
                    request.to_email,
                    FamilyNetworkEntry(
                        email=request.from_email,
                        name=from_user.name if from_user else request.from_email,
                        relationship=inverse_relationship(request.relationship),
                    ),
                )

        logger.info("Family request %s accepted", request.id)
        return request

    def reject(self, request_id: str) -> FamilyRequest:
        """Decline a pending request; networks are left untouched."""
        with self._lock:
            request = self._get_pending(request_id)
            request.respond(RequestStatus.declined)

        logger.info("Family request %s declined", request.id)
        return request

    def list_for(self, email: Optional[str]) -> FamilyRequestLists:
        """Requests sent by ``email`` (any status) and pending ones addressed to it."""
        if not email:
            raise InvalidInput("Email query parameter is required")
        with self._lock:
            return FamilyRequestLists(
                sent=self.requests.sent_by(email),
                received=self.requests.pending_for(email),
            )

    def network_of(self, email: Optional[str]) -> list[FamilyNetworkEntry]:
        if not email:
            raise InvalidInput("Email query parameter is required")
        with self._lock:
            return self.networks.network_of(email)

    def mutual_network(
        self,
        email1: Optional[str],
        email2: Optional[str],
    ) -> MutualNetwork:
        """Both users' networks plus the entry linking them, if any."""
        if not email1 or not email2:
            raise InvalidInput("Both email1 and email2 are required")
        with self._lock:
            relationship = (
                self.networks.find_member(email1, email2)
                or self.networks.find_member(email2, email1)
            )
            return MutualNetwork(
                email1=email1,
                family1=self.networks.network_of(email1),
                email2=email2,
                family2=self.networks.network_of(email2),
                relationship=relationship,
            )

    def _get_pending(self, request_id: str) -> FamilyRequest:
        request = self.requests.get(request_id)
        if request is None:
            raise NotFound("Request not found")
        if not request.is_pending:
            raise InvalidState("Request already processed")
        return request
