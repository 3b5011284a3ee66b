"""
User Directory - static list of known users with substring search.

The directory is seeded once at startup and never mutated. Searches are
case-insensitive, except zip codes which are numeric strings and matched
as-is.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Callable, Iterable, Optional

from backend.errors import InvalidInput


class SearchType(str, Enum):
    email = "email"
    name = "name"
    address = "address"
    all = "all"

    @classmethod
    def parse(cls, value: Optional[str]) -> "SearchType":
        """Unknown or missing search types behave as ``all``."""
        try:
            return cls(value)
        except ValueError:
            return cls.all


@dataclass(frozen=True)
class UserRecord:
    """A directory entry, keyed by email."""
    email: str
    name: str
    phone: str
    address: str
    city: str
    state: str
    zip_code: str

    def matches_email(self, term: str) -> bool:
        return term in self.email.lower()

    def matches_name(self, term: str) -> bool:
        return term in self.name.lower()

    def matches_address(self, term: str) -> bool:
        return (
            term in self.address.lower()
            or term in self.city.lower()
            or term in self.state.lower()
            or term in self.zip_code
        )

    def matches_any(self, term: str) -> bool:
        return (
            self.matches_email(term)
            or self.matches_name(term)
            or self.matches_address(term)
        )


# =============================================================================
# SEED DATA
# =============================================================================

SEED_USERS: tuple[UserRecord, ...] = (
    UserRecord(
        email="john.doe@example.com",
        name="John Doe",
        phone="+91 98765 43210",
        address="123 Main Street, New York, NY 10001",
        city="New York",
        state="NY",
        zip_code="10001",
    ),
    UserRecord(
        email="jane.smith@example.com",
        name="Jane Smith",
        phone="+91 98765 43211",
        address="456 Oak Avenue, Los Angeles, CA 90001",
        city="Los Angeles",
        state="CA",
        zip_code="90001",
    ),
    UserRecord(
        email="mike.johnson@example.com",
        name="Mike Johnson",
        phone="+91 98765 43212",
        address="789 Pine Road, Chicago, IL 60601",
        city="Chicago",
        state="IL",
        zip_code="60601",
    ),
    UserRecord(
        email="sarah.wilson@example.com",
        name="Sarah Wilson",
        phone="+91 98765 43213",
        address="321 Elm Street, Houston, TX 77001",
        city="Houston",
        state="TX",
        zip_code="77001",
    ),
    UserRecord(
        email="emma.brown@example.com",
        name="Emma Brown",
        phone="+91 98765 43214",
        address="654 Maple Drive, Phoenix, AZ 85001",
        city="Phoenix",
        state="AZ",
        zip_code="85001",
    ),
    UserRecord(
        email="david.davis@example.com",
        name="David Davis",
        phone="+91 98765 43215",
        address="987 Cedar Lane, Philadelphia, PA 19101",
        city="Philadelphia",
        state="PA",
        zip_code="19101",
    ),
)


_MATCHERS: dict[SearchType, Callable[[UserRecord, str], bool]] = {
    SearchType.email: UserRecord.matches_email,
    SearchType.name: UserRecord.matches_name,
    SearchType.address: UserRecord.matches_address,
    SearchType.all: UserRecord.matches_any,
}


class UserDirectory:
    """Read-only user directory."""

    def __init__(self, users: Iterable[UserRecord] = SEED_USERS):
        self._users: tuple[UserRecord, ...] = tuple(users)
        self._by_email: dict[str, UserRecord] = {u.email: u for u in self._users}

    def __len__(self) -> int:
        return len(self._users)

    def get(self, email: Optional[str]) -> Optional[UserRecord]:
        """Exact lookup by email."""
        if not email:
            return None
        return self._by_email.get(email)

    def search(self, query: Optional[str]) -> list[UserRecord]:
        """Match the query against email or name."""
        term = self._normalize(query)
        return [
            u for u in self._users
            if u.matches_email(term) or u.matches_name(term)
        ]

    def search_advanced(
        self,
        query: Optional[str],
        search_type: Optional[str] = None,
    ) -> list[UserRecord]:
        """Match the query against the field set selected by ``search_type``."""
        term = self._normalize(query)
        matcher = _MATCHERS[SearchType.parse(search_type)]
        return [u for u in self._users if matcher(u, term)]

    @staticmethod
    def _normalize(query: Optional[str]) -> str:
        if not query:
            raise InvalidInput("Query parameter is required")
        return query.lower()
