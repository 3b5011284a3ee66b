"""
User Directory Module

Seeded, read-only user records with email/name/address search.
"""

from .users import SEED_USERS, SearchType, UserDirectory, UserRecord

__all__ = [
    "SEED_USERS",
    "SearchType",
    "UserDirectory",
    "UserRecord",
]
