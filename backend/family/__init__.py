"""
Family Network Module

Components:
- relationships: relationship labels and their inverses
- models: requests, targets and network entries
- service: request/network stores and the request lifecycle
- api: FastAPI endpoints
"""

from .models import FamilyNetworkEntry, FamilyRequest, RequestStatus, Target, TargetKind
from .relationships import Relationship, inverse_relationship
from .service import FamilyNetworkStore, FamilyRequestStore, FamilyService

__all__ = [
    "FamilyNetworkEntry",
    "FamilyNetworkStore",
    "FamilyRequest",
    "FamilyRequestStore",
    "FamilyService",
    "Relationship",
    "RequestStatus",
    "Target",
    "TargetKind",
    "inverse_relationship",
]
