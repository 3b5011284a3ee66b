"""
Family Network Endpoints

Endpoints:
- POST /api/family/request - Send a family request
- POST /api/family/request/{request_id}/accept - Accept a pending request
- POST /api/family/request/{request_id}/reject - Decline a pending request
- GET /api/family/network - Confirmed family members of a user
- GET /api/family/requests - Requests sent by and pending for a user
- GET /api/family/mutual-network - Both users' networks and their relationship
"""

from datetime import datetime
from typing import Optional

from fastapi import APIRouter, Depends, Query
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from backend.dependencies import get_family_service
from backend.family.models import RequestStatus
from backend.family.service import FamilyService


router = APIRouter(prefix="/api/family", tags=["family"])


# =============================================================================
# REQUEST/RESPONSE MODELS
# =============================================================================

class CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class FamilyRequestBody(CamelModel):
    """Request body for sending a family request."""
    # Optional so missing fields are reported as 400 by the service
    from_email: Optional[str] = None
    to_email: Optional[str] = None
    to_name: Optional[str] = None
    relationship: Optional[str] = None


class FamilyRequestModel(CamelModel):
    id: str
    from_email: str
    to_email: Optional[str] = None
    to_name: Optional[str] = None
    relationship: str
    status: RequestStatus
    created_at: datetime
    responded_at: Optional[datetime] = None


class FamilyMemberModel(CamelModel):
    email: str
    name: str
    relationship: str
    status: RequestStatus
    added_at: datetime


class FamilyRequestResponse(BaseModel):
    success: bool = True
    request: FamilyRequestModel


class NetworkResponse(BaseModel):
    success: bool = True
    network: list[FamilyMemberModel]


class RequestListsResponse(BaseModel):
    success: bool = True
    sent: list[FamilyRequestModel]
    received: list[FamilyRequestModel]


class UserNetwork(BaseModel):
    email: str
    family: list[FamilyMemberModel]


class MutualNetworkResponse(BaseModel):
    success: bool = True
    user1: UserNetwork
    user2: UserNetwork
    relationship: Optional[FamilyMemberModel] = None


# =============================================================================
# ENDPOINTS
# =============================================================================

@router.post("/request", response_model=FamilyRequestResponse)
async def send_family_request(
    body: FamilyRequestBody,
    service: FamilyService = Depends(get_family_service),
) -> FamilyRequestResponse:
    """
    Send a family request.

    The target is addressed by ``toEmail`` or, when they have no account,
    by ``toName``. Returns 409 if an identical request is still pending or
    the target is already in the sender's network.
    """
    request = service.submit(
        from_email=body.from_email,
        to_email=body.to_email,
        to_name=body.to_name,
        relationship=body.relationship,
    )
    return FamilyRequestResponse(request=FamilyRequestModel.model_validate(request))


@router.post("/request/{request_id}/accept", response_model=FamilyRequestResponse)
async def accept_family_request(
    request_id: str,
    service: FamilyService = Depends(get_family_service),
) -> FamilyRequestResponse:
    """Accept a pending request and add each party to the other's network."""
    request = service.accept(request_id)
    return FamilyRequestResponse(request=FamilyRequestModel.model_validate(request))


@router.post("/request/{request_id}/reject", response_model=FamilyRequestResponse)
async def reject_family_request(
    request_id: str,
    service: FamilyService = Depends(get_family_service),
) -> FamilyRequestResponse:
    request = service.reject(request_id)
    return FamilyRequestResponse(request=FamilyRequestModel.model_validate(request))


@router.get("/network", response_model=NetworkResponse)
async def get_family_network(
    email: Optional[str] = Query(default=None),
    service: FamilyService = Depends(get_family_service),
) -> NetworkResponse:
    network = service.network_of(email)
    return NetworkResponse(
        network=[FamilyMemberModel.model_validate(e) for e in network]
    )


@router.get("/requests", response_model=RequestListsResponse)
async def get_family_requests(
    email: Optional[str] = Query(default=None),
    service: FamilyService = Depends(get_family_service),
) -> RequestListsResponse:
    """Requests sent by the user (any status) and pending requests addressed to them."""
    lists = service.list_for(email)
    return RequestListsResponse(
        sent=[FamilyRequestModel.model_validate(r) for r in lists.sent],
        received=[FamilyRequestModel.model_validate(r) for r in lists.received],
    )


@router.get("/mutual-network", response_model=MutualNetworkResponse)
async def get_mutual_network(
    email1: Optional[str] = Query(default=None),
    email2: Optional[str] = Query(default=None),
    service: FamilyService = Depends(get_family_service),
) -> MutualNetworkResponse:
    mutual = service.mutual_network(email1, email2)
    relationship = (
        FamilyMemberModel.model_validate(mutual.relationship)
        if mutual.relationship
        else None
    )
    return MutualNetworkResponse(
        user1=UserNetwork(
            email=mutual.email1,
            family=[FamilyMemberModel.model_validate(e) for e in mutual.family1],
        ),
        user2=UserNetwork(
            email=mutual.email2,
            family=[FamilyMemberModel.model_validate(e) for e in mutual.family2],
        ),
        relationship=relationship,
    )
