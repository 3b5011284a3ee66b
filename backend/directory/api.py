"""
User Directory Endpoints

Endpoints:
- GET /api/users/search - Search users by email or name
- GET /api/users/search/advanced - Search users by email, name, address or all fields
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from backend.dependencies import get_user_directory
from backend.directory.users import UserDirectory


router = APIRouter(prefix="/api/users", tags=["users"])


# =============================================================================
# RESPONSE MODELS
# =============================================================================

class UserModel(BaseModel):
    """A directory entry as returned to the frontend."""
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )

    email: str
    name: str
    phone: str
    address: str
    city: str
    state: str
    zip_code: str


class SearchResponse(BaseModel):
    success: bool = True
    results: list[UserModel]


# =============================================================================
# ENDPOINTS
# =============================================================================

@router.get("/search", response_model=SearchResponse)
async def search_users(
    query: Optional[str] = Query(default=None, description="Email or name fragment"),
    directory: UserDirectory = Depends(get_user_directory),
) -> SearchResponse:
    """Search users by email or name (case-insensitive)."""
    results = directory.search(query)
    return SearchResponse(results=[UserModel.model_validate(u) for u in results])


@router.get("/search/advanced", response_model=SearchResponse)
async def search_users_advanced(
    query: Optional[str] = Query(default=None, description="Search fragment"),
    search_type: str = Query(
        default="all",
        alias="searchType",
        description="email, name, address or all",
    ),
    directory: UserDirectory = Depends(get_user_directory),
) -> SearchResponse:
    """
    Search users with a selectable field set.

    ``address`` matches street address, city, state or zip code. Unknown
    search types fall back to ``all``.
    """
    results = directory.search_advanced(query, search_type)
    return SearchResponse(results=[UserModel.model_validate(u) for u in results])
