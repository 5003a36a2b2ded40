from fastapi import APIRouter, Depends, HTTPException, Path
from typing import Optional

from schemas.share_schema import ShareLinkCreate, ShareLinkInfo
from schemas.trip_schema import Itinerary
from services import share_service
from api.routers.trips import require_owned_trip
from core.security import get_current_user

router = APIRouter(
    prefix="/share",
    tags=["Sharing"],
    responses={404: {"description": "Not found"}},
)

@router.post("/{trip_id}", response_model=ShareLinkInfo)
async def create_share_link(
    trip_id: str,
    request: Optional[ShareLinkCreate] = None,
    current_user: dict = Depends(get_current_user)
):
    """Creates a public, read-only link to a trip's itinerary."""
    try:
        require_owned_trip(trip_id, current_user)
        return share_service.create_share_link(
            trip_id,
            user_id=current_user['uid'],
            expires_in_days=request.expires_in_days if request else None
        )
    except HTTPException:
        raise
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"An unexpected error occurred: {e}")

@router.get("/{slug}", response_model=Itinerary)
async def view_shared_trip(slug: str = Path(..., pattern=r"^[a-z0-9]+$")):
    """
    Public view of a shared itinerary. No authentication required.
    """
    itinerary = share_service.get_shared_itinerary(slug)
    if not itinerary:
        raise HTTPException(status_code=404, detail="This share link is invalid or has expired.")
    return itinerary
