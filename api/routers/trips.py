from fastapi import APIRouter, Depends, HTTPException
from typing import List

# Import schemas, services, and security dependencies
from schemas.trip_schema import TripCreate, TripInfo, DayInfo, Itinerary, ActivityCreate, ActivityInfo
from core.security import get_current_user
from services import trip_service, activity_service

router = APIRouter(
    prefix="/trips",
    tags=["Trips"],
    responses={404: {"description": "Not found"}},
)

def require_owned_trip(trip_id: str, current_user: dict) -> dict:
    """Loads a trip, raising 404 if it is missing and 403 if it belongs to someone else."""
    trip = trip_service.get_trip_by_id(trip_id)
    if not trip:
        raise HTTPException(status_code=404, detail="Trip not found")
    if trip.get('owner_id') != current_user['uid']:
        raise HTTPException(status_code=403, detail="Not authorized to access this trip")
    return trip

def _require_day_of_trip(day_id: str, trip_id: str) -> dict:
    day = activity_service.get_day_by_id(day_id)
    if not day or day.get('trip_id') != trip_id:
        raise HTTPException(status_code=404, detail="Day not found")
    return day

def _require_activity_of_trip(activity_id: str, trip_id: str) -> dict:
    activity = activity_service.get_activity_by_id(activity_id)
    if not activity:
        raise HTTPException(status_code=404, detail="Activity not found")
    _require_day_of_trip(activity['day_id'], trip_id)
    return activity

@router.post("", response_model=TripInfo)
async def create_trip(
    trip: TripCreate,
    current_user: dict = Depends(get_current_user)
):
    """Creates a new trip for the authenticated user."""
    try:
        return trip_service.create_trip(trip_data=trip, owner_id=current_user['uid'])
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"An unexpected error occurred: {e}")

@router.get("", response_model=List[TripInfo])
async def get_user_trips(current_user: dict = Depends(get_current_user)):
    """Retrieves all trips of the authenticated user, newest first."""
    try:
        return trip_service.get_trips_for_user(owner_id=current_user['uid'])
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"An unexpected error occurred: {e}")

@router.get("/{trip_id}", response_model=TripInfo)
async def get_single_trip(
    trip_id: str,
    current_user: dict = Depends(get_current_user)
):
    """Retrieves a single trip owned by the authenticated user."""
    try:
        return require_owned_trip(trip_id, current_user)
    except HTTPException:
        raise
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"An unexpected error occurred: {e}")

@router.delete("/{trip_id}")
async def delete_trip(
    trip_id: str,
    current_user: dict = Depends(get_current_user)
):
    """Deletes a trip along with its days, activities, packing lists and share links."""
    try:
        require_owned_trip(trip_id, current_user)
        trip_service.delete_trip(trip_id)
        return {"message": "Trip deleted", "trip_id": trip_id}
    except HTTPException:
        raise
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"An unexpected error occurred: {e}")

@router.post("/{trip_id}/days/generate", response_model=List[DayInfo])
async def generate_days(
    trip_id: str,
    current_user: dict = Depends(get_current_user)
):
    """Creates the day-by-day structure of a trip, one day per date."""
    try:
        require_owned_trip(trip_id, current_user)
        return trip_service.generate_days(trip_id)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except HTTPException:
        raise
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"An unexpected error occurred: {e}")

@router.get("/{trip_id}/itinerary", response_model=Itinerary)
async def get_itinerary(
    trip_id: str,
    current_user: dict = Depends(get_current_user)
):
    """Retrieves the trip with its days and their activities."""
    try:
        require_owned_trip(trip_id, current_user)
        return trip_service.get_itinerary(trip_id)
    except HTTPException:
        raise
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"An unexpected error occurred: {e}")

@router.post("/{trip_id}/days/{day_id}/activities", response_model=ActivityInfo)
async def add_activity(
    trip_id: str,
    day_id: str,
    activity: ActivityCreate,
    current_user: dict = Depends(get_current_user)
):
    """Adds an activity at the end of a day."""
    try:
        require_owned_trip(trip_id, current_user)
        _require_day_of_trip(day_id, trip_id)
        return activity_service.create_activity(day_id, activity)
    except HTTPException:
        raise
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"An unexpected error occurred: {e}")

@router.put("/{trip_id}/activities/{activity_id}", response_model=ActivityInfo)
async def edit_activity(
    trip_id: str,
    activity_id: str,
    activity: ActivityCreate,
    current_user: dict = Depends(get_current_user)
):
    """Edits an activity in place."""
    try:
        require_owned_trip(trip_id, current_user)
        _require_activity_of_trip(activity_id, trip_id)
        return activity_service.update_activity(activity_id, activity)
    except HTTPException:
        raise
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"An unexpected error occurred: {e}")

@router.delete("/{trip_id}/activities/{activity_id}")
async def remove_activity(
    trip_id: str,
    activity_id: str,
    current_user: dict = Depends(get_current_user)
):
    """Deletes an activity."""
    try:
        require_owned_trip(trip_id, current_user)
        _require_activity_of_trip(activity_id, trip_id)
        activity_service.delete_activity(activity_id)
        return {"message": "Activity deleted", "activity_id": activity_id}
    except HTTPException:
        raise
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"An unexpected error occurred: {e}")
