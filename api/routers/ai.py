from fastapi import APIRouter, Depends, HTTPException
from typing import List

from schemas.ai_schema import (
    GenerateActivitiesRequest, ActivitySuggestion,
    TripActivitiesRequest, ApplySuggestionsRequest, ApplySuggestionsResponse
)
from services.ai_service import generate_activities
from services import analytics_service, activity_service, trip_service
from api.routers.trips import require_owned_trip
from core.security import get_current_user

router = APIRouter(
    prefix="/ai",
    tags=["AI Features"],
    responses={404: {"description": "Not found"}},
)

@router.post("/activities", response_model=List[ActivitySuggestion])
async def suggest_activities(
    request: GenerateActivitiesRequest,
    current_user: dict = Depends(get_current_user)
):
    """
    Suggests activities for a destination.
    An unreachable place lookup yields an empty list rather than an error.
    """
    try:
        return await generate_activities(request)
    except Exception as e:
        raise HTTPException(status_code=500, detail=str(e))

@router.post("/trips/{trip_id}/activities", response_model=List[ActivitySuggestion])
async def suggest_activities_for_trip(
    trip_id: str,
    request: TripActivitiesRequest,
    current_user: dict = Depends(get_current_user)
):
    """
    Suggests activities for a stored trip, for one day or for the whole trip.
    Nothing is saved until the chosen suggestions are applied.
    """
    try:
        trip = require_owned_trip(trip_id, current_user)

        day_index = None
        if request.target_day_id:
            day = activity_service.get_day_by_id(request.target_day_id)
            if not day or day.get('trip_id') != trip_id:
                raise HTTPException(status_code=404, detail="Day not found")
            day_index = day['day_index']

        suggestions = await generate_activities(GenerateActivitiesRequest(
            destination=trip['primary_destination'],
            trip_type=trip['trip_type'],
            interests=request.interests,
            pace=request.pace,
            day_index=day_index,
            total_days=trip_service.trip_duration_days(trip['start_date'], trip['end_date']),
            starting_location=request.starting_location,
            starting_coords=request.starting_coords
        ))

        analytics_service.track_event(
            "ai_generate",
            trip_id=trip_id,
            user_id=trip['owner_id'],
            metadata={"type": "activities", "pace": request.pace, "interests": request.interests}
        )
        return suggestions
    except HTTPException:
        raise
    except Exception as e:
        raise HTTPException(status_code=500, detail=str(e))

@router.post("/trips/{trip_id}/activities/apply", response_model=ApplySuggestionsResponse)
async def apply_suggestions(
    trip_id: str,
    request: ApplySuggestionsRequest,
    current_user: dict = Depends(get_current_user)
):
    """
    Adds the chosen suggestions to the itinerary: all of them to the target day,
    or two per day across the trip when no day is given.
    """
    try:
        require_owned_trip(trip_id, current_user)
        days = trip_service.get_days_for_trip(trip_id)
        if not days:
            raise HTTPException(status_code=400, detail="Generate the trip's days before adding activities.")

        per_day = activity_service.add_suggestions_to_days(days, request.suggestions, request.target_day_id)
        return {"added": sum(per_day.values()), "per_day": per_day}
    except ValueError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except HTTPException:
        raise
    except Exception as e:
        raise HTTPException(status_code=500, detail=str(e))
