from pydantic import BaseModel, Field
from typing import Dict, List, Optional

class Coordinates(BaseModel):
    """A latitude/longitude pair."""
    lat: float
    lon: float

class CandidatePlace(BaseModel):
    """A raw point of interest returned by the place lookup, before categorization."""
    title: str
    description: str = ""
    coordinates: Optional[Coordinates] = None

class GenerateActivitiesRequest(BaseModel):
    """Schema for requesting activity suggestions for a destination."""
    destination: str = Field(..., examples=["Lisbon"])
    trip_type: str = Field("Leisure", examples=["Cultural"])
    interests: List[str] = Field(default_factory=list, examples=[["culture", "food"]])
    # relaxed, balanced or busy; other values are accepted and scheduled permissively
    pace: str = Field("balanced", examples=["balanced"])
    day_index: Optional[int] = Field(None, ge=1)
    total_days: int = Field(..., gt=0, examples=[5])
    starting_location: Optional[str] = Field(None, examples=["Rossio Square"])
    starting_coords: Optional[Coordinates] = None

class ActivitySuggestion(BaseModel):
    """A suggested activity. Not persisted until the caller applies it to a day."""
    title: str
    category: str
    notes: str = ""
    start_time: Optional[str] = None
    end_time: Optional[str] = None
    duration_minutes: Optional[int] = None
    location: Optional[str] = None
    location_lat: Optional[float] = None
    location_lon: Optional[float] = None

class TripActivitiesRequest(BaseModel):
    """Schema for requesting suggestions for a stored trip."""
    interests: List[str] = Field(default_factory=lambda: ["culture", "food"])
    pace: str = "balanced"
    # None means "all days"
    target_day_id: Optional[str] = None
    starting_location: Optional[str] = None
    starting_coords: Optional[Coordinates] = None

class ApplySuggestionsRequest(BaseModel):
    """Schema for adding the suggestions a user picked to the itinerary."""
    suggestions: List[ActivitySuggestion]
    target_day_id: Optional[str] = None

class ApplySuggestionsResponse(BaseModel):
    """How many activities were written, per day id."""
    added: int
    per_day: Dict[str, int]
