from pydantic import BaseModel, Field
from typing import List, Optional, Literal
import datetime

TripType = Literal["Leisure", "Business", "Adventure", "Cultural", "Family"]

class TripCreate(BaseModel):
    """Schema for creating a new trip."""
    title: str = Field(..., min_length=1, examples=["Italy Explorer"])
    primary_destination: str = Field(..., min_length=1, examples=["Rome & Florence"])
    trip_type: TripType = "Leisure"
    start_date: datetime.date = Field(..., examples=["2025-06-01"])
    end_date: datetime.date = Field(..., examples=["2025-06-07"])

class TripInfo(BaseModel):
    """Schema for returning trip information."""
    id: str
    owner_id: str
    title: str
    primary_destination: str
    trip_type: str
    start_date: str
    end_date: str
    created_at: Optional[str] = None
    updated_at: Optional[str] = None

class ActivityCreate(BaseModel):
    """Schema for adding or editing an activity on a day."""
    title: str = Field(..., min_length=1, examples=["Colosseum tour"])
    start_time: Optional[str] = Field(None, pattern=r"^\d{2}:\d{2}$", examples=["09:00"])
    end_time: Optional[str] = Field(None, pattern=r"^\d{2}:\d{2}$", examples=["11:00"])
    duration_minutes: Optional[int] = Field(None, ge=0, examples=[120])
    category: str = "General"
    notes: str = ""

class ActivityInfo(BaseModel):
    """Schema for returning an activity."""
    id: str
    day_id: str
    title: str
    start_time: Optional[str] = None
    end_time: Optional[str] = None
    duration_minutes: Optional[int] = None
    category: Optional[str] = None
    notes: Optional[str] = None
    position: Optional[int] = None
    created_at: Optional[str] = None

class DayInfo(BaseModel):
    """One calendar day of a trip, with its activities in position order."""
    id: str
    trip_id: str
    date: str
    day_index: int
    notes: Optional[str] = None
    activities: List[ActivityInfo] = Field(default_factory=list)

class Itinerary(BaseModel):
    """A trip with its full day-by-day plan."""
    trip: TripInfo
    days: List[DayInfo]
