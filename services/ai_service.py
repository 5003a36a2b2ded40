"""
Activity suggestions.

Candidate places from the location service are matched against the user's
interests with keyword tables, then scheduled into the time slots of the
chosen pace. Nothing here raises: an unreachable lookup or a destination with
no matching places simply produces fewer (or no) suggestions.
"""
from typing import Dict, List, Tuple

from core.logger import get_logger
from schemas.ai_schema import ActivitySuggestion, CandidatePlace, GenerateActivitiesRequest
from services.location_service import lookup_places

logger = get_logger(__name__)

INTEREST_KEYWORDS: Dict[str, List[str]] = {
    "food": ["restaurant", "cafe", "market", "food", "cuisine", "dining", "bakery", "bistro", "eatery"],
    "culture": ["museum", "gallery", "theater", "theatre", "cathedral", "church", "temple", "palace",
                "castle", "historic", "monument", "art", "opera", "concert"],
    "nature": ["park", "garden", "beach", "mountain", "lake", "river", "forest", "nature", "botanical",
               "zoo", "aquarium"],
    "adventure": ["adventure", "sport", "climbing", "hiking", "diving", "skiing", "kayak", "rafting"],
    "shopping": ["market", "shopping", "mall", "bazaar", "store", "boutique", "shop"],
    "nightlife": ["bar", "club", "nightlife", "entertainment", "pub", "disco"],
}

# "adventure" has no category of its own: its hits count towards the score only.
INTEREST_CATEGORIES: Dict[str, str] = {
    "food": "Dining",
    "culture": "Sightseeing",
    "nature": "Activity",
    "shopping": "Shopping",
    "nightlife": "Entertainment",
}

DEFAULT_CATEGORY = "Sightseeing"

ACTIVITIES_PER_DAY: Dict[str, int] = {
    "relaxed": 3,
    "balanced": 4,
    "busy": 6,
}

TIME_SLOTS: Dict[str, List[str]] = {
    "relaxed": ["09:00", "13:00", "18:00"],
    "balanced": ["09:00", "11:30", "14:00", "18:00"],
    "busy": ["08:00", "10:00", "12:00", "14:30", "17:00", "19:30"],
}

DEFAULT_SLOT = "09:00"
DINING_DURATION_MINUTES = 90
DEFAULT_DURATION_MINUTES = 120
STARTING_LOCATION_NOTE_LENGTH = 150

def add_minutes(time: str, minutes: int) -> str:
    """Adds minutes to an "HH:MM" clock time, wrapping past midnight without a date change."""
    hours, mins = (int(part) for part in time.split(":"))
    total_minutes = hours * 60 + mins + minutes
    return f"{(total_minutes // 60) % 24:02d}:{total_minutes % 60:02d}"

def max_activities(pace: str) -> int:
    # Unknown paces are scheduled like "balanced" rather than rejected.
    return ACTIVITIES_PER_DAY.get(pace, ACTIVITIES_PER_DAY["balanced"])

def score_place(place: CandidatePlace, interests: List[str]) -> Tuple[int, str]:
    """Returns (match score, category) for a place against the requested interests."""
    title = place.title.lower()
    description = place.description.lower()
    category = DEFAULT_CATEGORY
    score = 0

    for interest in interests:
        for keyword in INTEREST_KEYWORDS.get(interest, []):
            if keyword in title or keyword in description:
                score += 1
                category = INTEREST_CATEGORIES.get(interest, category)

    return score, category

def _suggestion_from_place(place: CandidatePlace, category: str) -> ActivitySuggestion:
    return ActivitySuggestion(
        title=f"Visit {place.title}",
        category=category,
        notes=place.description,
        location=place.title,
        location_lat=place.coordinates.lat if place.coordinates else None,
        location_lon=place.coordinates.lon if place.coordinates else None,
    )

def categorize_places(places: List[CandidatePlace], interests: List[str]) -> List[ActivitySuggestion]:
    """
    Keeps the places that match at least one interest keyword, labelled with
    the matching category. With no interests at all, every place is kept.
    """
    suggestions = []
    for place in places:
        score, category = score_place(place, interests)
        if score > 0 or not interests:
            suggestions.append(_suggestion_from_place(place, category))
    return suggestions

def allocate_time_slots(activities: List[ActivitySuggestion], pace: str) -> List[ActivitySuggestion]:
    """Schedules the first activities into the pace's time slots."""
    slots = TIME_SLOTS.get(pace, [])
    scheduled = []

    for i, activity in enumerate(activities[:max_activities(pace)]):
        start_time = slots[i] if i < len(slots) else DEFAULT_SLOT
        duration = DINING_DURATION_MINUTES if activity.category == "Dining" else DEFAULT_DURATION_MINUTES
        scheduled.append(activity.model_copy(update={
            "start_time": start_time,
            "end_time": add_minutes(start_time, duration),
            "duration_minutes": duration,
        }))

    return scheduled

async def generate_activities(request: GenerateActivitiesRequest) -> List[ActivitySuggestion]:
    """Suggests activities near the request's destination (or starting point)."""
    limit = max_activities(request.pace)

    try:
        nearby_places = await lookup_places(request.destination, request.interests, request.starting_coords)
    except Exception as e:
        logger.warning("Place lookup failed for %s: %s", request.destination, e)
        nearby_places = []

    if not nearby_places:
        logger.info("No places found near %s; returning no suggestions", request.destination)
        return []

    categorized = categorize_places(nearby_places, request.interests)
    if not categorized:
        logger.info("No places near %s matched %s; falling back to top %d",
                    request.destination, request.interests, limit)
        return [_suggestion_from_place(place, DEFAULT_CATEGORY) for place in nearby_places[:limit]]

    suggestions = allocate_time_slots(categorized, request.pace)

    if request.starting_location and request.starting_coords:
        info_note = f" Near {request.starting_location}."
        for suggestion in suggestions:
            if suggestion.notes:
                suggestion.notes = suggestion.notes[:STARTING_LOCATION_NOTE_LENGTH] + info_note

    return suggestions
