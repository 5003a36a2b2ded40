from firebase_admin import db
import datetime
from typing import Dict, List, Optional

from core.logger import get_logger
from schemas.ai_schema import ActivitySuggestion
from schemas.trip_schema import ActivityCreate
from services.trip_service import get_activities_for_day

logger = get_logger(__name__)

# In "all days" mode each day receives this many of the chosen suggestions.
SUGGESTIONS_PER_DAY = 2

def get_day_by_id(day_id: str):
    day = db.reference(f'days/{day_id}').get()
    if day:
        day['id'] = day_id
    return day

def get_activity_by_id(activity_id: str):
    activity = db.reference(f'activities/{activity_id}').get()
    if activity:
        activity['id'] = activity_id
    return activity

def next_position(day_id: str) -> int:
    """Position for an activity appended to a day: one past the current max, or 0."""
    activities = get_activities_for_day(day_id)
    if not activities:
        return 0
    return max(a.get('position') or 0 for a in activities) + 1

def _insert_activity(day_id: str, data: dict, position: int) -> dict:
    data_to_save = {
        "day_id": day_id,
        "title": data["title"],
        "start_time": data.get("start_time"),
        "end_time": data.get("end_time"),
        "duration_minutes": data.get("duration_minutes"),
        "category": data.get("category") or "General",
        "notes": data.get("notes") or "",
        "position": position,
        "created_at": datetime.datetime.utcnow().isoformat()
    }
    new_ref = db.reference('activities').push()
    new_ref.set(data_to_save)
    data_to_save['id'] = new_ref.key
    return data_to_save

def create_activity(day_id: str, activity_data: ActivityCreate):
    """Appends an activity to the end of a day."""
    if not get_day_by_id(day_id):
        return None
    return _insert_activity(day_id, activity_data.model_dump(), next_position(day_id))

def update_activity(activity_id: str, activity_data: ActivityCreate):
    """Overwrites the editable fields of an activity, keeping its day and position."""
    activity = get_activity_by_id(activity_id)
    if not activity:
        return None

    changes = activity_data.model_dump()
    db.reference(f'activities/{activity_id}').update(changes)
    activity.update(changes)
    return activity

def delete_activity(activity_id: str) -> bool:
    if not get_activity_by_id(activity_id):
        return False
    db.reference(f'activities/{activity_id}').delete()
    return True

def add_suggestions_to_days(days: List[dict], suggestions: List[ActivitySuggestion],
                            target_day_id: Optional[str] = None) -> Dict[str, int]:
    """
    Writes chosen suggestions into the itinerary.

    With a target day, every suggestion goes to that day in order. Without one
    ("all days"), day i receives suggestions [2i, 2i + 2); days past the end of
    the list get nothing. Returns the number of activities written per day id.
    """
    if target_day_id is None:
        target_days = days
    else:
        target_days = [d for d in days if d['id'] == target_day_id]
        if not target_days:
            raise ValueError("Target day does not belong to this trip.")

    written: Dict[str, int] = {}
    for i, day in enumerate(target_days):
        if target_day_id is None:
            day_suggestions = suggestions[i * SUGGESTIONS_PER_DAY:(i + 1) * SUGGESTIONS_PER_DAY]
        else:
            day_suggestions = suggestions

        position = next_position(day['id'])
        for suggestion in day_suggestions:
            _insert_activity(day['id'], suggestion.model_dump(), position)
            position += 1
        written[day['id']] = len(day_suggestions)

    logger.info("Added %d suggested activities across %d days",
                sum(written.values()), len(written))
    return written
