from firebase_admin import db
import datetime
from typing import List, Optional

from core.logger import get_logger
from schemas.trip_schema import TripCreate
from services import analytics_service

logger = get_logger(__name__)

def trip_duration_days(start_date, end_date) -> int:
    """Number of calendar days covered by a trip, both ends included."""
    start = _as_date(start_date)
    end = _as_date(end_date)
    return (end - start).days + 1

def _as_date(value) -> datetime.date:
    if isinstance(value, datetime.date):
        return value
    return datetime.date.fromisoformat(str(value)[:10])

def create_trip(trip_data: TripCreate, owner_id: str):
    """Saves a new trip owned by `owner_id` and returns it with its id."""
    if trip_data.end_date < trip_data.start_date:
        raise ValueError("End date must be after start date")

    now = datetime.datetime.utcnow().isoformat()
    data_to_save = {
        "owner_id": owner_id,
        "title": trip_data.title,
        "primary_destination": trip_data.primary_destination,
        "trip_type": trip_data.trip_type,
        "start_date": trip_data.start_date.isoformat(),
        "end_date": trip_data.end_date.isoformat(),
        "created_at": now,
        "updated_at": now
    }

    new_trip_ref = db.reference('trips').push()
    new_trip_ref.set(data_to_save)
    data_to_save['id'] = new_trip_ref.key

    logger.info("Trip created: %s (%s)", trip_data.title, new_trip_ref.key)
    analytics_service.track_event("trip_create", trip_id=new_trip_ref.key, user_id=owner_id)
    return data_to_save

def get_trips_for_user(owner_id: str):
    """Retrieves all trips owned by a user, newest first."""
    user_trips = db.reference('trips').order_by_child('owner_id').equal_to(owner_id).get()
    if not user_trips:
        return []

    trips_list = []
    for trip_id, trip_data in user_trips.items():
        trip_data['id'] = trip_id
        trips_list.append(trip_data)

    trips_list.sort(key=lambda x: x.get('created_at', ''), reverse=True)
    return trips_list

def get_trip_by_id(trip_id: str):
    """Retrieves a single trip by its id, or None."""
    trip = db.reference(f'trips/{trip_id}').get()
    if trip:
        trip['id'] = trip_id
    return trip

def get_days_for_trip(trip_id: str) -> List[dict]:
    """Days of a trip ordered by day_index."""
    days = db.reference('days').order_by_child('trip_id').equal_to(trip_id).get()
    if not days:
        return []

    days_list = []
    for day_id, day_data in days.items():
        day_data['id'] = day_id
        days_list.append(day_data)
    days_list.sort(key=lambda d: d.get('day_index', 0))
    return days_list

def get_activities_for_day(day_id: str) -> List[dict]:
    """Activities of a day ordered by position."""
    activities = db.reference('activities').order_by_child('day_id').equal_to(day_id).get()
    if not activities:
        return []

    activities_list = []
    for activity_id, activity_data in activities.items():
        activity_data['id'] = activity_id
        activities_list.append(activity_data)
    activities_list.sort(key=lambda a: a.get('position') or 0)
    return activities_list

def generate_days(trip_id: str):
    """
    Creates one day per calendar date of the trip, start and end included,
    numbered from 1. A trip that already has days is left untouched.
    """
    trip = get_trip_by_id(trip_id)
    if not trip:
        return None
    if get_days_for_trip(trip_id):
        raise ValueError("Days have already been generated for this trip.")

    start = _as_date(trip['start_date'])
    created = []
    for offset in range(trip_duration_days(trip['start_date'], trip['end_date'])):
        day_data = {
            "trip_id": trip_id,
            "date": (start + datetime.timedelta(days=offset)).isoformat(),
            "day_index": offset + 1,
            "notes": "",
            "created_at": datetime.datetime.utcnow().isoformat()
        }
        day_ref = db.reference('days').push()
        day_ref.set(day_data)
        day_data['id'] = day_ref.key
        created.append(day_data)

    logger.info("Generated %d days for trip %s", len(created), trip_id)
    return created

def get_itinerary(trip_id: str) -> Optional[dict]:
    """The trip with its days, each carrying its activities."""
    trip = get_trip_by_id(trip_id)
    if not trip:
        return None

    days = get_days_for_trip(trip_id)
    for day in days:
        day['activities'] = get_activities_for_day(day['id'])
    return {"trip": trip, "days": days}

def delete_trip(trip_id: str):
    """Deletes a trip together with its days, activities, packing lists and share links."""
    trip = get_trip_by_id(trip_id)
    if not trip:
        return False

    for day in get_days_for_trip(trip_id):
        for activity in get_activities_for_day(day['id']):
            db.reference(f"activities/{activity['id']}").delete()
        db.reference(f"days/{day['id']}").delete()

    for collection in ('packing_lists', 'share_links'):
        records = db.reference(collection).order_by_child('trip_id').equal_to(trip_id).get() or {}
        for key in records:
            db.reference(f'{collection}/{key}').delete()

    db.reference(f'trips/{trip_id}').delete()
    logger.info("Deleted trip %s", trip_id)
    analytics_service.track_event("trip_delete", trip_id=trip_id, user_id=trip.get('owner_id'))
    return True
