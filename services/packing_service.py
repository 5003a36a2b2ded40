from firebase_admin import db
import datetime
from typing import List, Optional

from core.logger import get_logger
from schemas.packing_schema import GeneratePackingListRequest, PackingCategory
from services import analytics_service
from services.trip_service import get_trip_by_id, trip_duration_days

logger = get_logger(__name__)

# --- Predefined Packing Items ---
BASE_ITEMS = {
    "Clothing": [
        "T-shirts",
        "Pants/Jeans",
        "Underwear",
        "Socks",
        "Comfortable shoes",
        "Jacket or sweater"
    ],
    "Electronics": [
        "Phone charger",
        "Power adapter",
        "Camera",
        "Portable battery"
    ],
    "Toiletries": [
        "Toothbrush and toothpaste",
        "Shampoo and soap",
        "Sunscreen",
        "Medications",
        "First aid kit"
    ],
    "Documents": [
        "Passport",
        "Travel insurance",
        "Hotel confirmations",
        "Emergency contacts",
        "Credit cards and cash"
    ]
}

ADVENTURE_CLOTHING = ["Hiking boots", "Athletic wear", "Rain jacket"]
ADVENTURE_GEAR = ["Backpack", "Water bottle", "Sunglasses"]
BUSINESS_CLOTHING = ["Dress shirt", "Dress pants", "Tie", "Formal shoes"]
BUSINESS_ITEMS = ["Laptop", "Business cards", "Portfolio"]
BEACH_CLOTHING = ["Swimsuit", "Sandals", "Sun hat"]
LONG_TRIP_ITEMS = ["Laundry detergent", "Extra bags for souvenirs"]
LONG_TRIP_DAYS = 5

def generate_packing_list(request: GeneratePackingListRequest) -> PackingCategory:
    """
    Builds a categorized packing list with a simple rule-based approach.
    The same request always yields the same list, in the same order.
    """
    # --- Base categories ---
    packing_list: PackingCategory = {category: list(items) for category, items in BASE_ITEMS.items()}

    # --- Trip-type and destination rules, evaluated independently ---
    if request.trip_type == "Adventure":
        packing_list["Clothing"].extend(ADVENTURE_CLOTHING)
        packing_list["Adventure Gear"] = list(ADVENTURE_GEAR)

    if request.trip_type == "Business":
        packing_list["Clothing"].extend(BUSINESS_CLOTHING)
        packing_list["Business Items"] = list(BUSINESS_ITEMS)

    if "beach" in request.destination.lower() or request.trip_type == "Leisure":
        packing_list["Clothing"].extend(BEACH_CLOTHING)

    if request.duration_days > LONG_TRIP_DAYS:
        packing_list["Miscellaneous"] = list(LONG_TRIP_ITEMS)

    return packing_list

# --- Editing ---
# Each edit returns a new mapping and leaves its input untouched.

def add_item(content: PackingCategory, category: str, item: str) -> PackingCategory:
    category = category.strip()
    item = item.strip()
    updated = {name: list(items) for name, items in content.items()}
    if not category or not item:
        return updated
    updated.setdefault(category, []).append(item)
    return updated

def remove_item(content: PackingCategory, category: str, item_index: int) -> PackingCategory:
    """Removes one item; a category left empty is removed as well."""
    updated = {name: list(items) for name, items in content.items()}
    if category not in updated:
        return updated
    updated[category] = [item for i, item in enumerate(updated[category]) if i != item_index]
    if not updated[category]:
        del updated[category]
    return updated

def add_category(content: PackingCategory, category: str) -> PackingCategory:
    category = category.strip()
    updated = {name: list(items) for name, items in content.items()}
    if category and category not in updated:
        updated[category] = []
    return updated

# --- Storage ---
# The Realtime Database sorts object keys, so content is stored as an ordered
# array of {category, items} entries to keep the display order.

def _to_stored(content: PackingCategory) -> List[dict]:
    return [{"category": category, "items": list(items)} for category, items in content.items()]

def _from_stored(entries) -> PackingCategory:
    content: PackingCategory = {}
    for entry in entries or []:
        content[entry["category"]] = list(entry.get("items") or [])
    return content

def _record(list_id: str, data: dict) -> dict:
    record = dict(data)
    record['id'] = list_id
    record['content'] = _from_stored(data.get('content'))
    return record

def create_packing_list_for_trip(trip_id: str, user_id: str):
    """Generates a packing list from the trip's details and saves it as the trip's latest list."""
    trip = get_trip_by_id(trip_id)
    if not trip or trip.get("owner_id") != user_id:
        return None # Trip not found or user does not have access

    content = generate_packing_list(GeneratePackingListRequest(
        destination=trip["primary_destination"],
        trip_type=trip["trip_type"],
        duration_days=trip_duration_days(trip["start_date"], trip["end_date"]),
        start_date=trip["start_date"],
        end_date=trip["end_date"]
    ))

    now = datetime.datetime.utcnow().isoformat()
    data_to_save = {
        "trip_id": trip_id,
        "content": _to_stored(content),
        "generated_by": "ai",
        "created_at": now,
        "updated_at": now
    }
    new_list_ref = db.reference('packing_lists').push()
    new_list_ref.set(data_to_save)

    analytics_service.track_event("packing_list_generate", trip_id=trip_id, user_id=user_id)
    logger.info("Generated packing list %s for trip %s", new_list_ref.key, trip_id)
    return _record(new_list_ref.key, data_to_save)

def get_packing_list(trip_id: str) -> Optional[dict]:
    """Retrieves the most recently created packing list for a trip."""
    lists = db.reference('packing_lists').order_by_child('trip_id').equal_to(trip_id).get()
    if not lists:
        return None

    list_id, data = max(lists.items(), key=lambda kv: kv[1].get('created_at', ''))
    return _record(list_id, data)

def save_packing_list(trip_id: str, content: PackingCategory):
    """Replaces the content of the trip's latest packing list."""
    packing_list = get_packing_list(trip_id)
    if not packing_list:
        return None

    changes = {
        "content": _to_stored(content),
        "updated_at": datetime.datetime.utcnow().isoformat()
    }
    db.reference(f"packing_lists/{packing_list['id']}").update(changes)
    packing_list.update(changes)
    packing_list['content'] = {name: list(items) for name, items in content.items()}
    return packing_list
