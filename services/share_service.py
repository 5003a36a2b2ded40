from firebase_admin import db
import datetime
import secrets
import string
from typing import Optional

from core.logger import get_logger
from services import analytics_service
from services.trip_service import get_itinerary

logger = get_logger(__name__)

SLUG_ALPHABET = string.ascii_lowercase + string.digits
SLUG_LENGTH = 10

def _new_slug() -> str:
    return "".join(secrets.choice(SLUG_ALPHABET) for _ in range(SLUG_LENGTH))

def share_path(slug: str) -> str:
    """Public path of a shared itinerary, as served by the frontend."""
    return f"/s/{slug}"

def create_share_link(trip_id: str, user_id: Optional[str] = None,
                      expires_in_days: Optional[int] = None):
    """Creates a public read-only link to a trip."""
    slug = _new_slug()
    while db.reference(f'share_links/{slug}').get() is not None:
        slug = _new_slug()

    now = datetime.datetime.utcnow()
    data_to_save = {
        "slug": slug,
        "trip_id": trip_id,
        "created_at": now.isoformat()
    }
    if expires_in_days:
        data_to_save["expires_at"] = (now + datetime.timedelta(days=expires_in_days)).isoformat()

    db.reference(f'share_links/{slug}').set(data_to_save)
    analytics_service.track_event("share_create", trip_id=trip_id, user_id=user_id)
    logger.info("Created share link %s for trip %s", slug, trip_id)

    data_to_save["path"] = share_path(slug)
    return data_to_save

def get_shared_itinerary(slug: str):
    """
    Resolves a share slug to the trip's itinerary.
    Returns None for unknown or expired links, or when the trip no longer exists.
    """
    share_link = db.reference(f'share_links/{slug}').get()
    if not share_link:
        return None

    expires_at = share_link.get("expires_at")
    if expires_at and datetime.datetime.fromisoformat(expires_at) < datetime.datetime.utcnow():
        logger.info("Share link %s has expired", slug)
        return None

    return get_itinerary(share_link["trip_id"])
