from firebase_admin import db
import datetime
from typing import Literal, Optional

from core.logger import get_logger

logger = get_logger(__name__)

AnalyticsEvent = Literal[
    "trip_create",
    "trip_delete",
    "ai_generate",
    "share_create",
    "packing_list_generate",
]

def track_event(event_name: AnalyticsEvent, trip_id: Optional[str] = None,
                user_id: Optional[str] = None, metadata: Optional[dict] = None):
    """Appends an event to the `logs` collection. Never raises."""
    try:
        db.reference('logs').push({
            "event_name": event_name,
            "trip_id": trip_id,
            "user_id": user_id,
            "metadata": metadata,
            "created_at": datetime.datetime.utcnow().isoformat()
        })
    except Exception as e:
        logger.warning("Failed to track event %s: %s", event_name, e)
