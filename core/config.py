import os
from dotenv import load_dotenv

load_dotenv()

class Settings:
    """Application settings and configuration."""
    # Firebase service account key, as a JSON string
    FIREBASE_SERVICE_ACCOUNT_KEY_JSON = os.getenv("FIREBASE_SERVICE_ACCOUNT_KEY_JSON")
    FIREBASE_DATABASE_URL = os.getenv("FIREBASE_DATABASE_URL")

    # Place lookup: OpenStreetMap Nominatim for geocoding, Wikipedia for nearby places.
    # Nominatim's usage policy requires an identifying User-Agent.
    NOMINATIM_URL = os.getenv("NOMINATIM_URL", "https://nominatim.openstreetmap.org/search")
    WIKIPEDIA_API_URL = os.getenv("WIKIPEDIA_API_URL", "https://en.wikipedia.org/w/api.php")
    LOOKUP_USER_AGENT = os.getenv("LOOKUP_USER_AGENT", "SmartTrip/1.0")
    LOOKUP_TIMEOUT_SECONDS = float(os.getenv("LOOKUP_TIMEOUT_SECONDS", "10"))
    LOOKUP_MAX_PLACES = int(os.getenv("LOOKUP_MAX_PLACES", "30"))

    # Comma separated list of frontend origins allowed by CORS
    ALLOWED_ORIGINS = os.getenv(
        "SMARTTRIP_ALLOWED_ORIGINS",
        "http://localhost:5173,http://127.0.0.1:5173,http://localhost:8000",
    )

    LOG_LEVEL = os.getenv("SMARTTRIP_LOG_LEVEL", "INFO")

settings = Settings()
