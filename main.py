from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from core.config import settings

app = FastAPI(
    title="SmartTrip Backend API",
    description="API for the SmartTrip trip planner: trips, itineraries, suggestions, packing lists and sharing.",
    version="0.1.0",
)

# Configure CORS so the frontend can talk to the backend.
origins = [origin.strip() for origin in settings.ALLOWED_ORIGINS.split(",") if origin.strip()]

app.add_middleware(
    CORSMiddleware,
    allow_origins=origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

@app.get("/", tags=["Root"])
def read_root():
    """Service liveness check."""
    return {"service": "smarttrip", "status": "ok"}

# Include the routers
from api.routers import auth, trips, ai, packing, share

# Mount all routers with the /api prefix
app.include_router(auth.router, prefix="/api")
app.include_router(trips.router, prefix="/api")
app.include_router(ai.router, prefix="/api")
app.include_router(packing.router, prefix="/api")
app.include_router(share.router, prefix="/api")
