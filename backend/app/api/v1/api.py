from fastapi import APIRouter  # type: ignore

from app.api.v1.endpoints import compliance, events, monitoring, object_ids

# Create the main API router
router = APIRouter()

# Include all endpoint routers
router.include_router(events.router, prefix="/events", tags=["events"])
router.include_router(compliance.router, prefix="/compliance", tags=["compliance"])
router.include_router(monitoring.router, prefix="/monitoring", tags=["monitoring"])
router.include_router(object_ids.router, prefix="/object-ids", tags=["object-ids"])
