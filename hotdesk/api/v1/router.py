
from fastapi import APIRouter

# Public — availability, booking, history, cancel
from hotdesk.api.v1.public.hotdesk import router as hotdesk_router

# Public — activity feed
from hotdesk.api.v1.public.activities import router as activities_router

# Admin
from hotdesk.api.v1.admin.hotdesk import router as hotdesk_admin_router
from hotdesk.api.v1.admin.seats import router as seats_router

api_router = APIRouter()

# --- Public: hot-desk booking ---
api_router.include_router(hotdesk_router)

# --- Public: activity feed ---
api_router.include_router(activities_router)

# --- Admin ---
api_router.include_router(hotdesk_admin_router)
api_router.include_router(seats_router)
