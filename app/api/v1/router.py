
from fastapi import APIRouter

# Admin
from app.api.v1.admin.venues import router as venues_router
from app.api.v1.admin.events import router as events_router
from app.api.v1.admin.customers import router as customers_router
from app.api.v1.admin.bookings import router as bookings_router

api_router = APIRouter()

# --- Admin ---
api_router.include_router(venues_router)
api_router.include_router(events_router)
api_router.include_router(customers_router)
api_router.include_router(bookings_router)
