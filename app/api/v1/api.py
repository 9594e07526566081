# app/api/v1/api.py

from fastapi import APIRouter
from app.api.v1.endpoints import (
    auth,
    seminars,
    bookings,
    reservations,
    surveys,
    member_domains,
)

# Mounted twice in app.main: once at /api/v1 for the default site and once
# under /{tenant}/api/v1 for tenant sites.
api_router = APIRouter()

api_router.include_router(auth.router)
api_router.include_router(seminars.router)
api_router.include_router(bookings.router)
api_router.include_router(reservations.router)
api_router.include_router(surveys.router)
api_router.include_router(member_domains.router)
