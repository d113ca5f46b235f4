"""
Main API router that includes all route modules.
"""
from fastapi import APIRouter
from app.api.routes import (
    auth, users, trips, stops, activities, expenses,
    public_trips, itinerary, cities, community, admin
)

api_router = APIRouter()

# Include all route modules
api_router.include_router(auth.router)
api_router.include_router(users.router)
api_router.include_router(trips.router)
api_router.include_router(stops.router)
api_router.include_router(activities.router)
api_router.include_router(expenses.router)
api_router.include_router(public_trips.router)
api_router.include_router(itinerary.router)
api_router.include_router(cities.router)
api_router.include_router(community.router)
api_router.include_router(admin.router)
