from fastapi import APIRouter
from stat_relay.api.endpoints import frames

api_router = APIRouter()

# Combine all sub-routers into one
api_router.include_router(frames.router)
