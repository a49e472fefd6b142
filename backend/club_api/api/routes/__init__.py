from fastapi import APIRouter

from club_api.api.routes import auth, events, files, health, index_swaps, merch, orders

api_router = APIRouter()

api_router.include_router(health.router, tags=["health"])
api_router.include_router(events.router, prefix="/event", tags=["events"])
api_router.include_router(index_swaps.router, prefix="/indexSwap", tags=["index-swaps"])
api_router.include_router(merch.router, prefix="/merch", tags=["merch"])
api_router.include_router(orders.router, prefix="/order", tags=["orders"])
api_router.include_router(files.router, prefix="/file", tags=["files"])
api_router.include_router(auth.router, prefix="/auth", tags=["auth"])
