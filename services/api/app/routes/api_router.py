"""Central API router composition.

This module is responsible for mounting individual route modules on the main app
router and providing a single import point for `FastAPI.include_router(...)`.
The application factory applies the configured `API_PREFIX` when mounting it.
"""

from fastapi import APIRouter

from .players import router as players_router

router = APIRouter()

router.include_router(players_router)
