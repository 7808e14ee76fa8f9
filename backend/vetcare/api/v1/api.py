"""Module: api."""

# backend/vetcare/api/v1/api.py
from fastapi import APIRouter

# Core operational routes (health/auth).
from vetcare.api.v1.routes.health import router as health_router
from vetcare.api.v1.routes.auth import router as auth_router

# Profile routes.
from vetcare.api.v1.routes.accounts import router as accounts_router
from vetcare.api.v1.routes.professionals import router as professionals_router
from vetcare.api.v1.routes.species import router as species_router


api_router = APIRouter()

# Register operational endpoints first for service-level concerns.
api_router.include_router(health_router, prefix="/health", tags=["health"])
api_router.include_router(auth_router, prefix="/auth", tags=["auth"])

# Register business/domain endpoints.
api_router.include_router(accounts_router, prefix="/accounts", tags=["accounts"])
api_router.include_router(professionals_router, prefix="/professionals", tags=["professionals"])
api_router.include_router(species_router, prefix="/species", tags=["species"])
