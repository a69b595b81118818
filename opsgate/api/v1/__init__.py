"""API v1 routes."""

from fastapi import APIRouter

from opsgate.api.v1 import admin, auth, health, service_admin, service_auth, users

router = APIRouter()
router.include_router(health.router, prefix="/health", tags=["health"])
router.include_router(auth.router, prefix="/auth", tags=["auth"])
router.include_router(users.router, prefix="/users", tags=["users"])
router.include_router(admin.router, prefix="/admin", tags=["admin"])
router.include_router(service_auth.router, prefix="/service/auth", tags=["service"])
router.include_router(service_admin.router, prefix="/service/admin", tags=["service"])
