"""Versioned API router."""

from fastapi import APIRouter

from . import admin, auth, clients, health, orders, pets, public

router = APIRouter()
router.include_router(health.router, prefix="/health", tags=["health"])
router.include_router(auth.router, prefix="/auth", tags=["auth"])
router.include_router(clients.router, prefix="/clients", tags=["clients"])
router.include_router(pets.router, prefix="/pets", tags=["pets"])
router.include_router(orders.router, prefix="/orders", tags=["orders"])
router.include_router(admin.router, prefix="/admin", tags=["admin"])
router.include_router(public.router, prefix="/public", tags=["public"])

__all__ = ["router"]
