from __future__ import annotations

from fastapi import APIRouter

from inventory_service.api.endpoints import forms, inventory, register, search


api_router = APIRouter()

api_router.include_router(forms.router, tags=["forms"])

api_router.include_router(register.router, prefix="/register", tags=["inventory"])
api_router.include_router(inventory.router, prefix="/inventory", tags=["inventory"])
api_router.include_router(search.router, prefix="/search", tags=["inventory"])
