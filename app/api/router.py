"""Main API router that includes all endpoint routers."""

from fastapi import APIRouter

from app.api import payments

api_router = APIRouter()

# Payments
api_router.include_router(payments.router, prefix="/payment", tags=["Payments"])
