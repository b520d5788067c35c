"""API v1 router registration."""

from fastapi import APIRouter

from fahrtkasse.api.routes import payments

v1_router = APIRouter(prefix="/v1")
v1_router.include_router(payments.router)
