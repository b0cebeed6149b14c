from fastapi import FastAPI

from .cronjobs import router as cronjobs_router
from .notifications import router as notifications_router
from .orders import router as orders_router
from .settings import router as settings_router


def register_routes(app: FastAPI) -> None:
    """Register every API router on the FastAPI application."""

    app.include_router(notifications_router)
    app.include_router(cronjobs_router)
    app.include_router(orders_router)
    app.include_router(settings_router)
