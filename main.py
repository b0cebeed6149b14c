from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from storeadmin.config import get_settings
from storeadmin.infrastructure import database
from storeadmin.infrastructure.settings_cache import SettingsCache
from storeadmin.interfaces.api.routes import register_routes


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Create the record store tables on startup and release them on shutdown."""

    database.initialize_database()
    yield
    database.engine.dispose()


def create_app() -> FastAPI:
    """Create and configure the admin notification API."""

    settings = get_settings()
    app = FastAPI(title="Storefront admin notifications", lifespan=lifespan)
    app.state.settings_cache = SettingsCache(settings.settings_cache_ttl_seconds)

    # Allows the admin panel to call the API from the browser.
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_routes(app)
    return app


app = create_app()
