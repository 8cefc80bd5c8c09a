import logging
from contextlib import asynccontextmanager
from typing import Optional

import uvicorn
from fastapi import FastAPI
from fastapi.responses import PlainTextResponse

from app.api.middleware import CORSPolicyMiddleware
from app.api.responses import CorsPolicy, register_exception_handlers
from app.api.router import api_router
from app.core.config import Settings, settings
from app.core.credentials import CredentialSelector
from app.core.database import DataAccess

logger = logging.getLogger(__name__)


def create_app(app_settings: Optional[Settings] = None) -> FastAPI:
    """
    Build the gateway from configuration.
    Raises ConfigurationError right away if a database profile is incomplete.
    """
    app_settings = app_settings or settings
    logging.basicConfig(level=app_settings.LOG_LEVEL.upper())

    selector = CredentialSelector.from_settings(app_settings)
    data_access = DataAccess(selector, timeout=app_settings.DB_TIMEOUT_SECONDS)

    # Dispose the engines once the server stops
    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info(f"SQL gateway running on port {app_settings.PORT}")
        logger.info(f"DB proxy: {app_settings.DB_HOST}:{app_settings.DB_PORT}")
        yield
        await data_access.dispose()

    app = FastAPI(title="SQL Gateway", lifespan=lifespan, redirect_slashes=False)
    app.state.settings = app_settings
    app.state.data_access = data_access

    app.add_middleware(
        CORSPolicyMiddleware,
        policy=CorsPolicy(app_settings.ALLOWED_ORIGIN),
        expose_error_details=app_settings.EXPOSE_ERROR_DETAILS,
    )
    register_exception_handlers(app)

    @app.get("/", response_class=PlainTextResponse)
    async def root():
        return "SQL gateway is running"

    # Include the master router containing all our endpoints
    app.include_router(api_router)
    return app


app = create_app()


def run():
    uvicorn.run(app, host=settings.HOST, port=settings.PORT)


if __name__ == "__main__":
    run()
