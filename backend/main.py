"""FastAPI application entry point."""
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import ORJSONResponse

from backend.config import settings
from backend.api.routes import weather, chatbase, spa
from backend.api.dependencies import get_weather_proxy_service
from backend.exceptions import ProxyError, proxy_error_handler

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Close the upstream HTTP client on shutdown."""
    if not settings.chatbot_identity_secret:
        logger.warning("CHATBOT_IDENTITY_SECRET not set; token endpoint disabled")
    yield
    await get_weather_proxy_service().aclose()


def create_app() -> FastAPI:
    """Create and configure the proxy application."""
    app = FastAPI(
        title=settings.api_title,
        version=settings.api_version,
        redirect_slashes=False,
        lifespan=lifespan,
        default_response_class=ORJSONResponse,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_exception_handler(ProxyError, proxy_error_handler)

    # API routers first; the SPA fallback must match last
    app.include_router(weather.router)
    app.include_router(chatbase.router)
    app.include_router(spa.router)
    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    logging.basicConfig(level=settings.log_level)
    logger.info("Skysense AI → http://localhost:%s", settings.port)
    uvicorn.run(app, host=settings.host, port=settings.port)
