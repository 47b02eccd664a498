# Uvicorn application factory <https://www.uvicorn.org/#application-factories>
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from chat_relay.logging import logger
from chat_relay.managers.broadcast_hub import broadcast_hub
from chat_relay.managers.connection_registry import connection_registry
from chat_relay.routing import collect_subrouters
from chat_relay.settings import app_settings


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """
    Application startup and shutdown handler.

    Nothing needs initialising before the first connection; startup and
    shutdown are logged together with the number of clients still connected
    at shutdown, once presence updates still in flight have been sent.
    """
    logger.info(
        f"Server initialized ({app_settings.ENVIRONMENT}), "
        f"websocket endpoint at {app_settings.WS_PATH}"
    )

    yield

    await broadcast_hub.wait_pending()
    remaining = await connection_registry.count()
    logger.info(
        f"Application shutdown complete ({remaining} connections open)"
    )


def application() -> FastAPI:
    """
    Initializes and configures the FastAPI application.

    The application serves the chat WebSocket endpoint together with the
    health and metrics HTTP endpoints, collected by
    ``chat_relay.routing.collect_subrouters()``. Cross-origin requests are
    limited to the origins, methods and headers configured in settings.
    """
    app = FastAPI(
        title="Chat relay",
        description="Real-time chat relay over WebSocket",
        version="1.0.0",
        lifespan=lifespan,
    )

    app.include_router(collect_subrouters())

    app.add_middleware(
        CORSMiddleware,
        allow_origins=app_settings.CORS_ALLOW_ORIGINS,
        allow_methods=app_settings.CORS_ALLOW_METHODS,
        allow_headers=app_settings.CORS_ALLOW_HEADERS,
    )

    return app
