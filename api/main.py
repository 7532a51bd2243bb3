# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-02-12
# Description: main.py
# -----------------------------------------------------------------------------
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI

from api.AppContainer import AppContainer
from api.routers import chat, health


def create_app(container: Optional[AppContainer] = None) -> FastAPI:
    """
    Build the API. Without an explicit container one is constructed at startup,
    so importing this module stays cheap.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if getattr(app.state, "container", None) is None:
            app.state.container = AppContainer()
        yield

    app = FastAPI(title="Portfolio RAG API", lifespan=lifespan)
    app.state.container = container
    app.include_router(health.router)
    app.include_router(chat.router)
    return app


app = create_app()
