# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-02-12
# Description: dependencies.py
# -----------------------------------------------------------------------------
from fastapi import Request

from api.AppContainer import AppContainer
from services.PortfolioChatService import PortfolioChatService
from services.PortfolioHealthService import PortfolioHealthService


def get_container(request: Request) -> AppContainer:
    # built once at startup, see api.main.create_app
    return request.app.state.container


def get_chat_service(request: Request) -> PortfolioChatService:
    return get_container(request).chat_service


def get_health_service(request: Request) -> PortfolioHealthService:
    return get_container(request).health_service
