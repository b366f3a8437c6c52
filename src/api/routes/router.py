"""Agregador de rotas — registra todos os routers da API.

Uso:
    from api.routes import create_api_router

    app = FastAPI()
    app.include_router(create_api_router())
"""

from __future__ import annotations

from fastapi import APIRouter

from api.routes.agent.router import router as agent_router
from api.routes.health.router import router as health_router
from api.routes.payments.webhook import router as payments_router
from api.routes.whatsapp.router import router as whatsapp_router


def create_api_router() -> APIRouter:
    """Cria router principal com todos os sub-routers registrados.

    Returns:
        APIRouter configurado com todos os endpoints.
    """
    api_router = APIRouter()

    # Health checks (sem prefixo para /health e /ready na raiz)
    api_router.include_router(health_router, tags=["health"])

    api_router.include_router(
        whatsapp_router,
        prefix="/webhook/whatsapp",
        tags=["whatsapp"],
    )
    api_router.include_router(
        payments_router,
        prefix="/webhook/stripe",
        tags=["payments"],
    )

    # API direta (dashboard e integrações)
    api_router.include_router(agent_router, prefix="/agent", tags=["agent"])

    return api_router
