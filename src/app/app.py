"""Entrypoint da aplicação agent-gateway.

Inicializa o bootstrap e expõe a aplicação ASGI (FastAPI).

Uso (produção):
    uvicorn app.app:app --host 0.0.0.0 --port 8080

Uso (desenvolvimento):
    uvicorn app.app:app --reload --host 0.0.0.0 --port 8080
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import TYPE_CHECKING

from fastapi import FastAPI

from api.routes import create_api_router
from api.routes.whatsapp.webhook_runtime import drain_background_tasks
from app.bootstrap import build_runtime, initialize_app, validate_runtime_settings
from config.logging import get_logger

if TYPE_CHECKING:
    from collections.abc import AsyncGenerator

    from app.bootstrap import GatewayRuntime

# Inicializar logging ANTES de qualquer import que use logger
initialize_app()

logger = get_logger(__name__)

SERVICE_NAME = "agent-gateway"
SHUTDOWN_DRAIN_SECONDS = 30.0


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Gerencia ciclo de vida da aplicação.

    Startup:
    - Valida configurações
    - Monta o runtime (se não foi injetado)

    Shutdown:
    - Drena tasks de processamento pendentes
    - Fecha conexão Redis
    """
    logger.info("app_starting", extra={"service": SERVICE_NAME})
    if getattr(app.state, "runtime", None) is None:
        validate_runtime_settings()
        app.state.runtime = build_runtime()

    yield

    logger.info("app_shutting_down", extra={"service": SERVICE_NAME})
    await drain_background_tasks(timeout_seconds=SHUTDOWN_DRAIN_SECONDS)
    redis_client = getattr(app.state.runtime, "redis_client", None)
    if redis_client is not None:
        close_async = getattr(redis_client, "aclose", None)
        if callable(close_async):
            await close_async()


def create_app(runtime: GatewayRuntime | None = None) -> FastAPI:
    """Cria e configura a aplicação FastAPI.

    Args:
        runtime: Runtime pronto (testes); None monta a partir do ambiente
            no startup.

    Returns:
        Aplicação FastAPI configurada.
    """
    fastapi_app = FastAPI(
        title="agent-gateway",
        description="Gateway de mensagens com agentes por papel",
        version="1.0.0",
        lifespan=lifespan,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
    )
    fastapi_app.state.runtime = runtime

    # Registra todas as rotas
    fastapi_app.include_router(create_api_router())

    logger.info("app_configured", extra={"service": SERVICE_NAME})

    return fastapi_app


# Aplicação ASGI exposta para uvicorn
app = create_app()


def main() -> None:
    """Entrypoint para execução direta (desenvolvimento)."""
    import uvicorn

    logger.info("Starting agent-gateway in development mode")
    uvicorn.run(
        "app.app:app",
        host="0.0.0.0",
        port=8080,
        reload=True,
    )


if __name__ == "__main__":
    main()
