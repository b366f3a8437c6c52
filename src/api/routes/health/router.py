"""Endpoints de health check para Cloud Run."""

from __future__ import annotations

import asyncio
import time
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import TYPE_CHECKING, Any, Literal

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from api.routes.whatsapp.webhook_runtime_tasks import active_task_count

if TYPE_CHECKING:
    from collections.abc import Awaitable

router = APIRouter()

SERVICE_NAME = "agent-gateway"
REDIS_TIMEOUT_SECONDS = 2.0
FIRESTORE_TIMEOUT_SECONDS = 3.0


class HealthResponse(BaseModel):
    """Resposta do health check."""

    status: str
    service: str
    timestamp: str
    version: str = "1.0.0"


@dataclass(frozen=True, slots=True)
class DependencyCheck:
    """Resultado de checagem de dependência."""

    status: Literal["ok", "skipped", "failed"]
    latency_ms: float | None = None
    error: str | None = None

    def as_dict(self) -> dict[str, Any]:
        return {
            "status": self.status,
            "latency_ms": self.latency_ms,
            "error": self.error,
        }


@router.get("/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """Liveness probe — verifica se o serviço está rodando."""
    return HealthResponse(
        status="healthy",
        service=SERVICE_NAME,
        timestamp=datetime.now(UTC).isoformat(),
    )


@router.get("/ready")
async def readiness_check(request: Request) -> JSONResponse:
    """Readiness probe — runtime montado e backends configurados respondendo.

    Backends em memória não têm dependência externa e aparecem como
    "skipped".
    """
    runtime = getattr(request.app.state, "runtime", None)
    if runtime is None:
        return JSONResponse(
            content={
                "status": "not_ready",
                "checks": {"runtime": {"status": "failed", "error": "not_initialized"}},
                "timestamp": datetime.now(UTC).isoformat(),
            },
            status_code=503,
        )

    redis_check, firestore_check = await asyncio.gather(
        _check_redis(runtime.redis_client),
        _check_firestore(runtime.firestore_client),
    )
    ready = redis_check.status != "failed" and firestore_check.status != "failed"

    payload = {
        "status": "ready" if ready else "not_ready",
        "checks": {
            "redis": redis_check.as_dict(),
            "firestore": firestore_check.as_dict(),
        },
        "active_tasks": active_task_count(),
        "timestamp": datetime.now(UTC).isoformat(),
    }
    return JSONResponse(content=payload, status_code=200 if ready else 503)


async def _timed_check(probe: Awaitable[Any], timeout_seconds: float) -> DependencyCheck:
    started_at = time.perf_counter()
    try:
        await asyncio.wait_for(probe, timeout=timeout_seconds)
    except TimeoutError:
        return DependencyCheck(status="failed", error="timeout")
    except Exception as exc:
        return DependencyCheck(status="failed", error=type(exc).__name__)
    latency_ms = (time.perf_counter() - started_at) * 1000
    return DependencyCheck(status="ok", latency_ms=round(latency_ms, 2))


async def _check_redis(redis_client: Any | None) -> DependencyCheck:
    if redis_client is None:
        return DependencyCheck(status="skipped")
    return await _timed_check(redis_client.ping(), REDIS_TIMEOUT_SECONDS)


async def _check_firestore(firestore_client: Any | None) -> DependencyCheck:
    if firestore_client is None:
        return DependencyCheck(status="skipped")
    return await _timed_check(
        asyncio.to_thread(_read_firestore_health_doc, firestore_client),
        FIRESTORE_TIMEOUT_SECONDS,
    )


def _read_firestore_health_doc(firestore_client: Any) -> bool:
    # Documento ausente ainda prova conectividade
    doc = firestore_client.collection("_health").document("check").get()
    return bool(getattr(doc, "exists", False))
