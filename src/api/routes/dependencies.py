"""Acesso ao runtime do gateway a partir das rotas."""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import HTTPException, Request, status

if TYPE_CHECKING:
    from app.bootstrap.runtime import GatewayRuntime


def get_runtime(request: Request) -> GatewayRuntime:
    """Runtime montado no startup (503 enquanto não existir)."""
    runtime = getattr(request.app.state, "runtime", None)
    if runtime is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="runtime_not_ready",
        )
    return runtime
