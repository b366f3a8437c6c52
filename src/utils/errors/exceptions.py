"""Exceções de domínio e de infraestrutura compartilhadas."""

from __future__ import annotations


class InfrastructureError(RuntimeError):
    """Base para falhas de infraestrutura transitórias."""


class RedisConnectionError(InfrastructureError):
    """Falha de conexão/timeout ao acessar Redis."""


class FirestoreUnavailableError(InfrastructureError):
    """Falha de indisponibilidade ao acessar Firestore."""


class RoleAlreadyAssignedError(ValueError):
    """Envelope já possui papel diferente do solicitado."""


class HandlerFailureError(RuntimeError):
    """Handler retornou resultado inválido ou falhou."""


class HandlerTimeoutError(HandlerFailureError):
    """Handler excedeu o prazo de execução."""


class AccessControlError(Exception):
    """Base para erros de gestão do diretório de acesso."""


class DuplicateGrantError(AccessControlError):
    """Já existe registro ativo para (remetente, papel)."""


class GrantNotFoundError(AccessControlError):
    """Nenhum registro encontrado para o remetente."""


class PermissionDeniedError(AccessControlError):
    """Ator sem privilégio para a operação de gestão."""
