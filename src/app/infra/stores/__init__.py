"""Stores — implementações concretas de persistência.

Módulos disponíveis:
    - firestore_audit_store: Sink de auditoria usando Firestore
    - firestore_access_directory: Diretório de acesso usando Firestore
    - redis_access_directory: Diretório de acesso usando Redis (Upstash)
    - memory_stores: Stores em memória para desenvolvimento/testes
"""

from __future__ import annotations

from app.infra.stores.firestore_access_directory import FirestoreAccessDirectory
from app.infra.stores.firestore_audit_store import FirestoreAuditStore
from app.infra.stores.memory_stores import MemoryAccessDirectory, MemoryAuditStore
from app.infra.stores.redis_access_directory import RedisAccessDirectory

__all__ = [
    # Firestore
    "FirestoreAccessDirectory",
    "FirestoreAuditStore",
    # Memory (dev/test)
    "MemoryAccessDirectory",
    "MemoryAuditStore",
    # Redis (Upstash)
    "RedisAccessDirectory",
]
