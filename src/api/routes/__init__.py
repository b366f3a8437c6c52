"""Rotas HTTP da API — adapters de entrada.

Responsabilidades:
- Definir endpoints HTTP (webhooks, API direta, health)
- Validação inicial de request (assinatura, JSON, corpo)
- Delegação para o runtime (resolver, dispatcher, delivery)
- Respostas HTTP apropriadas

Estrutura:
- routes/whatsapp/: webhook do WhatsApp + tasks de processamento
- routes/payments/: webhook de pagamentos (Stripe)
- routes/agent/: POST /agent/{role}
- routes/health/: health checks e readiness

Agregação:
- router.py: registra todos os routers no app principal
"""

from __future__ import annotations

from api.routes.router import create_api_router

__all__ = ["create_api_router"]
