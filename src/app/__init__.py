"""App — coração do gateway: despacho, serviços e infraestrutura.

Subpastas:
- bootstrap/: composition root (clientes, runtime, inicialização)
- domain/: modelos puros (papéis, envelope, autorização, auditoria)
- handlers/: handlers por papel e registro papel → handler
- services/: resolver, dispatcher, delivery executor, gestão de acesso
- infra/: implementações concretas de IO (stores, senders, http)
- protocols/: contratos/interfaces
- observability/: correlation_id e métricas em log estruturado
- constants/: textos fixos dos handlers

Padrão: app executa; api adapta; fsm governa; utils apoia.
"""
