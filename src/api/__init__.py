"""API — camada de borda e adapters de transporte.

Responsabilidades:
- Receber requests externos (webhooks, API direta)
- Validar assinaturas e payloads
- Normalizar dados para modelos internos
- Enviar mensagens pela API do canal

Subpastas:
- connectors/: assinatura, parse e clientes HTTP por transporte
- normalizers/: conversão de payloads externos → modelos internos
- routes/: endpoints HTTP (webhooks, agent, health)

NÃO PODE conter: FSM, regras de autorização, orquestração do despacho.
"""
