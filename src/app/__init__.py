"""App - núcleo do SDK: verificação de webhooks e pipeline outbound.

Subpastas:
- bootstrap/: composition root (factory do SDK, inicialização de logging)
- webhooks/: modelos, headers e verificador de webhooks
- infra/: implementações concretas (crypto, HTTP, cache de chaves)
- protocols/: contratos/interfaces
- observability/: correlation_id para logs

Padrão: app executa; api expõe; config configura; utils apoia.
"""
