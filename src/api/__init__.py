"""API - camada de borda do SDK.

Responsabilidades:
- Superfície pública de webhooks
- Cliente HTTP JSON e mapeamento de erros da API

NÃO PODE conter: regras de verificação, rate limit ou idempotência (ficam em app/).
"""
