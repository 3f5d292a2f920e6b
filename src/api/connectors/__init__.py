"""Connectors - adapters de borda para APIs externas.

Estrutura:
- kulipa/: API Kulipa (webhooks e cliente HTTP)
"""

__all__: list[str] = []
