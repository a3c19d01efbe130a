"""Connectors — adapters de borda para APIs externas.

Estrutura:
- email/: Email API do Azure Communication Services
"""

__all__: list[str] = []
