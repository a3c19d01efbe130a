"""Payload builders — construção de payloads para APIs externas.

Estrutura:
- email/: Wire Message da Email API (ACS)
"""

__all__: list[str] = []
