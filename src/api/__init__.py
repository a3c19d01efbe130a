"""API — camada de borda com a Email API do Azure Communication Services.

Subpastas:
- connectors/: cliente HTTP, envelopes de resposta e erros
- payload_builders/: construção do payload de envio (Wire Message)
"""
