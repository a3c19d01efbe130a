"""App — núcleo: domínio, infraestrutura e wiring.

Subpastas:
- bootstrap/: composition root (logging, settings, EmailClient)
- domain/: modelos do email a enviar
- infra/crypto/: assinatura HMAC das requisições
- protocols/: contratos (transporte HTTP)
- observability/: correlation_id para logs estruturados

Padrão: app executa; api adapta. app/ não importa de api/ em nível de módulo.
"""
