"""Observabilidade — correlation_id para logs estruturados.

Uso:
    from app.observability import batch_correlation_scope, get_correlation_id
"""

from app.observability.correlation import (
    batch_correlation_scope,
    generate_correlation_id,
    get_correlation_id,
    reset_correlation_id,
    set_correlation_id,
)

__all__ = [
    "batch_correlation_scope",
    "generate_correlation_id",
    "get_correlation_id",
    "reset_correlation_id",
    "set_correlation_id",
]
