"""
Atlas Stream — Canonical Exceptions (v1)

Este módulo define exceções tipadas internas do Atlas Stream.

Objetivo:
- Permitir que fontes, pipeline e engine levantem exceções semânticas tipadas
- Facilitar o mapeamento determinístico para StreamErrorPayload
- Evitar ValueError/TypeError genéricos em violações de contrato

Regras:
- Exceções de callbacks do usuário NÃO são encapsuladas aqui; elas propagam.
- Exceções devem carregar apenas dados estruturados (serializáveis).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class StreamException(Exception):
    """Base class para exceções internas do Atlas Stream.

    Importante:
    - Sempre carregar dados estruturados em `details`
    - Mensagem deve ser curta e humana
    """

    message: str
    details: Dict[str, Any] = field(default_factory=dict)
    hint: Optional[str] = None

    def __str__(self) -> str:
        return self.message


# ---------------------------------------------------------------------------
# Fontes
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class InvalidSourceError(StreamException):
    """Valor passado a um construtor tipado de fonte não é do tipo esperado."""


# ---------------------------------------------------------------------------
# Pipeline / Engine
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class PipelineConsumedError(StreamException):
    """Pipeline já foi consumido por uma operação terminal (uso único)."""


@dataclass(frozen=True)
class EngineConfigurationError(StreamException):
    """Configuração inválida ou inconsistente para avaliação."""
