"""
Atlas Stream — Canonical Error Structures (v1)

Este módulo define o padrão canônico de erros do Atlas Stream.
Erros registrados no RunContext são artefatos de rastreabilidade e devem ser:

- explícitos
- serializáveis
- acionáveis

O payload nunca substitui a exceção original: o engine registra o payload e
propaga a exceção ao chamador.
"""

from __future__ import annotations

from dataclasses import dataclass, asdict, field
from typing import Any, Dict, Optional

from .exceptions import (
    EngineConfigurationError,
    InvalidSourceError,
    PipelineConsumedError,
    StreamException,
)


# ---------------------------------------------------------------------------
# Payload canônico
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class StreamErrorPayload:
    """
    Payload canônico de erro do Atlas Stream.

    Campos:
    - type: código estável do erro (não é texto livre)
    - message: mensagem curta, humana e objetiva
    - details: dados estruturados relevantes para diagnóstico
    - hint: ação sugerida ao chamador (onde corrigir)
    """

    type: str
    message: str
    details: Dict[str, Any] = field(default_factory=dict)
    hint: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Retorna representação serializável do erro."""
        return asdict(self)


# ---------------------------------------------------------------------------
# Catálogo canônico de tipos de erro (v1)
# ---------------------------------------------------------------------------

# Fontes
SOURCE_INVALID_KIND = "SOURCE_INVALID_KIND"

# Pipeline
PIPELINE_ALREADY_CONSUMED = "PIPELINE_ALREADY_CONSUMED"

# Engine / Execução
ENGINE_EXECUTION_ERROR = "ENGINE_EXECUTION_ERROR"
ENGINE_CONFIGURATION_ERROR = "ENGINE_CONFIGURATION_ERROR"

_EXCEPTION_CODES = {
    InvalidSourceError: SOURCE_INVALID_KIND,
    PipelineConsumedError: PIPELINE_ALREADY_CONSUMED,
    EngineConfigurationError: ENGINE_CONFIGURATION_ERROR,
}


# ---------------------------------------------------------------------------
# Helpers de fábrica
# ---------------------------------------------------------------------------

def invalid_source(
    *,
    constructor: str,
    expected: str,
    received: str,
    hint: str = "Passe um valor do tipo esperado pelo construtor de fonte ou use outro construtor.",
) -> InvalidSourceError:
    return InvalidSourceError(
        message=f"{constructor} requer {expected}, recebido: {received}",
        details={
            "constructor": constructor,
            "expected": expected,
            "received": received,
        },
        hint=hint,
    )


def pipeline_already_consumed(
    *,
    operation: str,
    hint: str = "Construa uma nova fonte; um pipeline só pode ser avaliado uma vez.",
) -> PipelineConsumedError:
    return PipelineConsumedError(
        message="Pipeline já consumido por uma operação terminal",
        details={"operation": operation},
        hint=hint,
    )


def engine_configuration_error(
    *,
    message: str = "Configuração inválida para avaliação do pipeline",
    details: Optional[Dict[str, Any]] = None,
    hint: str = "Revise a seção `engine` da configuração antes de reavaliar.",
) -> EngineConfigurationError:
    return EngineConfigurationError(
        message=message,
        details=details or {},
        hint=hint,
    )


def exception_to_payload(exc: BaseException) -> StreamErrorPayload:
    """Converte exceções em StreamErrorPayload (serializável, acionável).

    Regras:
    - StreamException: já vem com message/details/hint.
    - Outras exceções (callbacks do usuário): encapsular como
      ENGINE_EXECUTION_ERROR sem expor stack trace.
    """
    if isinstance(exc, StreamException):
        code = _EXCEPTION_CODES.get(type(exc), exc.__class__.__name__)
        return StreamErrorPayload(
            type=code,
            message=exc.message or "Erro de avaliação",
            details=dict(exc.details or {}),
            hint=exc.hint,
        )

    return StreamErrorPayload(
        type=ENGINE_EXECUTION_ERROR,
        message=str(exc) or "Erro inesperado durante avaliação",
        details={"exception_class": exc.__class__.__name__},
        hint="Verifique o callback (predicate/mapper/comparator) que falhou; nenhum resultado parcial é retornado.",
    )
