# src/atlas_stream/core/pipeline/types.py
"""
Tipos canônicos do pipeline do Atlas Stream.

Componentes principais:
    - UNKNOWN_SIZE   → sentinela de tamanho desconhecido/ilimitado
    - KV             → par chave/valor produzido por fontes de mapeamento
    - EvaluationMode → modo de avaliação escolhido pelo engine
    - Comparator     → assinatura de comparadores `(a, b) -> int`

Invariantes:
    - Tamanhos conhecidos são inteiros >= 0
    - UNKNOWN_SIZE é sempre -1
    - KV é imutável

Limites explícitos:
    - Nenhuma lógica de avaliação vive neste módulo
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable

UNKNOWN_SIZE = -1

Comparator = Callable[[Any, Any], int]


def is_known_size(size: int) -> bool:
    return size >= 0


@dataclass(frozen=True)
class KV:
    """
    Par chave/valor emitido por cursores de coleções mapeadas.

    Campos:
        - key: chave original da coleção
        - value: valor associado à chave
    """
    key: Any
    value: Any


class EvaluationMode(str, Enum):
    """
    Modos de avaliação de um pipeline.

    Os valores são strings para facilitar serialização nos eventos
    registrados no RunContext.

    Modos definidos:
        - SEQUENTIAL: cadeia única dirigida na thread chamadora
        - SHARDED: shards contíguos processados por cadeias independentes
    """
    SEQUENTIAL = "sequential"
    SHARDED = "sharded"
