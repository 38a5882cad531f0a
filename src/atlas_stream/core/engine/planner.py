# src/atlas_stream/core/engine/planner.py
"""
Planejador de particionamento (sharding) da fonte.

Este módulo calcula, de forma pura e determinística, os tamanhos dos
shards contíguos em que os elementos restantes de um cursor de tamanho
conhecido são divididos para avaliação concorrente.

Política (v1):
    - O número efetivo de workers é `min(workers, source_size)`
    - Cada shard recebe ⌊n/w⌋ ou ⌈n/w⌉ elementos
    - O excedente é distribuído em round-robin a partir do shard 0

Exemplo:
    plan_shards(22, 4) → [6, 6, 5, 5]

Invariantes:
    - A soma dos shards é exatamente `source_size`
    - A diferença entre o maior e o menor shard é no máximo 1
    - Todo shard tem tamanho >= 1
    - A mesma entrada sempre produz a mesma saída

Limites explícitos:
    - Não acessa cursores
    - Não decide se a avaliação será particionada (ver `engine`)
"""

from __future__ import annotations

from typing import List

from atlas_stream.core.errors import engine_configuration_error


def plan_shards(source_size: int, workers: int) -> List[int]:
    """
    Distribui `source_size` elementos entre `workers` shards.

    Args:
        source_size (int): Quantidade de elementos (>= 0).
        workers (int): Quantidade de workers desejada (>= 1).

    Returns:
        List[int]: Tamanho de cada shard, na ordem de drenagem do cursor.

    Raises:
        EngineConfigurationError: Se `source_size < 0` ou `workers < 1`.
    """
    if source_size < 0:
        raise engine_configuration_error(
            message="Particionamento requer tamanho de fonte conhecido",
            details={"source_size": source_size},
        )
    if workers < 1:
        raise engine_configuration_error(
            message="Particionamento requer ao menos um worker",
            details={"workers": workers},
        )

    effective = min(workers, source_size)
    if effective == 0:
        return []

    base, overflow = divmod(source_size, effective)
    return [base + 1 if idx < overflow else base for idx in range(effective)]
