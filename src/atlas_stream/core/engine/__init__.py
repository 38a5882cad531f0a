# src/atlas_stream/core/engine/__init__.py
"""
Engine do Atlas Stream.

Este pacote contém a implementação responsável por **planejar** e
**avaliar** pipelines lazy a partir de um cursor, de um registro de
operações e de um estágio terminal.

Componentes principais:
    - planner → particionamento determinístico da fonte em shards
    - engine  → avaliação sequencial ou particionada (sharded)

Invariantes:
    - Nenhum trabalho acontece antes da avaliação terminal
    - O cursor é acessado apenas pela thread chamadora
    - O estágio terminal recebe begin/end exatamente uma vez cada

Limites explícitos:
    - Não define operações concretas
    - Não captura exceções de callbacks do usuário
"""

from .engine import Engine, drive_shard, evaluate_sequential
from .planner import plan_shards

__all__ = ["Engine", "drive_shard", "evaluate_sequential", "plan_shards"]
