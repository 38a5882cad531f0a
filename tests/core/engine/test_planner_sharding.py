# tests/core/engine/test_planner_sharding.py
"""
Testes do planejador de shards (plan_shards).

Este módulo valida a divisão determinística de uma fonte de tamanho
conhecido em shards contíguos.

Os testes asseguram que:
- a soma dos shards é exatamente o tamanho da fonte
- os tamanhos diferem em no máximo 1, com o excedente nos primeiros shards
- o número efetivo de workers nunca excede o tamanho da fonte
- entradas inválidas são rejeitadas com EngineConfigurationError

Limites explícitos:
    - Não valida a avaliação particionada (ver test_sharded)
"""

import pytest

try:
    from atlas_stream.core.engine.planner import plan_shards
    from atlas_stream.core.exceptions import EngineConfigurationError
except Exception as e:
    plan_shards = None
    EngineConfigurationError = None
    _IMPORT_ERR = e
else:
    _IMPORT_ERR = None


def _require_imports():
    """
    Garante que a implementação do planner esteja disponível para os testes.

    Falha imediatamente quando `plan_shards` não pode ser importado,
    apontando o módulo esperado.
    """
    if _IMPORT_ERR is not None:
        pytest.fail(f"""Missing planner. Implement:
- src/atlas_stream/core/engine/planner.py (plan_shards)
Import error: {_IMPORT_ERR}
""")


def test_overflow_goes_to_first_shards():
    """
    Verifica o exemplo canônico: 22 elementos em 4 workers → [6, 6, 5, 5].

    Invariantes:
        - ⌊22/4⌋ = 5; excedente 2 distribuído aos shards 0 e 1
    """
    _require_imports()
    assert plan_shards(22, 4) == [6, 6, 5, 5]


def test_even_split():
    _require_imports()
    assert plan_shards(12, 3) == [4, 4, 4]


def test_workers_capped_by_source_size():
    _require_imports()
    assert plan_shards(3, 8) == [1, 1, 1]


def test_empty_source_has_no_shards():
    _require_imports()
    assert plan_shards(0, 4) == []


@pytest.mark.parametrize("size,workers", [(1, 1), (7, 2), (100, 7), (101, 16), (5, 5)])
def test_partition_invariants(size, workers):
    _require_imports()
    shards = plan_shards(size, workers)

    assert sum(shards) == size
    assert len(shards) == min(size, workers)
    assert max(shards) - min(shards) <= 1
    assert shards == sorted(shards, reverse=True)
    assert plan_shards(size, workers) == shards


def test_unknown_size_is_rejected():
    _require_imports()
    with pytest.raises(EngineConfigurationError):
        plan_shards(-1, 4)


def test_zero_workers_is_rejected():
    _require_imports()
    with pytest.raises(EngineConfigurationError):
        plan_shards(10, 0)
