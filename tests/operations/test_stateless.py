# tests/operations/test_stateless.py
"""
Testes das operações intermediárias stateless (filter, map, peek, flat_map).

Os testes asseguram que:
- a ordem da fonte é preservada no modo sequencial
- filter e flat_map invalidam o hint de tamanho; map e peek o preservam
- flat_map aceita Stream ou sequência e respeita cancelamento a jusante
- nada é executado antes da operação terminal
"""

import threading

from atlas_stream import generate, of_elements, of_sequence
from atlas_stream.core.pipeline.types import UNKNOWN_SIZE
from atlas_stream.operations import FilterStage, FlatMapStage, MapStage, PeekStage


def test_filter_then_map():
    out = of_sequence([4, 3, 2, 1]).filter(lambda x: x % 2 == 0).map(lambda x: x * 10).to_list()
    assert out == [40, 20]


def test_operations_are_lazy():
    seen = []
    stream = of_elements(1, 2, 3).peek(seen.append).map(lambda x: x + 1)

    assert seen == []
    assert stream.to_list() == [2, 3, 4]
    assert seen == [1, 2, 3]


def test_size_hints(RecordingStage):
    terminal = RecordingStage()
    FilterStage(terminal, lambda x: True).begin(10)
    MapStage(terminal, lambda x: x).begin(10)
    PeekStage(terminal, lambda x: None).begin(10)
    FlatMapStage(terminal, lambda x: x).begin(10)

    assert [call[1] for call in terminal.calls] == [UNKNOWN_SIZE, 10, 10, UNKNOWN_SIZE]


def test_flat_map_with_sequences_and_streams():
    assert of_elements(1, 2, 3).flat_map(lambda x: [x] * x).to_list() == [1, 2, 2, 3, 3, 3]
    assert of_elements(1, 2).flat_map(lambda x: of_elements(x, -x)).to_list() == [1, -1, 2, -2]
    assert of_elements(1, 2).flat_map(lambda x: []).to_list() == []


def test_flat_map_honours_downstream_cancellation():
    """
    Um stream aninhado infinito termina quando o limit a jusante satura.
    """
    out = of_elements("a", "b").flat_map(lambda x: generate(lambda: x)).limit(3).to_list()
    assert out == ["a", "a", "a"]


def test_peek_sees_only_pulled_elements():
    seen = []
    assert of_sequence(range(10)).peek(seen.append).find_first() == 0
    assert seen == [0]


def test_flat_map_nested_stream_runs_sequentially():
    """
    Um stream aninhado configurado com parallel(n) é avaliado na thread
    da cadeia externa, sem pool de shards.
    """
    threads = set()
    seen = []

    def _record(x):
        threads.add(threading.current_thread().name)
        seen.append(x)

    of_elements(1).flat_map(lambda _: of_sequence(range(40)).parallel(4)).for_each(_record)

    assert threads == {threading.current_thread().name}
    assert seen == list(range(40))
