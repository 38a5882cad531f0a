# tests/core/pipeline/test_registry.py
"""
Testes do registro de operações (OperationRegistry).

Este módulo valida a lista encadeada de operações e a montagem da
cadeia de estágios.

Os testes asseguram que:
- registrar não executa nenhum wrap
- a ordem de declaração é a ordem de execução
- cada montagem produz instâncias novas de estágios
- wraps não chamáveis são rejeitados

Decisões arquiteturais:
    - A cabeça é uma sentinela sem wrap
    - O registry guarda apenas o tail
"""

import pytest

try:
    from atlas_stream.core.pipeline.registry import Operation, OperationRegistry
    from atlas_stream.core.pipeline.stage import ChainedStage
except Exception as e:  # noqa: BLE001
    Operation = None
    OperationRegistry = None
    ChainedStage = None
    _IMPORT_ERR = e
else:
    _IMPORT_ERR = None


def _require_imports():
    """
    Garante que o registro de operações esteja disponível para os testes.

    Falha imediatamente com mensagem explícita quando `registry` não
    pode ser importado, evitando erros indiretos nos testes abaixo.
    """
    if _IMPORT_ERR is not None:
        pytest.fail(f"""Missing registry. Implement:
- src/atlas_stream/core/pipeline/registry.py (Operation, OperationRegistry)
Import error: {_IMPORT_ERR}
""")


def _tagging(tag, log):
    class _Tag(ChainedStage):
        def accept(self, element):
            log.append(tag)
            self.next_stage.accept(element)

    return lambda next_stage: _Tag(next_stage)


def test_empty_registry_returns_terminal(RecordingStage):
    _require_imports()
    registry = OperationRegistry()
    terminal = RecordingStage()

    assert len(registry) == 0
    assert registry.tail.is_head
    assert registry.assemble(terminal) is terminal


def test_declaration_order_is_execution_order(RecordingStage):
    """
    Verifica que a ordem de registro determina a ordem de execução.

    Invariantes:
        - O primeiro wrap registrado é o estágio mais externo
        - O último wrap registrado envolve diretamente o terminal
    """
    _require_imports()
    log = []
    registry = OperationRegistry()
    for tag in ("a", "b", "c"):
        registry.add(_tagging(tag, log))
    terminal = RecordingStage()

    chain = registry.assemble(terminal)
    chain.accept(1)

    assert len(registry) == 3
    assert log == ["a", "b", "c"]
    assert terminal.accepted == [1]


def test_add_does_not_invoke_wrap():
    _require_imports()
    calls = []
    registry = OperationRegistry()

    op = registry.add(lambda next_stage: calls.append(next_stage))

    assert calls == []
    assert isinstance(op, Operation)
    assert registry.tail is op
    assert op.previous.is_head


def test_assemble_creates_fresh_instances(RecordingStage):
    _require_imports()
    registry = OperationRegistry()
    registry.add(lambda next_stage: ChainedStage(next_stage))
    terminal = RecordingStage()

    assert registry.assemble(terminal) is not registry.assemble(terminal)


def test_operations_keep_name_and_stateful_flag():
    _require_imports()
    registry = OperationRegistry()
    registry.add(lambda s: s, name="filter")
    registry.add(lambda s: s, name="sorted", stateful=True)
    registry.add(lambda s: s, name="map")
    registry.add(lambda s: s, name="limit", stateful=True)

    assert [op.name for op in registry.operations()] == ["filter", "sorted", "map", "limit"]
    assert registry.stateful_operations() == ["sorted", "limit"]


def test_non_callable_wrap_is_rejected():
    _require_imports()
    with pytest.raises(TypeError):
        OperationRegistry().add("not-callable")  # type: ignore[arg-type]
