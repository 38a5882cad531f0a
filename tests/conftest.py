# tests/conftest.py
"""
Fixtures compartilhados para testes do Atlas Stream.

Este módulo define fixtures reutilizáveis que fornecem:
- configurações mínimas e determinísticas (YAML como string)
- contexto de execução controlado (RunContext)
- estágios terminais de gravação para inspecionar o contrato de Stage

O objetivo destas fixtures é permitir testes do core
(config, pipeline, engine) e das operações sem depender de:
- variáveis de ambiente
- fontes externas de dados

Invariantes:
    - Nenhuma fixture avalia pipeline real
    - Dados retornados são determinísticos e isolados

Limites explícitos:
    - Não substituir testes de integração da API fluente
"""

import threading
from datetime import datetime, timezone

import pytest


@pytest.fixture
def engine_defaults_yaml() -> str:
    """
    YAML de defaults semelhante a um `config.defaults.yaml` real.

    Avaliação sequencial por padrão, sem limite explícito de pool.
    """
    return """\
engine:
  workers: 0
  max_pool_workers: null
pipeline:
  name: default
  tags: [base]
"""


@pytest.fixture
def engine_local_yaml() -> str:
    """YAML de overrides locais: ativa 4 workers e troca as tags."""
    return """\
engine:
  workers: 4
pipeline:
  tags: [local, sharded]
"""


@pytest.fixture
def dummy_ctx():
    """
    RunContext determinístico para testes de engine e logging.

    `run_id` e `created_at` fixos; configuração vazia.
    """
    from atlas_stream.core.pipeline.context import RunContext

    return RunContext(
        run_id="test-run",
        created_at=datetime(2024, 1, 1, tzinfo=timezone.utc),
        config={},
        meta={},
    )


class _RecordingStage:
    """
    Estágio terminal que grava todas as chamadas recebidas.

    Usa duck typing em vez de herança de `TerminalStage`, e um lock
    para poder ser usado também no modo particionado.
    """

    def __init__(self, cancel_after=None):
        self.calls = []
        self.accepted = []
        self._cancel_after = cancel_after
        self._lock = threading.Lock()

    def begin(self, size):
        with self._lock:
            self.calls.append(("begin", size))

    def accept(self, element):
        with self._lock:
            self.calls.append(("accept", element))
            self.accepted.append(element)

    def end(self):
        with self._lock:
            self.calls.append(("end",))

    def cancellation_requested(self):
        return self._cancel_after is not None and len(self.accepted) >= self._cancel_after

    def count(self, name):
        return sum(1 for call in self.calls if call[0] == name)


@pytest.fixture
def RecordingStage():
    """Classe de estágio terminal que grava begin/accept/end recebidos."""
    return _RecordingStage
