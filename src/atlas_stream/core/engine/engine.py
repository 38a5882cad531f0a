# src/atlas_stream/core/engine/engine.py
"""
Engine de avaliação de pipelines do Atlas Stream.

O Engine recebe um cursor, um registro de operações e um estágio terminal,
monta a cadeia de estágios e a dirige até o fim ou até que um estágio
solicite cancelamento (short-circuit).

Modos:
    - SEQUENTIAL: a cadeia é dirigida diretamente na thread chamadora.
    - SHARDED: usado quando `workers > 1` e o tamanho da fonte é > 1.
      A thread chamadora drena o cursor shard a shard; cada shard é
      processado por um worker com sua própria instância da cadeia.

Particionamento (SHARDED):
    1. `workers` efetivo = min(workers, tamanho da fonte)
    2. tamanhos dos shards via `plan_shards`
    3. `begin(size)` uma vez, na thread chamadora, antes do dispatch
    4. drenagem serial do cursor por shard + dispatch ao pool
    5. join de todos os workers; `end()` uma vez na thread chamadora

Decisões arquiteturais:
    - O terminal é envolvido por uma barreira com lock: accepts
      concorrentes são serializados, begin/end dos shards são absorvidos
      e nada chega ao terminal depois que ele solicita cancelamento
    - Operações stateful (distinct, sorted, skip, limit) são locais ao shard
    - Falha de um worker não cancela os demais; após o join, a primeira
      falha (na ordem dos shards) é propagada e o terminal não recebe `end()`

Limites explícitos:
    - Não captura nem converte exceções de callbacks do usuário
    - Não preserva a ordem original no modo SHARDED
"""

from __future__ import annotations

import threading
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Any, List, Optional, Sequence

from atlas_stream.core.config.settings import EngineSettings
from atlas_stream.core.errors import exception_to_payload
from atlas_stream.core.pipeline.context import RunContext
from atlas_stream.core.pipeline.cursor import Cursor
from atlas_stream.core.pipeline.registry import OperationRegistry
from atlas_stream.core.pipeline.stage import Stage
from atlas_stream.core.pipeline.types import UNKNOWN_SIZE, EvaluationMode

from .planner import plan_shards

_PHASE = "evaluate"


def evaluate_sequential(chain: Stage, cursor: Cursor) -> None:
    """Dirige uma cadeia já montada contra o cursor, na thread chamadora."""
    chain.begin(cursor.size())
    while cursor.has_next() and not chain.cancellation_requested():
        chain.accept(cursor.next())
    chain.end()


def drive_shard(chain: Stage, elements: Sequence[Any]) -> None:
    """Dirige uma instância privada da cadeia sobre os elementos de um shard."""
    chain.begin(len(elements))
    for element in elements:
        if chain.cancellation_requested():
            break
        chain.accept(element)
    chain.end()


class _ShardBarrier:
    """Fronteira entre as cadeias dos shards e o estágio terminal.

    - `open`/`close` entregam begin/end ao terminal uma única vez
    - begin/end vindos das cadeias dos shards são absorvidos
    - accept e cancellation_requested são serializados por lock
    - accepts que chegam após o terminal cancelar são descartados
    """

    def __init__(self, terminal: Stage) -> None:
        self._terminal = terminal
        self._lock = threading.Lock()
        self._opened = False

    def open(self, size: int) -> None:
        if not self._opened:
            self._opened = True
            self._terminal.begin(size)

    def close(self) -> None:
        self._terminal.end()

    def begin(self, size: int) -> None:
        self.open(size)

    def accept(self, element: Any) -> None:
        # outro shard pode ter satisfeito o terminal entre a checagem e o accept
        with self._lock:
            if self._terminal.cancellation_requested():
                return
            self._terminal.accept(element)

    def end(self) -> None:
        return None

    def cancellation_requested(self) -> bool:
        with self._lock:
            return self._terminal.cancellation_requested()


class Engine:
    """Engine canônico do Atlas Stream (sequencial + particionado)."""

    def __init__(
        self,
        *,
        cursor: Cursor,
        registry: OperationRegistry,
        settings: Optional[EngineSettings] = None,
        ctx: Optional[RunContext] = None,
    ) -> None:
        self.cursor = cursor
        self.registry = registry
        self.settings = settings or EngineSettings()
        self.ctx = ctx

    def _log(self, level: str, message: str, **extra: Any) -> None:
        if self.ctx is not None:
            self.ctx.log(phase=_PHASE, level=level, message=message, **extra)

    def select_mode(self) -> EvaluationMode:
        if self.settings.workers > 1 and self.cursor.size() > 1:
            return EvaluationMode.SHARDED
        return EvaluationMode.SEQUENTIAL

    def run(self, terminal: Stage) -> EvaluationMode:
        mode = self.select_mode()
        self._log(
            "info",
            "evaluation started",
            mode=mode.value,
            workers=self.settings.workers,
            source_size=self.cursor.size(),
            operations=len(self.registry),
        )

        try:
            if mode is EvaluationMode.SHARDED:
                self._evaluate_sharded(terminal)
            else:
                evaluate_sequential(self.registry.assemble(terminal), self.cursor)
        except Exception as e:
            self._log("error", "evaluation failed", error=exception_to_payload(e).to_dict())
            raise

        self._log("info", "evaluation finished", mode=mode.value)
        return mode

    def _evaluate_sharded(self, terminal: Stage) -> None:
        source = self.cursor
        size = source.size()
        shards = plan_shards(size, self.settings.workers)
        self._log("debug", "shards planned", shards=list(shards))

        stateful = self.registry.stateful_operations()
        if stateful and self.ctx is not None:
            message = f"operações stateful locais a cada shard: {', '.join(stateful)}"
            self.ctx.add_warning(phase=_PHASE, message=message)
            self._log("warning", "stateful operations are shard-local", operations=stateful)

        barrier = _ShardBarrier(terminal)
        head = self.registry.assemble(barrier)
        head.begin(size)
        # estágios que adiam begin (ex.: sorted) não chegam ao terminal aqui
        barrier.open(UNKNOWN_SIZE)

        pool_size = len(shards)
        if self.settings.max_pool_workers is not None:
            pool_size = min(pool_size, self.settings.max_pool_workers)

        futures: List[Future] = []
        with ThreadPoolExecutor(max_workers=pool_size, thread_name_prefix="atlas-stream-shard") as executor:
            for shard_size in shards:
                bucket: List[Any] = []
                while len(bucket) < shard_size and source.has_next():
                    bucket.append(source.next())
                futures.append(executor.submit(self._run_shard, barrier, bucket))

        for future in futures:
            future.result()

        barrier.close()

    def _run_shard(self, barrier: _ShardBarrier, elements: List[Any]) -> None:
        drive_shard(self.registry.assemble(barrier), elements)
