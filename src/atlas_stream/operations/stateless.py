# src/atlas_stream/operations/stateless.py
"""Operações intermediárias stateless.

Filter e flat_map invalidam o hint de tamanho (UNKNOWN_SIZE);
map e peek o preservam.
"""

from __future__ import annotations

from typing import Any, Callable

from atlas_stream.core.pipeline.stage import Stage, ChainedStage, TerminalStage
from atlas_stream.core.pipeline.types import UNKNOWN_SIZE


class FilterStage(ChainedStage):
    def __init__(self, next_stage: Stage, predicate: Callable[[Any], bool]) -> None:
        super().__init__(next_stage)
        self._predicate = predicate

    def begin(self, size: int) -> None:
        self.next_stage.begin(UNKNOWN_SIZE)

    def accept(self, element: Any) -> None:
        if self._predicate(element):
            self.next_stage.accept(element)


class MapStage(ChainedStage):
    def __init__(self, next_stage: Stage, mapper: Callable[[Any], Any]) -> None:
        super().__init__(next_stage)
        self._mapper = mapper

    def accept(self, element: Any) -> None:
        self.next_stage.accept(self._mapper(element))


class PeekStage(ChainedStage):
    def __init__(self, next_stage: Stage, consumer: Callable[[Any], None]) -> None:
        super().__init__(next_stage)
        self._consumer = consumer

    def accept(self, element: Any) -> None:
        self._consumer(element)
        self.next_stage.accept(element)


class FlatMapStage(ChainedStage):
    """Para cada elemento, avalia o stream aninhado direto no próximo estágio.

    `expand` recebe o elemento e devolve um objeto com `evaluate(stage)`
    (um Stream). O terminal da avaliação aninhada repassa accepts e
    respeita o cancelamento do próximo estágio; begin/end aninhados não
    são propagados.
    """

    def __init__(self, next_stage: Stage, expand: Callable[[Any], Any]) -> None:
        super().__init__(next_stage)
        self._expand = expand

    def begin(self, size: int) -> None:
        self.next_stage.begin(UNKNOWN_SIZE)

    def accept(self, element: Any) -> None:
        nested = self._expand(element)
        nested.evaluate(
            TerminalStage(
                accept=self.next_stage.accept,
                cancellation_requested=self.next_stage.cancellation_requested,
            )
        )
