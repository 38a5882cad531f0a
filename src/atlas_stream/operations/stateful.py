# src/atlas_stream/operations/stateful.py
"""
Operações intermediárias stateful.

Cada estágio guarda seu estado em atributos privados, reiniciados em
`begin`. Como cada montagem de cadeia cria instâncias novas, shards
distintos nunca compartilham estado.

Políticas (v1):
    - distinct   → primeira ocorrência de cada chave; hint UNKNOWN_SIZE
    - sorted     → buffer completo; ordenação estável em `end` e replay
                   begin(len)/accept*/end no próximo estágio
    - skip(n)    → n >= 0; hint max(0, size - n) quando conhecido
    - limit(n)   → n >= 0; cancela após n elementos; hint n quando conhecido
    - take_while → para de repassar na primeira falha e passa a cancelar
    - drop_while → repassa a partir da primeira falha, sem reavaliar
"""

from __future__ import annotations

from functools import cmp_to_key
from typing import Any, Callable, List, Optional, Set

from atlas_stream.core.pipeline.stage import ChainedStage, Stage
from atlas_stream.core.pipeline.types import UNKNOWN_SIZE, Comparator, is_known_size


def _clamp(n: int) -> int:
    return n if n > 0 else 0


class DistinctStage(ChainedStage):
    def __init__(self, next_stage: Stage, key_fn: Callable[[Any], Any]) -> None:
        super().__init__(next_stage)
        self._key_fn = key_fn
        self._seen: Optional[Set[Any]] = None

    def begin(self, size: int) -> None:
        self._seen = set()
        self.next_stage.begin(UNKNOWN_SIZE)

    def accept(self, element: Any) -> None:
        key = self._key_fn(element)
        if key not in self._seen:  # type: ignore[operator]
            self._seen.add(key)  # type: ignore[union-attr]
            self.next_stage.accept(element)

    def end(self) -> None:
        self._seen = None
        self.next_stage.end()


class SortedStage(ChainedStage):
    """Ordenação estável com o comparador do usuário.

    O `begin` do próximo estágio é adiado para o `end`, quando o tamanho
    real do buffer é conhecido.
    """

    def __init__(self, next_stage: Stage, compare: Comparator) -> None:
        super().__init__(next_stage)
        self._compare = compare
        self._buffer: List[Any] = []

    def begin(self, size: int) -> None:
        self._buffer = []

    def accept(self, element: Any) -> None:
        self._buffer.append(element)

    def end(self) -> None:
        ordered = sorted(self._buffer, key=cmp_to_key(self._compare))
        self._buffer = []
        self.next_stage.begin(len(ordered))
        for element in ordered:
            if self.next_stage.cancellation_requested():
                break
            self.next_stage.accept(element)
        self.next_stage.end()


class SkipStage(ChainedStage):
    def __init__(self, next_stage: Stage, n: int) -> None:
        super().__init__(next_stage)
        self._n = _clamp(n)
        self._remaining = self._n

    def begin(self, size: int) -> None:
        self._remaining = self._n
        if is_known_size(size):
            self.next_stage.begin(max(0, size - self._n))
        else:
            self.next_stage.begin(UNKNOWN_SIZE)

    def accept(self, element: Any) -> None:
        if self._remaining == 0:
            self.next_stage.accept(element)
        else:
            self._remaining -= 1


class LimitStage(ChainedStage):
    def __init__(self, next_stage: Stage, n: int) -> None:
        super().__init__(next_stage)
        self._n = _clamp(n)
        self._seen = 0

    def begin(self, size: int) -> None:
        self._seen = 0
        self.next_stage.begin(self._n if is_known_size(size) else UNKNOWN_SIZE)

    def accept(self, element: Any) -> None:
        if self._seen < self._n:
            self.next_stage.accept(element)
        self._seen += 1

    def cancellation_requested(self) -> bool:
        return self._seen >= self._n or self.next_stage.cancellation_requested()


class TakeWhileStage(ChainedStage):
    def __init__(self, next_stage: Stage, predicate: Callable[[Any], bool]) -> None:
        super().__init__(next_stage)
        self._predicate = predicate
        self._taking = True

    def begin(self, size: int) -> None:
        self._taking = True
        self.next_stage.begin(UNKNOWN_SIZE)

    def accept(self, element: Any) -> None:
        if not self._taking:
            return
        if self._predicate(element):
            self.next_stage.accept(element)
        else:
            self._taking = False

    def cancellation_requested(self) -> bool:
        return not self._taking or self.next_stage.cancellation_requested()


class DropWhileStage(ChainedStage):
    def __init__(self, next_stage: Stage, predicate: Callable[[Any], bool]) -> None:
        super().__init__(next_stage)
        self._predicate = predicate
        self._dropping = True

    def begin(self, size: int) -> None:
        self._dropping = True
        self.next_stage.begin(UNKNOWN_SIZE)

    def accept(self, element: Any) -> None:
        if self._dropping:
            if self._predicate(element):
                return
            self._dropping = False
        self.next_stage.accept(element)
