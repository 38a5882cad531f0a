# src/atlas_stream/stream.py
"""
Stream — handle fluente de um pipeline lazy do Atlas Stream.

Um Stream é composto por:
    - uma fonte (cursor), criada pelos construtores em `sources`
    - zero ou mais operações intermediárias, apenas registradas
    - exatamente uma operação terminal, que dispara a avaliação

Princípios fundamentais:
    - Laziness: nenhuma operação executa antes do terminal
    - Short-circuit: limit, take_while e terminais de match/find param o cursor
    - Uso único: após o terminal, o Stream não aceita novas chamadas

Operações intermediárias retornam o próprio Stream para encadeamento.

Exemplo:
    >>> of_sequence([4, 3, 2, 1]).filter(lambda x: x % 2 == 0).map(lambda x: x * 10).to_list()
    [40, 20]

Avaliação particionada:
    `parallel(n)` (ou `configure({"engine": {"workers": n}})`) ativa o modo
    SHARDED quando a fonte tem tamanho conhecido > 1. Nesse modo, operações
    stateful atuam por shard e a ordem dos resultados não é garantida.
"""

from __future__ import annotations

from dataclasses import replace
from typing import Any, Callable, Dict, Generic, List, Optional, TypeVar, cast

from atlas_stream.comparators import natural_order
from atlas_stream.core.config.settings import EngineSettings
from atlas_stream.core.engine.engine import Engine
from atlas_stream.core.errors import engine_configuration_error, pipeline_already_consumed
from atlas_stream.core.pipeline.context import RunContext
from atlas_stream.core.pipeline.cursor import Cursor
from atlas_stream.core.pipeline.registry import OperationRegistry
from atlas_stream.core.pipeline.stage import Stage, StageWrapper
from atlas_stream.core.pipeline.types import Comparator, EvaluationMode
from atlas_stream.operations import (
    DistinctStage,
    DropWhileStage,
    FilterStage,
    FindFirstTerminal,
    FindLastTerminal,
    FlatMapStage,
    FoldTerminal,
    ForEachTerminal,
    GroupingByTerminal,
    LimitStage,
    MapStage,
    MatchKind,
    MatchTerminal,
    PeekStage,
    ReduceTerminal,
    SkipStage,
    SortedStage,
    TakeWhileStage,
    ToDictTerminal,
    ToListTerminal,
)

T = TypeVar("T")
R = TypeVar("R")
K = TypeVar("K")
V = TypeVar("V")


def _identity(element: Any) -> Any:
    return element


def _as_stream(value: Any) -> "Stream[Any]":
    # a avaliação aninhada empurra elementos na cadeia externa; nunca particionar
    if isinstance(value, Stream):
        return value.parallel(0)
    from atlas_stream.sources import of_sequence

    return of_sequence(value)


class Stream(Generic[T]):
    """Pipeline lazy de uso único sobre um cursor."""

    def __init__(self, cursor: Cursor) -> None:
        self._cursor = cursor
        self._registry = OperationRegistry()
        self._settings = EngineSettings()
        self._ctx: Optional[RunContext] = None
        self._consumed = False

    @property
    def cursor(self) -> Cursor:
        return self._cursor

    @property
    def workers(self) -> int:
        return self._settings.workers

    @property
    def consumed(self) -> bool:
        return self._consumed

    def _ensure_open(self, operation: str) -> None:
        if self._consumed:
            raise pipeline_already_consumed(operation=operation)

    def _add(self, operation: str, wrap: StageWrapper, *, stateful: bool = False) -> "Stream[Any]":
        self._ensure_open(operation)
        self._registry.add(wrap, name=operation, stateful=stateful)
        return self

    # ------------------------------------------------------------------
    # Configuração
    # ------------------------------------------------------------------
    def parallel(self, workers: int) -> "Stream[T]":
        """Define a quantidade de workers (0 ou 1 = sequencial)."""
        self._ensure_open("parallel")
        if isinstance(workers, bool) or not isinstance(workers, int) or workers < 0:
            raise engine_configuration_error(
                message="workers deve ser int >= 0",
                details={"workers": repr(workers)},
            )
        self._settings = replace(self._settings, workers=workers)
        return self

    def configure(self, config: Optional[Dict[str, Any]]) -> "Stream[T]":
        """Aplica a seção `engine` de uma configuração resolvida."""
        self._ensure_open("configure")
        self._settings = EngineSettings.from_config(config)
        return self

    def with_context(self, ctx: RunContext) -> "Stream[T]":
        """Anexa um RunContext que receberá os eventos da avaliação."""
        self._ensure_open("with_context")
        self._ctx = ctx
        return self

    # ------------------------------------------------------------------
    # Operações intermediárias stateless
    # ------------------------------------------------------------------
    def filter(self, predicate: Callable[[T], bool]) -> "Stream[T]":
        return self._add("filter", lambda next_stage: FilterStage(next_stage, predicate))

    def map(self, mapper: Callable[[T], R]) -> "Stream[R]":
        return cast("Stream[R]", self._add("map", lambda next_stage: MapStage(next_stage, mapper)))

    def peek(self, consumer: Callable[[T], None]) -> "Stream[T]":
        return self._add("peek", lambda next_stage: PeekStage(next_stage, consumer))

    def flat_map(self, mapper: Callable[[T], Any]) -> "Stream[Any]":
        """Substitui cada elemento pelo conteúdo do Stream (ou sequência) mapeado.

        O stream aninhado é sempre avaliado no modo sequencial, na thread
        que processa o elemento externo.
        """
        return self._add(
            "flat_map",
            lambda next_stage: FlatMapStage(next_stage, lambda element: _as_stream(mapper(element))),
        )

    # ------------------------------------------------------------------
    # Operações intermediárias stateful
    # ------------------------------------------------------------------
    def distinct(self, key_fn: Callable[[T], Any] = _identity) -> "Stream[T]":
        return self._add("distinct", lambda next_stage: DistinctStage(next_stage, key_fn), stateful=True)

    def sorted(self, compare: Comparator = natural_order) -> "Stream[T]":
        return self._add("sorted", lambda next_stage: SortedStage(next_stage, compare), stateful=True)

    def skip(self, n: int) -> "Stream[T]":
        return self._add("skip", lambda next_stage: SkipStage(next_stage, n), stateful=True)

    def limit(self, max_size: int) -> "Stream[T]":
        return self._add("limit", lambda next_stage: LimitStage(next_stage, max_size), stateful=True)

    def take_while(self, predicate: Callable[[T], bool]) -> "Stream[T]":
        return self._add("take_while", lambda next_stage: TakeWhileStage(next_stage, predicate), stateful=True)

    def drop_while(self, predicate: Callable[[T], bool]) -> "Stream[T]":
        return self._add("drop_while", lambda next_stage: DropWhileStage(next_stage, predicate), stateful=True)

    # ------------------------------------------------------------------
    # Avaliação
    # ------------------------------------------------------------------
    def evaluate(self, terminal: Stage) -> EvaluationMode:
        """Consome o pipeline dirigindo-o até um estágio terminal arbitrário."""
        self._ensure_open("evaluate")
        self._consumed = True
        engine = Engine(
            cursor=self._cursor,
            registry=self._registry,
            settings=self._settings,
            ctx=self._ctx,
        )
        return engine.run(terminal)

    # ------------------------------------------------------------------
    # Terminais
    # ------------------------------------------------------------------
    def for_each(self, action: Callable[[T], None]) -> None:
        self.evaluate(ForEachTerminal(action))

    def find_first(self) -> Optional[T]:
        terminal = FindFirstTerminal()
        self.evaluate(terminal)
        return terminal.result

    def find_last(self) -> Optional[T]:
        terminal = FindLastTerminal()
        self.evaluate(terminal)
        return terminal.result

    def reduce(self, accumulator: Callable[[T, T], T]) -> Optional[T]:
        terminal = ReduceTerminal(accumulator)
        self.evaluate(terminal)
        return terminal.result

    def reduce_from_identity(self, identity: R, accumulator: Callable[[R, T], R]) -> R:
        terminal = FoldTerminal(identity, accumulator)
        self.evaluate(terminal)
        return terminal.result

    def count(self) -> int:
        return self.reduce_from_identity(0, lambda total, _: total + 1)

    def max(self, compare: Comparator = natural_order) -> Optional[T]:
        return self.reduce(lambda first, second: first if compare(first, second) >= 0 else second)

    def min(self, compare: Comparator = natural_order) -> Optional[T]:
        return self.reduce(lambda first, second: first if compare(first, second) <= 0 else second)

    def to_list(self) -> List[T]:
        terminal = ToListTerminal()
        self.evaluate(terminal)
        return terminal.result

    def to_dict(self, key_mapper: Callable[[T], K], value_mapper: Callable[[T], V] = _identity) -> Dict[K, V]:
        terminal = ToDictTerminal(key_mapper, value_mapper)
        self.evaluate(terminal)
        return terminal.result

    def grouping_by(self, classifier: Callable[[T], K]) -> Dict[K, List[T]]:
        terminal = GroupingByTerminal(classifier)
        self.evaluate(terminal)
        return terminal.result

    def all_match(self, predicate: Callable[[T], bool]) -> bool:
        return self._match(predicate, MatchKind.ALL)

    def any_match(self, predicate: Callable[[T], bool]) -> bool:
        return self._match(predicate, MatchKind.ANY)

    def none_match(self, predicate: Callable[[T], bool]) -> bool:
        return self._match(predicate, MatchKind.NONE)

    def _match(self, predicate: Callable[[T], bool], kind: MatchKind) -> bool:
        terminal = MatchTerminal(predicate, kind)
        self.evaluate(terminal)
        return terminal.result
