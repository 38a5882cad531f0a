# src/atlas_stream/operations/terminal.py
"""
Operações terminais do Atlas Stream.

Cada terminal acumula o resultado em `result`, lido pelo chamador somente
após `end()`. No modo particionado o engine serializa os accepts com lock,
então nenhum terminal precisa de sincronização própria.

Terminais short-circuit (find_first, all/any/none match) sinalizam
`cancellation_requested()` assim que o resultado está decidido.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Callable, Dict, List


class _Terminal:
    """Base no-op: aceita tudo, nunca cancela."""

    result: Any = None

    def begin(self, size: int) -> None:
        return None

    def accept(self, element: Any) -> None:
        return None

    def end(self) -> None:
        return None

    def cancellation_requested(self) -> bool:
        return False


class ForEachTerminal(_Terminal):
    def __init__(self, action: Callable[[Any], None]) -> None:
        self._action = action

    def accept(self, element: Any) -> None:
        self._action(element)


class FindFirstTerminal(_Terminal):
    def __init__(self) -> None:
        self.found = False
        self.result = None

    def accept(self, element: Any) -> None:
        if not self.found:
            self.found = True
            self.result = element

    def cancellation_requested(self) -> bool:
        return self.found


class FindLastTerminal(_Terminal):
    def __init__(self) -> None:
        self.result = None

    def accept(self, element: Any) -> None:
        self.result = element


class ReduceTerminal(_Terminal):
    """Redução sem semente; fonte vazia produz None sem chamar o acumulador."""

    def __init__(self, accumulator: Callable[[Any, Any], Any]) -> None:
        self._accumulator = accumulator
        self.empty = True
        self.result = None

    def begin(self, size: int) -> None:
        self.empty = True
        self.result = None

    def accept(self, element: Any) -> None:
        if self.empty:
            self.empty = False
            self.result = element
        else:
            self.result = self._accumulator(self.result, element)


class FoldTerminal(_Terminal):
    """Redução a partir de uma identidade; fonte vazia devolve a identidade."""

    def __init__(self, identity: Any, accumulator: Callable[[Any, Any], Any]) -> None:
        self._accumulator = accumulator
        self.result = identity

    def accept(self, element: Any) -> None:
        self.result = self._accumulator(self.result, element)


class ToListTerminal(_Terminal):
    def __init__(self) -> None:
        self.result: List[Any] = []

    def begin(self, size: int) -> None:
        self.result = []

    def accept(self, element: Any) -> None:
        self.result.append(element)


class ToDictTerminal(_Terminal):
    """Chaves repetidas: o último valor vence."""

    def __init__(self, key_mapper: Callable[[Any], Any], value_mapper: Callable[[Any], Any]) -> None:
        self._key_mapper = key_mapper
        self._value_mapper = value_mapper
        self.result: Dict[Any, Any] = {}

    def begin(self, size: int) -> None:
        self.result = {}

    def accept(self, element: Any) -> None:
        self.result[self._key_mapper(element)] = self._value_mapper(element)


class GroupingByTerminal(_Terminal):
    def __init__(self, classifier: Callable[[Any], Any]) -> None:
        self._classifier = classifier
        self.result: Dict[Any, List[Any]] = {}

    def begin(self, size: int) -> None:
        self.result = {}

    def accept(self, element: Any) -> None:
        self.result.setdefault(self._classifier(element), []).append(element)


class MatchKind(str, Enum):
    ALL = "all"
    ANY = "any"
    NONE = "none"


class MatchTerminal(_Terminal):
    """
    Terminal short-circuit de correspondência.

    Política:
        - ALL  → começa True; cancela no primeiro elemento que falha
        - ANY  → começa False; cancela no primeiro elemento que corresponde
        - NONE → começa True; cancela no primeiro elemento que corresponde
    """

    def __init__(self, predicate: Callable[[Any], bool], kind: MatchKind) -> None:
        self._predicate = predicate
        self.kind = kind
        self.result = kind is not MatchKind.ANY
        self._decided = False

    def accept(self, element: Any) -> None:
        matched = bool(self._predicate(element))
        if self.kind is MatchKind.ALL and not matched:
            self.result, self._decided = False, True
        elif self.kind is MatchKind.ANY and matched:
            self.result, self._decided = True, True
        elif self.kind is MatchKind.NONE and matched:
            self.result, self._decided = False, True

    def cancellation_requested(self) -> bool:
        return self._decided
