# src/atlas_stream/core/pipeline/cursor.py
"""
Cursores de fonte do Atlas Stream.

Um cursor é o handle pull-based sobre a fonte de dados de um pipeline,
sendo a única origem de elementos consumidos pelo engine.

Contrato:
    - size()     → tamanho conhecido (>= 0) ou UNKNOWN_SIZE
    - has_next() → True enquanto existirem elementos
    - next()     → próximo elemento; avança a posição

Variantes:
    - ElementsCursor  → elementos pré-materializados (tamanho conhecido)
    - IndexedCursor   → container indexável inspecionado em runtime
                        (ex.: list, tuple, range, numpy.ndarray)
    - MappingCursor   → coleções mapeadas; cada `next()` produz um KV
    - SupplierCursor  → gerador infinito baseado em callback

Invariantes:
    - `position <= size` para cursores de tamanho conhecido
    - SupplierCursor reporta UNKNOWN_SIZE e `has_next()` sempre True
    - Um cursor é consumido exatamente uma vez e nunca reiniciado

Limites explícitos:
    - Não valida o tipo do container (responsabilidade dos construtores de fonte)
    - Não é thread-safe; o engine acessa o cursor apenas na thread chamadora
"""

from __future__ import annotations

from typing import Any, Callable, Iterator, Mapping, Protocol, Sequence, Tuple, runtime_checkable

from .types import KV, UNKNOWN_SIZE


@runtime_checkable
class Cursor(Protocol):
    """Contrato pull-based de uma fonte de dados."""

    def size(self) -> int:
        ...

    def has_next(self) -> bool:
        ...

    def next(self) -> Any:
        ...


class _SizedCursor:
    """Base para cursores de tamanho conhecido."""

    def __init__(self, size: int) -> None:
        self._size = size
        self.position = 0

    def size(self) -> int:
        return self._size

    def has_next(self) -> bool:
        return self.position < self._size

    def _advance(self) -> int:
        if self.position >= self._size:
            raise IndexError("cursor exhausted")
        index = self.position
        self.position += 1
        return index


class ElementsCursor(_SizedCursor):
    """Cursor sobre elementos já materializados."""

    def __init__(self, elements: Tuple[Any, ...]) -> None:
        super().__init__(len(elements))
        self._elements = elements

    def next(self) -> Any:
        return self._elements[self._advance()]


class IndexedCursor(_SizedCursor):
    """Cursor genérico sobre qualquer container com `len` e indexação inteira.

    Os elementos são lidos do container no momento do `next()`; o tamanho
    é fixado na construção.
    """

    def __init__(self, container: Sequence[Any]) -> None:
        super().__init__(len(container))
        self._container = container

    def next(self) -> Any:
        return self._container[self._advance()]


class MappingCursor(_SizedCursor):
    """Cursor sobre coleções mapeadas, emitindo `KV(key, value)`."""

    def __init__(self, mapping: Mapping[Any, Any]) -> None:
        super().__init__(len(mapping))
        self._items: Iterator[Tuple[Any, Any]] = iter(mapping.items())

    def next(self) -> Any:
        self._advance()
        key, value = next(self._items)
        return KV(key=key, value=value)


class SupplierCursor:
    """Cursor infinito: cada `next()` invoca o supplier do usuário."""

    def __init__(self, supplier: Callable[[], Any]) -> None:
        self._supplier = supplier
        self.position = 0

    def size(self) -> int:
        return UNKNOWN_SIZE

    def has_next(self) -> bool:
        return True

    def next(self) -> Any:
        self.position += 1
        return self._supplier()
