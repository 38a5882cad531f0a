# src/atlas_stream/core/pipeline/stage.py
"""
Contrato canônico de estágio (Stage) do Atlas Stream.

Um Stage é a unidade push-based da cadeia de processamento. Todo elo
intermediário e todo consumidor terminal implementam o mesmo contrato:

    - begin(size)              → chamado uma vez antes de qualquer accept
    - accept(element)          → chamado 0..N vezes
    - end()                    → chamado uma vez após o último accept
    - cancellation_requested() → consultado antes de cada accept

Componentes principais:
    - Stage         → Protocol (@runtime_checkable)
    - ChainedStage  → elo intermediário que delega ao próximo estágio
    - TerminalStage → consumidor terminal com hooks no-op por padrão
    - StageWrapper  → assinatura `(next_stage) -> Stage` registrada por operação

Invariantes:
    - Chamadas seguem estritamente `begin → accept* → end`
    - Nenhum accept ocorre após cancellation_requested() retornar True
    - Por padrão, begin/end/cancellation são delegados ao próximo estágio

Limites explícitos:
    - Não monta cadeias (ver `registry`)
    - Não dirige cursores (ver `engine`)
"""

from __future__ import annotations

from typing import Any, Callable, Optional, Protocol, runtime_checkable


@runtime_checkable
class Stage(Protocol):
    """Contrato push-based de um estágio da cadeia."""

    def begin(self, size: int) -> None:
        ...

    def accept(self, element: Any) -> None:
        ...

    def end(self) -> None:
        ...

    def cancellation_requested(self) -> bool:
        ...


StageWrapper = Callable[[Stage], Stage]


class ChainedStage:
    """
    Elo intermediário padrão.

    Delega begin/accept/end/cancellation ao próximo estágio; subclasses
    sobrescrevem apenas os hooks de que precisam. Estado privado de
    operações stateful vive em atributos da instância, criada a cada
    montagem de cadeia.
    """

    def __init__(self, next_stage: Stage) -> None:
        self.next_stage = next_stage

    def begin(self, size: int) -> None:
        self.next_stage.begin(size)

    def accept(self, element: Any) -> None:
        self.next_stage.accept(element)

    def end(self) -> None:
        self.next_stage.end()

    def cancellation_requested(self) -> bool:
        return self.next_stage.cancellation_requested()


class TerminalStage:
    """
    Consumidor terminal com hooks opcionais.

    Sem hooks, o terminal aceita tudo, nunca cancela e ignora begin/end.
    Operações terminais concretas podem subclassificar ou fornecer
    callables diretamente.
    """

    def __init__(
        self,
        *,
        begin: Optional[Callable[[int], None]] = None,
        accept: Optional[Callable[[Any], None]] = None,
        end: Optional[Callable[[], None]] = None,
        cancellation_requested: Optional[Callable[[], bool]] = None,
    ) -> None:
        self._begin = begin
        self._accept = accept
        self._end = end
        self._cancellation_requested = cancellation_requested

    def begin(self, size: int) -> None:
        if self._begin is not None:
            self._begin(size)

    def accept(self, element: Any) -> None:
        if self._accept is not None:
            self._accept(element)

    def end(self) -> None:
        if self._end is not None:
            self._end()

    def cancellation_requested(self) -> bool:
        if self._cancellation_requested is not None:
            return bool(self._cancellation_requested())
        return False
