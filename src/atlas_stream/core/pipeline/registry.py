# src/atlas_stream/core/pipeline/registry.py
"""
Registro de operações do pipeline.

Este módulo define o `OperationRegistry`, responsável por registrar
operações (funções `wrap(next_stage) -> Stage`) e montar, no momento da
avaliação, a cadeia completa de estágios terminando no estágio terminal.

Estrutura:
    - Cada registro é um `Operation` imutável com referência ao anterior
    - A cabeça é uma sentinela sem função de wrap
    - O registry mantém apenas o ponteiro para o último registro (tail)

Montagem (assemble):
    - Caminha do tail até a sentinela aplicando cada wrap sobre o estágio
      já montado, começando pelo terminal
    - O primeiro registro declarado vira o estágio mais externo, de modo
      que a ordem de declaração vira a ordem de execução

Invariantes:
    - Registrar é O(1) e não executa nenhum wrap
    - Cada chamada a `assemble` cria instâncias novas de todos os estágios
    - A mesma sequência de registros sempre produz a mesma ordem de execução

Limites explícitos:
    - Não dirige cursores
    - Não reordena nem otimiza operações
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional

from .stage import Stage, StageWrapper


@dataclass(frozen=True)
class Operation:
    """
    Registro de uma operação no pipeline.

    Campos:
        - wrap_stage: função `(next_stage) -> Stage`; None apenas na sentinela
        - previous: registro anterior; None apenas na sentinela
        - name: nome da operação fluente (ex.: "filter")
        - stateful: True quando o estágio guarda estado entre elementos
    """
    wrap_stage: Optional[StageWrapper] = None
    previous: Optional["Operation"] = None
    name: str = ""
    stateful: bool = False

    @property
    def is_head(self) -> bool:
        return self.previous is None


@dataclass
class OperationRegistry:
    """Lista simplesmente encadeada de operações (mais recente primeiro)."""

    tail: Operation = field(default_factory=Operation)

    def add(self, wrap_stage: StageWrapper, *, name: str = "", stateful: bool = False) -> Operation:
        if not callable(wrap_stage):
            raise TypeError("wrap_stage must be callable")
        self.tail = Operation(wrap_stage=wrap_stage, previous=self.tail, name=name, stateful=stateful)
        return self.tail

    def __len__(self) -> int:
        return len(self.operations())

    def operations(self) -> List[Operation]:
        """Retorna os registros na ordem de registro (primeiro registrado primeiro)."""
        records: List[Operation] = []
        op = self.tail
        while not op.is_head:
            records.append(op)
            op = op.previous  # type: ignore[assignment]
        records.reverse()
        return records

    def stateful_operations(self) -> List[str]:
        """Nomes das operações stateful, na ordem de registro."""
        return [op.name for op in self.operations() if op.stateful]

    def assemble(self, terminal: Stage) -> Stage:
        """Monta uma cadeia nova terminando em `terminal`.

        O último wrap registrado envolve o terminal primeiro; o primeiro
        registrado torna-se o estágio mais externo, que recebe os elementos
        do cursor.
        """
        stage = terminal
        op = self.tail
        while not op.is_head:
            stage = op.wrap_stage(stage)  # type: ignore[misc]
            op = op.previous  # type: ignore[assignment]
        return stage
