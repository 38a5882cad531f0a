# src/atlas_stream/core/pipeline/__init__.py
"""
# Pipeline Core — Atlas Stream

Este pacote define os **contratos canônicos** e as **estruturas fundamentais**
de um pipeline lazy no Atlas Stream.

## Componentes

- **types**: `UNKNOWN_SIZE`, `KV`, `EvaluationMode`, `Comparator`
- **cursor**: `Cursor` (Protocol) e as variantes de fonte
- **stage**: `Stage` (Protocol), `ChainedStage`, `TerminalStage`
- **registry**: `Operation`, `OperationRegistry` (lista encadeada + montagem)
- **context**: `RunContext` (eventos estruturados de avaliação)

## Princípios Fundamentais

- Nada é executado antes da operação terminal
- Operações executam exatamente na ordem de registro
- Cada montagem de cadeia cria instâncias novas de estágios
"""

from .context import RunContext
from .cursor import Cursor, ElementsCursor, IndexedCursor, MappingCursor, SupplierCursor
from .registry import Operation, OperationRegistry
from .stage import ChainedStage, Stage, StageWrapper, TerminalStage
from .types import KV, UNKNOWN_SIZE, Comparator, EvaluationMode, is_known_size

__all__ = [
    "KV",
    "UNKNOWN_SIZE",
    "ChainedStage",
    "Comparator",
    "Cursor",
    "ElementsCursor",
    "EvaluationMode",
    "IndexedCursor",
    "MappingCursor",
    "Operation",
    "OperationRegistry",
    "RunContext",
    "Stage",
    "StageWrapper",
    "SupplierCursor",
    "TerminalStage",
    "is_known_size",
]
