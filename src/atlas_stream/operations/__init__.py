# src/atlas_stream/operations/__init__.py
"""
Operações canônicas do Atlas Stream.

Cada operação intermediária é um `ChainedStage` com estado privado,
instanciado a cada montagem de cadeia. Operações terminais acumulam o
resultado da avaliação e o expõem em `result` após `end()`.

Categorias:
    - stateless → filter, map, peek, flat_map
    - stateful  → distinct, sorted, skip, limit, take_while, drop_while
    - terminal  → for_each, find_first/last, reduce, fold, coleções, match
"""

from .stateful import DistinctStage, DropWhileStage, LimitStage, SkipStage, SortedStage, TakeWhileStage
from .stateless import FilterStage, FlatMapStage, MapStage, PeekStage
from .terminal import (
    FindFirstTerminal,
    FindLastTerminal,
    FoldTerminal,
    ForEachTerminal,
    GroupingByTerminal,
    MatchKind,
    MatchTerminal,
    ReduceTerminal,
    ToDictTerminal,
    ToListTerminal,
)

__all__ = [
    "DistinctStage",
    "DropWhileStage",
    "FilterStage",
    "FindFirstTerminal",
    "FindLastTerminal",
    "FlatMapStage",
    "FoldTerminal",
    "ForEachTerminal",
    "GroupingByTerminal",
    "LimitStage",
    "MapStage",
    "MatchKind",
    "MatchTerminal",
    "PeekStage",
    "ReduceTerminal",
    "SkipStage",
    "SortedStage",
    "TakeWhileStage",
    "ToDictTerminal",
    "ToListTerminal",
]
