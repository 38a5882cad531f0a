# src/atlas_stream/__init__.py
"""
Atlas Stream — engine de pipelines lazy e componíveis.

Um pipeline descreve uma fonte, uma sequência de transformações
(filter, map, sorted, distinct, janelas com skip/limit/take_while/drop_while)
e uma única operação terminal. A avaliação acontece em uma única passada,
opcionalmente particionada entre workers concorrentes, com término
antecipado quando os estágios seguintes não precisam de mais elementos.

Arquitetura em alto nível:
    - core.pipeline → cursores, contrato de Stage, registro de operações, RunContext
    - core.engine   → planejamento de shards e avaliação sequencial/particionada
    - core.config   → carregamento, merge, hashing e EngineSettings
    - operations    → estágios intermediários e terminais
    - sources       → construtores de fonte
    - stream        → API fluente (Stream)

Limites explícitos:
    - Não persiste definições de pipeline
    - Não executa em múltiplos processos
    - Não reordena nem otimiza operações
"""

from atlas_stream.comparators import comparing, natural_order, reverse_order
from atlas_stream.core.pipeline.context import RunContext
from atlas_stream.core.pipeline.types import KV, UNKNOWN_SIZE, EvaluationMode
from atlas_stream.sources import generate, of_dataframe, of_elements, of_mapping, of_sequence
from atlas_stream.stream import Stream

__all__ = [
    "KV",
    "UNKNOWN_SIZE",
    "EvaluationMode",
    "RunContext",
    "Stream",
    "comparing",
    "generate",
    "natural_order",
    "of_dataframe",
    "of_elements",
    "of_mapping",
    "of_sequence",
    "reverse_order",
]
