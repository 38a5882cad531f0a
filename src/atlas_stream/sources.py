# src/atlas_stream/sources.py
"""
Construtores de fonte do Atlas Stream.

Cada construtor cria um cursor uma única vez e devolve um Stream novo.
Violações de contrato (tipo de fonte errado) falham imediatamente com
`InvalidSourceError`, nunca na avaliação.

Fontes:
    - of_elements(*elements) → elementos fixos
    - of_sequence(seq)       → Sequence (exceto str/bytes) ou numpy.ndarray
    - of_mapping(mapping)    → Mapping; elementos são KV(key, value)
    - generate(supplier)     → fonte infinita (tamanho desconhecido)
    - of_dataframe(df)       → linhas de um pandas.DataFrame como dicts
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any, Callable, Optional

import numpy as np

from atlas_stream.core.errors import invalid_source
from atlas_stream.core.pipeline.cursor import (
    ElementsCursor,
    IndexedCursor,
    MappingCursor,
    SupplierCursor,
)
from atlas_stream.stream import Stream

_TEXT_TYPES = (str, bytes, bytearray)


def of_elements(*elements: Any) -> Stream[Any]:
    return Stream(ElementsCursor(tuple(elements)))


def of_sequence(sequence: Optional[Any]) -> Stream[Any]:
    if sequence is None:
        return of_elements()

    if isinstance(sequence, np.ndarray):
        if sequence.ndim == 0:
            raise invalid_source(
                constructor="of_sequence",
                expected="sequence",
                received="numpy.ndarray (0-d)",
            )
        return Stream(IndexedCursor(sequence))

    if isinstance(sequence, _TEXT_TYPES) or not isinstance(sequence, Sequence):
        raise invalid_source(
            constructor="of_sequence",
            expected="sequence",
            received=type(sequence).__name__,
        )
    return Stream(IndexedCursor(sequence))


def of_mapping(mapping: Optional[Any]) -> Stream[Any]:
    if mapping is None:
        return of_elements()
    if not isinstance(mapping, Mapping):
        raise invalid_source(
            constructor="of_mapping",
            expected="mapping",
            received=type(mapping).__name__,
        )
    return Stream(MappingCursor(mapping))


def generate(supplier: Callable[[], Any]) -> Stream[Any]:
    if not callable(supplier):
        raise invalid_source(
            constructor="generate",
            expected="callable",
            received=type(supplier).__name__,
        )
    return Stream(SupplierCursor(supplier))


def of_dataframe(df: Any) -> Stream[Any]:
    """Linhas do DataFrame como dicts (coluna -> valor), na ordem do índice."""
    try:
        import pandas as pd  # type: ignore
    except Exception as e:  # pragma: no cover
        raise RuntimeError("pandas is required for of_dataframe") from e

    if not isinstance(df, pd.DataFrame):
        raise invalid_source(
            constructor="of_dataframe",
            expected="pandas.DataFrame",
            received=type(df).__name__,
        )
    return Stream(IndexedCursor(df.to_dict(orient="records")))
