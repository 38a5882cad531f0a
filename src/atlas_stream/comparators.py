# src/atlas_stream/comparators.py
"""Comparadores `(a, b) -> int` para sorted/max/min."""

from __future__ import annotations

from typing import Any, Callable

from atlas_stream.core.pipeline.types import Comparator


def natural_order(first: Any, second: Any) -> int:
    return (first > second) - (first < second)


def reverse_order(first: Any, second: Any) -> int:
    return natural_order(second, first)


def comparing(key: Callable[[Any], Any], compare: Comparator = natural_order) -> Comparator:
    """Compara elementos pela chave extraída com `key`."""

    def _compare(first: Any, second: Any) -> int:
        return compare(key(first), key(second))

    return _compare
