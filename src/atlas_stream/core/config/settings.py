# src/atlas_stream/core/config/settings.py
"""
Leitura tipada da seção `engine` da configuração.

Exemplo (YAML):

    engine:
      workers: 4
      max_pool_workers: 8

Regras (v1):
    - `workers`: int >= 0 (0 ou 1 = avaliação sequencial); default 0
    - `max_pool_workers`: int >= 1 ou null; limita o pool de threads
    - Chaves desconhecidas na seção `engine` são ignoradas
    - bool não é aceito como int
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional

from atlas_stream.core.errors import engine_configuration_error


def _require_int(value: Any, *, key: str, minimum: int) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise engine_configuration_error(
            message=f"engine.{key} deve ser int",
            details={"key": key, "received": type(value).__name__},
        )
    if value < minimum:
        raise engine_configuration_error(
            message=f"engine.{key} deve ser >= {minimum}",
            details={"key": key, "value": value, "minimum": minimum},
        )
    return value


@dataclass(frozen=True)
class EngineSettings:
    """Parâmetros de avaliação resolvidos a partir da configuração."""

    workers: int = 0
    max_pool_workers: Optional[int] = None

    @classmethod
    def from_config(cls, config: Optional[Dict[str, Any]]) -> "EngineSettings":
        engine_cfg = (config or {}).get("engine", {}) or {}
        if not isinstance(engine_cfg, dict):
            raise engine_configuration_error(
                message="Seção engine deve ser dict",
                details={"received": type(engine_cfg).__name__},
            )

        workers = _require_int(engine_cfg.get("workers", 0), key="workers", minimum=0)

        max_pool = engine_cfg.get("max_pool_workers")
        if max_pool is not None:
            max_pool = _require_int(max_pool, key="max_pool_workers", minimum=1)

        return cls(workers=workers, max_pool_workers=max_pool)
