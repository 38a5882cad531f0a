# src/atlas_stream/core/pipeline/context.py
"""
Contexto de execução compartilhado de avaliações.

Este módulo define o `RunContext`, a estrutura canônica usada para
registrar, de forma estruturada, o que o engine fez durante a avaliação
de um ou mais pipelines.

O RunContext atua como o único meio de:
    - registro de eventos estruturados de avaliação (log)
    - coleta de warnings não fatais
    - associação de configuração resolvida (dict ou arquivos) e seu hash

Princípios fundamentais:
    - Nenhum logger global: eventos são dados, não efeitos colaterais
    - Eventos mantêm a ordem real de emissão
    - O contexto é opcional; sem ele o engine não registra nada

Invariantes:
    - Todo evento inclui `run_id`, `phase`, `level`, `message` e `timestamp`
    - `log` é seguro para chamadas concorrentes

Limites explícitos:
    - Não avalia pipelines
    - Não persiste eventos automaticamente
"""

from __future__ import annotations

import threading
import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from atlas_stream.core.config.hashing import compute_config_hash
from atlas_stream.core.config.loader import load_config


@dataclass
class RunContext:
    """
    Contexto de execução de avaliações do Atlas Stream.

    Campos:
        - run_id: identificador da execução
        - created_at: timestamp timezone-aware de criação
        - config: configuração resolvida (pode ser vazia)
        - meta: metadados livres (ex.: config_hash)
        - events: eventos estruturados em ordem de emissão
        - warnings: avisos agrupados por fase
    """
    run_id: str
    created_at: datetime
    config: Dict[str, Any] = field(default_factory=dict)
    meta: Dict[str, Any] = field(default_factory=dict)

    events: List[Dict[str, Any]] = field(default_factory=list, init=False)
    warnings: Dict[str, List[str]] = field(default_factory=dict, init=False)
    _lock: threading.Lock = field(default_factory=threading.Lock, init=False, repr=False, compare=False)

    @classmethod
    def from_config(cls, config: Optional[Dict[str, Any]] = None, *, run_id: Optional[str] = None) -> "RunContext":
        resolved = dict(config or {})
        return cls(
            run_id=run_id or uuid.uuid4().hex,
            created_at=datetime.now(timezone.utc),
            config=resolved,
            meta={"config_hash": compute_config_hash(resolved)},
        )

    @classmethod
    def from_files(
        cls,
        *,
        defaults_path: str,
        local_path: Optional[str] = None,
        run_id: Optional[str] = None,
    ) -> "RunContext":
        """Resolve defaults + overrides locais e cria o contexto já com o hash.

        Uso típico:
            ctx = RunContext.from_files(defaults_path="config.defaults.yaml",
                                        local_path="config.local.yaml")
            of_sequence(data).configure(ctx.config).with_context(ctx).count()
        """
        return cls.from_config(load_config(defaults_path=defaults_path, local_path=local_path), run_id=run_id)

    # -----------------------------
    # Logging & warnings
    # -----------------------------
    def log(self, *, phase: str, level: str, message: str, **extra: Any) -> None:
        event = {
            "run_id": self.run_id,
            "phase": phase,
            "level": level,
            "message": message,
            "timestamp": datetime.now(timezone.utc).isoformat(),
        }
        event.update(extra)
        with self._lock:
            self.events.append(event)

    def add_warning(self, *, phase: str, message: str) -> None:
        with self._lock:
            self.warnings.setdefault(phase, []).append(message)

    def events_for(self, phase: str) -> List[Dict[str, Any]]:
        return [e for e in self.events if e["phase"] == phase]
