# src/atlas_stream/core/config/hashing.py
"""
Hashing canônico de configuração do Atlas Stream.

O hash representa a identidade estrutural da configuração efetiva e é
anexado ao RunContext (`meta["config_hash"]`) para rastreabilidade dos
eventos de avaliação.

Política de hashing (v1):
    - Serialização JSON canônica (chaves ordenadas, separadores compactos)
    - Codificação UTF-8
    - SHA-256 em hexadecimal (64 caracteres)
"""

import hashlib
import json
from typing import Any, Dict


def compute_config_hash(config: Dict[str, Any]) -> str:
    """
    Gera um hash determinístico da configuração efetiva.

    Args:
        config (Dict[str, Any]): Configuração efetiva.

    Returns:
        str: Hash SHA-256 hexadecimal da configuração.

    Raises:
        TypeError: Se o objeto fornecido não for um dicionário.
    """
    if not isinstance(config, dict):
        raise TypeError(
            f"Config para hashing deve ser dict, recebido: {type(config).__name__}"
        )

    canonical_json = json.dumps(
        config,
        sort_keys=True,
        separators=(",", ":"),
        ensure_ascii=False,
    )
    return hashlib.sha256(canonical_json.encode("utf-8")).hexdigest()
