# src/atlas_stream/core/config/merge.py
"""
Utilitário canônico de deep-merge de configuração.

Política de merge (v1):
    - dict → merge recursivo por chave
    - list → sobrescrita total (sem merge elemento a elemento)
    - escalar → sobrescrita direta
    - conflito de tipos → erro estrutural explícito

Invariantes:
    - Nenhum input é mutado durante o processo
    - A mesma entrada sempre produz a mesma saída
"""

from copy import deepcopy
from typing import Any, Dict

from .errors import ConfigTypeConflictError


def deep_merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """
    Realiza um deep-merge determinístico entre dois dicionários de configuração.

    Args:
        base (Dict[str, Any]): Configuração base (ex.: defaults).
        override (Dict[str, Any]): Overrides explícitos da configuração.

    Returns:
        Dict[str, Any]: Nova configuração resultante do deep-merge.

    Raises:
        ConfigTypeConflictError: Se ocorrer conflito de tipo entre base e override.
    """
    if not isinstance(base, dict) or not isinstance(override, dict):
        raise ConfigTypeConflictError(
            f"Deep-merge requer dicts no nível raiz, recebido: "
            f"{type(base).__name__} vs {type(override).__name__}"
        )

    result: Dict[str, Any] = deepcopy(base)

    for key, override_value in override.items():
        if key not in result:
            result[key] = deepcopy(override_value)
            continue

        base_value = result[key]

        # dict -> merge recursivo
        if isinstance(base_value, dict) and isinstance(override_value, dict):
            result[key] = deep_merge(base_value, override_value)
            continue

        # list -> sobrescrita total
        if isinstance(override_value, list):
            result[key] = deepcopy(override_value)
            continue

        # None em qualquer lado desliga a checagem de tipo (chave "desligada")
        if base_value is not None and override_value is not None:
            if type(base_value) is not type(override_value):
                raise ConfigTypeConflictError(
                    f"Conflito de tipo na chave '{key}': "
                    f"{type(base_value).__name__} vs {type(override_value).__name__}"
                )

        result[key] = deepcopy(override_value)

    return result
