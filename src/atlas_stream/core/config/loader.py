# src/atlas_stream/core/config/loader.py
"""
Loader canônico de configuração do Atlas Stream.

A configuração é resolvida a partir de:
    - um arquivo de defaults (obrigatório)
    - um arquivo local de overrides (opcional)

Responsabilidades do módulo:
    - Carregar arquivos de configuração em YAML ou JSON
    - Validar requisitos estruturais mínimos (tipo raiz)
    - Resolver a configuração final via deep-merge determinístico

Invariantes:
    - O arquivo de defaults é obrigatório
    - O resultado é sempre um dicionário puro (`dict`)
    - Overrides nunca mutam os defaults

Limites explícitos:
    - Não interpreta a seção `engine` (ver `settings`)
    - Não avalia pipelines
"""

import json
from pathlib import Path
from typing import Any, Dict, Optional

import yaml  # PyYAML

from .errors import (
    DefaultsNotFoundError,
    InvalidConfigRootTypeError,
    UnsupportedConfigFormatError,
)
from .merge import deep_merge


def _load_file(path: Path) -> Dict[str, Any]:
    """
    Carrega um arquivo de configuração e valida sua estrutura básica.

    Arquivos vazios são interpretados como dicionários vazios.

    Raises:
        DefaultsNotFoundError: Se o arquivo não existir.
        UnsupportedConfigFormatError: Se o formato do arquivo não for suportado.
        InvalidConfigRootTypeError: Se o conteúdo raiz não for um dicionário.
    """
    if not path.exists():
        raise DefaultsNotFoundError(f"Arquivo de defaults não encontrado: {path}")

    suffix = path.suffix.lower()
    if suffix in {".yaml", ".yml"}:
        with path.open("r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    elif suffix == ".json":
        with path.open("r", encoding="utf-8") as f:
            data = json.load(f)
    else:
        raise UnsupportedConfigFormatError(f"Formato não suportado: {path.suffix}")

    if data is None:
        data = {}

    if not isinstance(data, dict):
        raise InvalidConfigRootTypeError(
            f"Config root deve ser dict, recebido: {type(data).__name__}"
        )

    return data


def load_config(
    *,
    defaults_path: str,
    local_path: Optional[str] = None,
) -> Dict[str, Any]:
    """
    Carrega e resolve a configuração efetiva.

    Política de resolução:
        - O arquivo de defaults é obrigatório
        - O arquivo local é opcional e ignorado quando não existe
        - Quando presente, o local sempre tem prioridade sobre defaults

    Args:
        defaults_path (str): Caminho para o arquivo de configuração base.
        local_path (Optional[str]): Caminho opcional para overrides locais.

    Returns:
        Dict[str, Any]: Configuração final resolvida.

    Raises:
        DefaultsNotFoundError: Se o arquivo de defaults não existir.
        UnsupportedConfigFormatError: Se o formato do arquivo não for suportado.
        InvalidConfigRootTypeError: Se o conteúdo não for um dicionário.
        ConfigTypeConflictError: Se ocorrer conflito estrutural durante o merge.
    """
    defaults = _load_file(Path(defaults_path))

    if local_path is None:
        return defaults

    local_file = Path(local_path)
    if not local_file.exists():
        return defaults

    return deep_merge(defaults, _load_file(local_file))
