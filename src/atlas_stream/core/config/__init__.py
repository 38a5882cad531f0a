# src/atlas_stream/core/config/__init__.py
"""
Camada de configuração do Atlas Stream.

Este pacote contém as estruturas e utilitários responsáveis por carregar,
mesclar, identificar e interpretar a configuração de avaliação de pipelines.

Responsabilidades do pacote:
    - Carregamento de arquivos de configuração (defaults + overrides locais)
    - Resolução de configuração final via deep-merge determinístico
    - Geração de hash canônico para rastreabilidade
    - Leitura tipada da seção `engine` (EngineSettings)

Limites explícitos:
    - Não executa pipeline
    - Não interage com fontes ou estágios diretamente
"""

from .errors import (
    ConfigError,
    ConfigTypeConflictError,
    DefaultsNotFoundError,
    InvalidConfigRootTypeError,
    UnsupportedConfigFormatError,
)
from .hashing import compute_config_hash
from .loader import load_config
from .merge import deep_merge
from .settings import EngineSettings

__all__ = [
    "ConfigError",
    "ConfigTypeConflictError",
    "DefaultsNotFoundError",
    "EngineSettings",
    "InvalidConfigRootTypeError",
    "UnsupportedConfigFormatError",
    "compute_config_hash",
    "deep_merge",
    "load_config",
]
