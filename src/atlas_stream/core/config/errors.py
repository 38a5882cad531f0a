# src/atlas_stream/core/config/errors.py
"""
Exceções canônicas da camada de configuração do Atlas Stream.

Estas exceções representam violações estruturais de configuração
detectadas durante load e merge, e não erros de avaliação de pipeline.

Invariantes:
    - Todas as exceções de configuração herdam de `ConfigError`
"""


class ConfigError(Exception):
    """
    Exceção base para erros relacionados à configuração do Atlas Stream.

    Permite captura genérica de falhas de configuração, separada de
    falhas de avaliação (que propagam as exceções originais).
    """


class DefaultsNotFoundError(ConfigError):
    """
    Exceção levantada quando o arquivo de configuração base (defaults)
    não é encontrado no caminho especificado.

    O arquivo de defaults é obrigatório; nenhum default é inferido.
    """


class UnsupportedConfigFormatError(ConfigError):
    """
    Exceção levantada quando o formato do arquivo de configuração
    não é suportado pelo loader.

    Formatos suportados (v1):
        - YAML (.yaml, .yml)
        - JSON (.json)
    """


class InvalidConfigRootTypeError(ConfigError):
    """
    Exceção levantada quando o conteúdo raiz da configuração
    não é um dicionário (`dict`).
    """


class ConfigTypeConflictError(ConfigError):
    """
    Exceção levantada quando ocorre conflito de tipos durante o deep-merge.

    Exemplo de conflito:
        - base:     {"engine": {"workers": 4}}
        - override: {"engine": "parallel"}
    """
