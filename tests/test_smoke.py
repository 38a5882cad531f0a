# tests/test_smoke.py
"""
Testes de sanidade estrutural (smoke tests) do Atlas Stream.

Este módulo garante apenas que:
- o pacote é importável
- a superfície pública mínima está exposta
- um pipeline trivial pode ser avaliado

Limites explícitos:
    - Não testar semântica de operações (ver tests/operations)
    - Não acumular asserts funcionais
"""


def test_smoke():
    """Smoke test mínimo do repositório: import + pipeline trivial."""
    import atlas_stream

    assert atlas_stream.of_elements(1, 2, 3).count() == 3
