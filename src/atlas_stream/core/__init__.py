# src/atlas_stream/core/__init__.py
"""
Core do Atlas Stream.

Componentes principais:
    - config   → resolução de configuração (merge, hashing, EngineSettings)
    - pipeline → cursores, contrato de Stage, registro de operações, RunContext
    - engine   → planejamento de shards e avaliação
    - errors / exceptions → catálogo de erros e exceções tipadas

O core não depende da API fluente nem dos construtores de fonte.
"""
