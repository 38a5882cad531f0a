# tests/core/pipeline/test_run_context_logging.py
"""
Testes de logging estruturado e coleta de warnings no RunContext.

Os testes asseguram que:
- eventos de log são registrados de forma estruturada
- cada evento contém metadados mínimos de rastreabilidade
- campos adicionais são preservados sem perda
- warnings são agrupados por fase
- `from_config` anexa o hash da configuração

Decisões arquiteturais:
    - Logs não são strings livres, mas eventos estruturados
    - Nenhum logger global é utilizado

Limites explícitos:
    - Não valida os eventos emitidos pelo engine (ver tests/core/engine)
"""

import threading

from atlas_stream.core.config.hashing import compute_config_hash
from atlas_stream.core.pipeline.context import RunContext


def test_log_event_is_structured(dummy_ctx):
    """
    Verifica o formato canônico de um evento de log.

    Invariantes:
        - `run_id`, `phase`, `level`, `message` e `timestamp` sempre presentes
        - campos extras são preservados como chaves de primeiro nível
    """
    dummy_ctx.log(phase="evaluate", level="info", message="hello", mode="sequential")

    assert len(dummy_ctx.events) == 1
    event = dummy_ctx.events[0]
    assert event["run_id"] == "test-run"
    assert event["phase"] == "evaluate"
    assert event["level"] == "info"
    assert event["message"] == "hello"
    assert event["mode"] == "sequential"
    assert "timestamp" in event


def test_warnings_are_grouped_by_phase(dummy_ctx):
    dummy_ctx.add_warning(phase="evaluate", message="w1")
    dummy_ctx.add_warning(phase="evaluate", message="w2")
    dummy_ctx.add_warning(phase="config", message="w3")

    assert dummy_ctx.warnings == {"evaluate": ["w1", "w2"], "config": ["w3"]}


def test_events_for_filters_by_phase(dummy_ctx):
    dummy_ctx.log(phase="a", level="info", message="1")
    dummy_ctx.log(phase="b", level="info", message="2")
    dummy_ctx.log(phase="a", level="debug", message="3")

    assert [e["message"] for e in dummy_ctx.events_for("a")] == ["1", "3"]


def test_from_config_stamps_config_hash():
    cfg = {"engine": {"workers": 2}}
    ctx = RunContext.from_config(cfg, run_id="r1")

    assert ctx.run_id == "r1"
    assert ctx.config == cfg
    assert ctx.meta["config_hash"] == compute_config_hash(cfg)
    assert ctx.created_at.tzinfo is not None


def test_from_config_generates_run_id():
    assert RunContext.from_config().run_id != RunContext.from_config().run_id


def test_concurrent_logging_keeps_every_event(dummy_ctx):
    def _emit(worker):
        for i in range(200):
            dummy_ctx.log(phase="evaluate", level="debug", message="tick", worker=worker, i=i)

    threads = [threading.Thread(target=_emit, args=(w,)) for w in range(4)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert len(dummy_ctx.events) == 800


def test_from_files_resolves_config_and_hash(tmp_path, engine_defaults_yaml, engine_local_yaml):
    """
    Verifica que o contexto criado a partir de arquivos carrega a configuração
    resolvida (defaults + local) e o hash correspondente.
    """
    defaults = tmp_path / "config.defaults.yaml"
    local = tmp_path / "config.local.yaml"
    defaults.write_text(engine_defaults_yaml, encoding="utf-8")
    local.write_text(engine_local_yaml, encoding="utf-8")

    ctx = RunContext.from_files(defaults_path=str(defaults), local_path=str(local), run_id="files")

    assert ctx.run_id == "files"
    assert ctx.config["engine"]["workers"] == 4
    assert ctx.meta["config_hash"] == compute_config_hash(ctx.config)


def test_from_files_config_drives_stream(tmp_path, engine_defaults_yaml, engine_local_yaml):
    from atlas_stream import of_sequence

    defaults = tmp_path / "config.defaults.yaml"
    local = tmp_path / "config.local.yaml"
    defaults.write_text(engine_defaults_yaml, encoding="utf-8")
    local.write_text(engine_local_yaml, encoding="utf-8")
    ctx = RunContext.from_files(defaults_path=str(defaults), local_path=str(local))

    assert of_sequence(range(10)).configure(ctx.config).with_context(ctx).count() == 10
    assert ctx.events[0]["mode"] == "sharded"
    assert ctx.events[0]["workers"] == 4
