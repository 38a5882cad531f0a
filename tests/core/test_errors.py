# tests/core/test_errors.py
"""
Testes do catálogo canônico de erros.

Os testes asseguram que:
- os helpers de fábrica produzem exceções tipadas com details e hint
- exception_to_payload mapeia cada exceção para seu código estável
- exceções externas viram ENGINE_EXECUTION_ERROR sem stack trace
- o payload é serializável
"""

import json

from atlas_stream.core.errors import (
    ENGINE_CONFIGURATION_ERROR,
    ENGINE_EXECUTION_ERROR,
    PIPELINE_ALREADY_CONSUMED,
    SOURCE_INVALID_KIND,
    engine_configuration_error,
    exception_to_payload,
    invalid_source,
    pipeline_already_consumed,
)
from atlas_stream.core.exceptions import (
    EngineConfigurationError,
    InvalidSourceError,
    PipelineConsumedError,
    StreamException,
)


def test_factories_build_typed_exceptions():
    src = invalid_source(constructor="of_mapping", expected="mapping", received="list")
    consumed = pipeline_already_consumed(operation="filter")
    config = engine_configuration_error(details={"workers": -1})

    assert isinstance(src, InvalidSourceError)
    assert isinstance(consumed, PipelineConsumedError)
    assert isinstance(config, EngineConfigurationError)
    for exc in (src, consumed, config):
        assert isinstance(exc, StreamException)
        assert exc.hint
        assert str(exc) == exc.message


def test_payload_codes():
    assert exception_to_payload(invalid_source(constructor="c", expected="e", received="r")).type == SOURCE_INVALID_KIND
    assert exception_to_payload(pipeline_already_consumed(operation="o")).type == PIPELINE_ALREADY_CONSUMED
    assert exception_to_payload(engine_configuration_error()).type == ENGINE_CONFIGURATION_ERROR


def test_foreign_exception_payload():
    payload = exception_to_payload(ZeroDivisionError("division by zero"))

    assert payload.type == ENGINE_EXECUTION_ERROR
    assert payload.message == "division by zero"
    assert payload.details == {"exception_class": "ZeroDivisionError"}


def test_payload_is_json_serializable():
    payload = exception_to_payload(invalid_source(constructor="generate", expected="callable", received="int"))
    data = json.loads(json.dumps(payload.to_dict()))

    assert data["type"] == SOURCE_INVALID_KIND
    assert data["details"] == {"constructor": "generate", "expected": "callable", "received": "int"}
