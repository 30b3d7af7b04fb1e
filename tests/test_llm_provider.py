import json
from types import SimpleNamespace
from unittest.mock import MagicMock

import pytest

from engine.llm_provider import LLMProvider
from models import GenerationResponse


@pytest.fixture
def client() -> MagicMock:
    return MagicMock(name="genai.Client")


@pytest.fixture
def provider(settings, client) -> LLMProvider:
    return LLMProvider(settings, client=client)


def _walk(node):
    if isinstance(node, dict):
        yield node
        for value in node.values():
            yield from _walk(value)
    elif isinstance(node, list):
        for value in node:
            yield from _walk(value)


def test_sanitized_schema_has_no_refs_or_unsupported_keys() -> None:
    schema = LLMProvider._sanitize_schema(GenerationResponse.model_json_schema())

    for node in _walk(schema):
        assert "$ref" not in node
        assert "$defs" not in node
        assert "additionalProperties" not in node
        assert "default" not in node

    item = schema["properties"]["infographics"]["items"]
    assert item["properties"]["type"]["enum"] == [
        "statistical", "process", "comparison", "educational",
    ]
    comparison = item["properties"]["comparison"]
    assert comparison["nullable"] is True
    assert set(comparison["properties"]) == {"side_a", "side_b"}
    assert comparison["description"] == "Only for type='comparison'"
    assert "type" in item["required"]


def test_generate_structured_parses_response(provider, client, all_kinds, settings) -> None:
    payload = {"infographics": [i.model_dump(mode="json") for i in all_kinds]}
    client.models.generate_content.return_value = SimpleNamespace(text=json.dumps(payload))

    result = provider.generate_structured(
        "prompt", GenerationResponse, system_instruction="be brief"
    )

    assert isinstance(result, GenerationResponse)
    assert result.infographics == all_kinds

    kwargs = client.models.generate_content.call_args.kwargs
    assert kwargs["model"] == settings.gemini_text_model
    assert kwargs["contents"] == "prompt"
    config = kwargs["config"]
    assert config.response_mime_type == "application/json"
    assert config.system_instruction == "be brief"
    assert config.temperature == settings.llm_temperature


def test_invalid_json_raises_value_error(provider, client) -> None:
    client.models.generate_content.return_value = SimpleNamespace(text="not json")
    with pytest.raises(ValueError, match="GenerationResponse"):
        provider.generate_structured("prompt", GenerationResponse)


def test_schema_violation_raises_value_error(provider, client) -> None:
    bad = {"infographics": [{
        "type": "process",
        "title": "t",
        "stats": [{"label": "a", "value": 1}],
    }]}
    client.models.generate_content.return_value = SimpleNamespace(text=json.dumps(bad))
    with pytest.raises(ValueError, match="must not carry stats"):
        provider.generate_structured("prompt", GenerationResponse)


def test_single_attempt_by_default(provider, client) -> None:
    client.models.generate_content.side_effect = ConnectionError("offline")
    with pytest.raises(ConnectionError):
        provider.generate_structured("prompt", GenerationResponse)
    assert client.models.generate_content.call_count == 1
