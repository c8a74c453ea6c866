"""Unit tests for provider JSON-mode request fields."""
from __future__ import annotations

import pytest

from crux_llmclient.base.json_format import ProviderFamily, get_json_response_params, identify_provider

JSON_OBJECT = {"response_format": {"type": "json_object"}}


@pytest.mark.parametrize(
    "model, expected",
    [
        ("gpt-4o-mini", JSON_OBJECT),
        ("text-davinci-003", JSON_OBJECT),
        ("azure-deployment-1", JSON_OBJECT),
        ("Mixtral-8x7B", JSON_OBJECT),
        ("groq/llama3-70b", JSON_OBJECT),
        ("ollama/qwen2", {"format": "json"}),
        ("llama-3-8b", {}),
        ("claude-3-5-sonnet", {}),
        ("gemini-1.5-pro", {}),
        ("something-else", {}),
        (None, {}),
    ],
)
def test_json_response_params_by_model(model, expected):
    assert get_json_response_params(model) == expected  # nosec B101


def test_identify_provider_prefers_first_marker():
    assert identify_provider("ollama-llama3") is ProviderFamily.OLLAMA  # nosec B101
    assert identify_provider("vertex-gemini") is ProviderFamily.GEMINI  # nosec B101
