"""Unit tests for the immutable value model.

Covers message factories and parsing, request body serialization (field
omission, additional-field overrides), Output factories and status mapping,
chunk decoding, and SSE event helpers.
"""
from __future__ import annotations

import dataclasses
import json

import pytest
from pydantic import BaseModel

from crux_llmclient.base.errors import ChunkDecodeError, ClientError, ErrorType
from crux_llmclient.base.models import Input, InputBody, Message, Output, OutputChunk, SseEvent


class _Reply(BaseModel):
    message: dict


def test_message_factories_set_roles():
    assert Message.system("s").role == "system"  # nosec B101
    assert Message.user("u").to_dict() == {"role": "user", "content": "u"}  # nosec B101
    assert Message.assistant("a") == Message("assistant", "a")  # nosec B101


def test_message_from_dict_rejects_unknown_role():
    with pytest.raises(ValueError):
        Message.from_dict({"role": "tool", "content": "x"})


def test_values_are_frozen():
    msg = Message.user("x")
    with pytest.raises(dataclasses.FrozenInstanceError):
        msg.content = "y"  # type: ignore[misc]


def test_input_body_omits_unset_model_and_temperature():
    body = InputBody.chat(None, [Message.user("Hi")], False)
    assert body.to_json_object() == {  # nosec B101
        "messages": [{"role": "user", "content": "Hi"}],
        "stream": False,
    }


def test_input_body_additional_fields_override_standard_keys():
    body = InputBody.chat("m1", [Message.user("Hi")], True, 0.2, {"model": "m2", "format": "json"})
    obj = body.to_json_object()
    assert obj["model"] == "m2"  # nosec B101
    assert obj["format"] == "json" and obj["temperature"] == 0.2 and obj["stream"] is True  # nosec B101


def test_sse_and_chat_message_factories():
    assert InputBody.sse("m", [Message.user("x")]).stream is True  # nosec B101
    single = InputBody.chat_message("hello", False)
    assert single.messages == (Message.user("hello"),) and single.model is None  # nosec B101


def test_input_chat_serializes_canonical_body():
    body = InputBody.chat("gpt-4o", [Message.system("be brief"), Message.user("Hi")], False)
    inp = Input.chat("http://x/v1", body, {"Authorization": "Bearer t"})
    assert json.loads(inp.body) == body.to_json_object()  # nosec B101
    assert inp.input_body is body and inp.header_dict() == {"Authorization": "Bearer t"}  # nosec B101


def test_output_from_response_success_and_failure():
    ok = Output.from_response(200, {"Content-Type": "application/json"}, '{"a":1}')
    assert ok.is_successful() and ok.failure_reason() is None  # nosec B101
    assert ok.get_header("content-type") == "application/json"  # nosec B101

    bad = Output.from_response(404, {}, '{"error":{"code":"model_not_found"}}')
    assert not bad.is_successful() and bad.status_code == 404  # nosec B101
    assert bad.error == ClientError(bad.body, "ApiError", "model_not_found")  # nosec B101


def test_output_for_error_status_mapping():
    assert Output.for_error(ClientError("m", "ApiError", "HTTP_418")).status_code == 418  # nosec B101
    assert Output.for_error(ClientError("m", "Custom", "INTERNAL_ERROR")).status_code == 500  # nosec B101
    assert Output.for_error(ClientError("m", "ApiError", "x"), status_code=409).status_code == 409  # nosec B101
    with pytest.raises(ValueError):
        Output.for_error(None)  # type: ignore[arg-type]


def test_output_for_error_401():
    out = Output.for_error_401()
    assert out.status_code == 401 and out.error.type == ErrorType.AUTHENTICATION.value  # nosec B101
    assert out.failure_reason() == "Unauthorized access"  # nosec B101


def test_output_parse_json_body_with_model():
    out = Output.for_success(200, None, '{"message":{"role":"assistant","content":"Hello"}}')
    assert out.parse_json_body()["message"]["content"] == "Hello"  # nosec B101
    assert out.parse_json_body(_Reply).message["role"] == "assistant"  # nosec B101
    with pytest.raises(ValueError):
        Output.for_message(Message.assistant("x")).parse_json_body()


def test_output_chunk_from_json_and_error_field():
    chunk = OutputChunk.from_json('{"message":{"role":"assistant","content":"Hi"},"done":true,"index":3}')
    assert chunk == OutputChunk(Message.assistant("Hi"), True, 3)  # nosec B101
    err = OutputChunk.from_json('{"message":{"role":"assistant","content":""},"done":true,"error":{"message":"m","type":"ApiError","code":"c"}}')
    assert err.is_error() and err.error.code == "c"  # nosec B101


@pytest.mark.parametrize(
    "text",
    [
        "not json",
        "[1,2]",
        '{"message":{"role":"robot","content":"x"}}',
        '{"done":"false","index":0}',
        '{"done":1,"index":0}',
    ],
)
def test_output_chunk_from_json_rejects_malformed(text):
    with pytest.raises(ChunkDecodeError):
        OutputChunk.from_json(text)


def test_output_chunk_for_error_is_terminal():
    chunk = OutputChunk.for_error(ClientError("boom", "ApiError", "HTTP_500"))
    assert chunk.done and chunk.index == -1 and chunk.message.content == "boom"  # nosec B101
    assert chunk.to_dict()["error"] == {"message": "boom", "type": "ApiError", "code": "HTTP_500"}  # nosec B101


def test_sse_event_done_and_terminal_rules():
    done = SseEvent.done()
    assert done.is_done() and done.is_terminal() and done.chunk is None  # nosec B101
    final = SseEvent.of(OutputChunk(Message.assistant(""), True, 1), event="message", id="7")
    assert not final.is_terminal() and final.to_dict()["id"] == "7"  # nosec B101
    err = SseEvent.of(OutputChunk.for_error(ClientError("x", "ApiError", "HTTP_500")))
    assert err.is_terminal()  # nosec B101
    partial = SseEvent.of(OutputChunk(Message.assistant("p"), False, 2, ClientError("x", "ApiError", "c")))
    assert not partial.is_terminal()  # nosec B101
