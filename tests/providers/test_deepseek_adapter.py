"""Tests for typedturn.providers.deepseek."""

import pytest

from typedturn.config import ProviderSettings
from typedturn.providers import DeepSeekAdapter
from typedturn.providers.deepseek import SCHEMA_INSTRUCTION
from typedturn.schema import ResponseDataError, ResponseFormat
from typedturn.turn import RequestBuilder


def _request(**options):
    builder = RequestBuilder().set_user_prompt("2+2?").set_model("deepseek-chat")
    for name, value in options.items():
        builder.set_option(name, value)
    return builder.build()


class TestPayload:

    def test_thinking_after_model(self):
        payload = DeepSeekAdapter().to_payload(_request(is_thinking=True, temperature=0.1))
        assert list(payload) == ["messages", "model", "thinking", "temperature"]
        assert payload["thinking"] == {"type": "enabled"}

    def test_thinking_off(self):
        payload = DeepSeekAdapter().to_payload(_request(is_thinking=False))
        assert "thinking" not in payload

    def test_structured_format(self, math_format):
        payload = DeepSeekAdapter().to_payload(_request(response_format=math_format))
        assert payload["response_format"] == {"type": "json_object"}
        instruction = payload["messages"][-1]
        assert instruction["role"] == "system"
        assert instruction["content"] == SCHEMA_INSTRUCTION + math_format.schema_to_json_string()
        assert payload["messages"][0] == {"role": "user", "content": "2+2?"}

    def test_request_messages_untouched(self, math_format):
        request = _request(response_format=math_format)
        DeepSeekAdapter().to_payload(request)
        assert len(request.messages) == 1

    def test_text_format(self):
        payload = DeepSeekAdapter().to_payload(_request(response_format=ResponseFormat.text()))
        assert payload["response_format"] == {"type": "text"}
        assert len(payload["messages"]) == 1

    def test_http_request_endpoint(self):
        settings = ProviderSettings(api_key="k", base_url="https://api.deepseek.com")
        http_request = DeepSeekAdapter().to_http_request(_request(), settings)
        assert str(http_request.url) == "https://api.deepseek.com/chat/completions"


class TestParseResponse:

    def _body(self):
        return {
            "id": "ds-1",
            "object": "chat.completion",
            "created": 1,
            "model": "deepseek-reasoner",
            "system_fingerprint": "fp_1",
            "choices": [
                {"message": {"role": "assistant", "content": "4", "reasoning_content": "2+2=4"}}
            ],
            "usage": {"total_tokens": 5},
        }

    def test_keeps_reasoning(self):
        response = DeepSeekAdapter().parse_response(self._body())
        assert response.get_assistant().reasoning_content == "2+2=4"
        assert response.system_fingerprint == "fp_1"

    def test_requires_fingerprint(self):
        body = self._body()
        del body["system_fingerprint"]
        with pytest.raises(ResponseDataError, match="deepseek API response: system_fingerprint"):
            DeepSeekAdapter().parse_response(body)
