# src/typedturn/providers/mock.py
"""Canned-reply provider used by tests and examples."""

import json
from typing import Any, Dict, List, Optional, Union

from ..response import ChatTurnResponse
from ..turn.request import Request
from .base import BaseAdapter
from .openai import OpenAIAdapter


class MockProvider:
    """
    Mock provider for tests and examples.

    Each ``send_chat_turn`` shapes the payload with *adapter* (recorded in
    ``payloads``) and answers with the next canned reply, wrapped in a
    chat-completions body and parsed by the same adapter. Dict replies are
    JSON-encoded; once the replies run out the last one repeats.
    """

    def __init__(
        self,
        replies: Optional[List[Union[str, Dict[str, Any]]]] = None,
        adapter: Optional[BaseAdapter] = None,
        model_name: str = "mock-model",
        reasoning: Optional[str] = None,
    ):
        self.replies = list(replies or ["Echo"])
        self.adapter = adapter or OpenAIAdapter()
        self.model_name = model_name
        self.reasoning = reasoning
        self.payloads: List[Dict[str, Any]] = []
        self._call_count = 0

    def send_chat_turn(self, request: Request) -> ChatTurnResponse:
        self.payloads.append(self.adapter.to_payload(request))
        reply = self.replies[min(self._call_count, len(self.replies) - 1)]
        self._call_count += 1
        content = reply if isinstance(reply, str) else json.dumps(reply)
        return self.adapter.parse_response(
            self.body_for(content),
            headers={"content-type": "application/json"},
            response_format=request.response_format,
        )

    def body_for(self, content: str) -> Dict[str, Any]:
        message: Dict[str, Any] = {"role": "assistant", "content": content}
        if self.reasoning is not None:
            message["reasoning_content"] = self.reasoning
        return {
            "id": f"mock-{self._call_count}",
            "object": "chat.completion",
            "created": 1700000000 + self._call_count,
            "model": self.model_name,
            "system_fingerprint": "fp_mock",
            "choices": [{"index": 0, "message": message, "finish_reason": "stop"}],
            "usage": {"prompt_tokens": 0, "completion_tokens": 0, "total_tokens": 0},
        }

    @property
    def call_count(self) -> int:
        return self._call_count
