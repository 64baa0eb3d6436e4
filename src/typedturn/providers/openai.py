# src/typedturn/providers/openai.py
"""OpenAI chat-completions adapter."""

from __future__ import annotations

from typing import Any, Dict

from ..schema.response_format import ResponseFormat
from .base import BaseAdapter


class OpenAIAdapter(BaseAdapter):
    """
    OpenAI sends the resolved schema in ``response_format.json_schema``.

    ``is_thinking`` has no OpenAI counterpart and is ignored, as is
    ``reasoning_content`` in responses.
    """

    name = "openai"
    endpoint = "/v1/chat/completions"

    def apply_response_format(self, payload: Dict[str, Any], fmt: ResponseFormat) -> None:
        if fmt.is_structured:
            payload["response_format"] = {
                "type": "json_schema",
                "json_schema": {
                    "name": fmt.name or "response",
                    "schema": fmt.resolved_schema(),
                    "strict": True if fmt.strict is None else fmt.strict,
                },
            }
        else:
            payload["response_format"] = {"type": "text"}
