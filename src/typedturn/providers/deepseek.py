# src/typedturn/providers/deepseek.py
"""DeepSeek chat-completions adapter."""

from __future__ import annotations

from typing import Any, Dict

from ..messages import Message
from ..schema.response_format import ResponseFormat
from ..turn.options import TurnOptions
from .base import BaseAdapter

SCHEMA_INSTRUCTION = "Return only JSON matching schema: "


class DeepSeekAdapter(BaseAdapter):
    """
    DeepSeek has no JSON-schema response format: it is asked for a JSON
    object and the resolved schema goes into an extra system message.
    Thinking mode is supported and its ``reasoning_content`` is kept.
    """

    name = "deepseek"
    endpoint = "/chat/completions"
    required_response_fields = (
        "id",
        "choices",
        "created",
        "model",
        "system_fingerprint",
        "object",
        "usage",
    )
    keep_reasoning = True

    def extra_options(self, options: TurnOptions) -> Dict[str, Any]:
        if options.is_thinking:
            return {"thinking": {"type": "enabled"}}
        return {}

    def apply_response_format(self, payload: Dict[str, Any], fmt: ResponseFormat) -> None:
        if fmt.is_structured:
            payload["response_format"] = {"type": "json_object"}
            instruction = Message.system(SCHEMA_INSTRUCTION + fmt.schema_to_json_string())
            payload["messages"] = payload["messages"] + [instruction.to_dict()]
        else:
            payload["response_format"] = {"type": "text"}
