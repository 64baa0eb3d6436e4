# src/typedturn/turn/options.py
"""
Type-safe options for one chat turn.

Design:
    - ``extra = "forbid"`` catches typos immediately.
    - ``to_call_kwargs()`` returns only non-None values as a dict.
    - ``merge()`` layers options: base < override, non-None fields win.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from ..schema.response_format import ResponseFormat


class TurnOptions(BaseModel):
    """
    Options sent along with the messages of a request.

    Only ``model`` is required; every other field defaults to ``None``,
    which means "leave it to the provider".

    Usage::

        opts = TurnOptions(model="gpt-4o-mini", temperature=0.2)
        opts.to_call_kwargs()
        # → {"model": "gpt-4o-mini", "temperature": 0.2}
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    model: str = Field(..., description="Model identifier.")

    # --- Sampling ---
    temperature: Optional[float] = Field(None, ge=0.0, le=2.0)
    max_tokens: Optional[int] = Field(None, ge=1)
    top_p: Optional[float] = Field(None, ge=0.0, le=1.0)
    frequency_penalty: Optional[float] = Field(None, ge=-2.0, le=2.0)
    presence_penalty: Optional[float] = Field(None, ge=-2.0, le=2.0)

    # --- Control ---
    stop: Optional[List[str]] = Field(None, max_length=4)
    stream: Optional[bool] = None
    stream_options: Optional[Dict[str, Any]] = None
    remember_context: Optional[bool] = None
    is_thinking: Optional[bool] = Field(
        None, description="Enable the provider's reasoning mode (DeepSeek)."
    )
    response_format: Optional[Any] = None

    # --- Tools & logprobs ---
    tools: Optional[List[Dict[str, Any]]] = None
    tool_choice: Optional[Union[str, Dict[str, Any]]] = None
    logprobs: Optional[bool] = None
    top_logprobs: Optional[int] = Field(None, ge=0, le=20)

    @field_validator("model")
    @classmethod
    def _model_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("Model cannot be empty")
        return value

    @field_validator("response_format")
    @classmethod
    def _check_response_format(cls, value: Any) -> Any:
        if value is not None and not isinstance(value, ResponseFormat):
            raise ValueError(
                f"response_format must be a ResponseFormat, got {type(value).__name__}"
            )
        return value

    @model_validator(mode="after")
    def _top_logprobs_needs_logprobs(self) -> "TurnOptions":
        if self.top_logprobs is not None and self.logprobs is not True:
            raise ValueError("top_logprobs requires logprobs to be true")
        return self

    # ------------------------------------------------------------------ #
    # Helpers                                                              #
    # ------------------------------------------------------------------ #

    def to_call_kwargs(self) -> Dict[str, Any]:
        """
        Return set options by field name, excluding ``None`` values.

        Values are returned as-is (``response_format`` stays a
        ``ResponseFormat``).
        """
        values = {name: getattr(self, name) for name in type(self).model_fields}
        return {k: v for k, v in values.items() if v is not None}

    def merge(self, override: "TurnOptions | None") -> "TurnOptions":
        """
        Return a **new** instance with *override* values taking precedence.

        Only non-None fields from *override* replace fields in ``self``.
        """
        if override is None:
            return self
        base = self.to_call_kwargs()
        base.update(override.to_call_kwargs())
        return type(self)(**base)
