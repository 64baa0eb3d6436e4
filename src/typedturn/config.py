# src/typedturn/config.py
"""
Provider connection settings.

Values come from the environment (a project ``.env`` is loaded on package
import):

    OPENAI_API_KEY, OPENAI_BASE_URL
    DEEPSEEK_API_KEY, DEEPSEEK_BASE_URL
"""

from __future__ import annotations

import os
from typing import Dict, Optional

from pydantic import BaseModel, ConfigDict, Field

DEFAULT_BASE_URLS: Dict[str, str] = {
    "openai": "https://api.openai.com",
    "deepseek": "https://api.deepseek.com",
}

DEFAULT_TIMEOUT = 600.0


class ProviderSettings(BaseModel):
    """Connection settings for one provider."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    api_key: str = ""
    base_url: str
    timeout: float = Field(DEFAULT_TIMEOUT, gt=0)

    @classmethod
    def from_env(
        cls,
        provider: str,
        *,
        api_key: Optional[str] = None,
        base_url: Optional[str] = None,
    ) -> "ProviderSettings":
        """
        Build settings for *provider*, explicit arguments winning over env.

        Raises:
            ValueError: If *provider* has no known default base URL.
        """
        name = provider.lower()
        if name not in DEFAULT_BASE_URLS:
            known = ", ".join(sorted(DEFAULT_BASE_URLS))
            raise ValueError(f"Unknown provider: {provider}. Known providers: {known}")

        prefix = name.upper()
        return cls(
            api_key=api_key if api_key is not None else os.getenv(f"{prefix}_API_KEY", ""),
            base_url=(
                base_url
                or os.getenv(f"{prefix}_BASE_URL")
                or DEFAULT_BASE_URLS[name]
            ).rstrip("/"),
        )
