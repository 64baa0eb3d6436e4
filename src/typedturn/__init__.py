"""
typedturn - describe the answer you want from a chat model with Python
classes, and get instances of those classes back.
"""

__version__ = "0.1.0"

# Load environment variables from project root .env (if present).
# This makes OPENAI_API_KEY etc. available no matter which submodule is imported.
try:
    from pathlib import Path
    from dotenv import load_dotenv

    _repo_root = Path(__file__).resolve().parents[2]
    _env_path = _repo_root / ".env"
    if _env_path.exists():
        load_dotenv(_env_path, override=False)
except ImportError:
    pass

from .messages import Message, MessageCollection
from .response import ChatTurnResponse, find_root_type
from .schema import (
    DecodeError,
    LogicError,
    ResponseDataError,
    ResponseFormat,
    ResponseFormatType,
    RootContext,
    SchemaError,
    TypedTurnError,
    resolve,
    schema_type,
)
from .turn import Request, RequestBuilder, Turn, TurnBuilder, TurnDefaults, TurnOptions

__all__ = [
    "__version__",
    "Message",
    "MessageCollection",
    "ChatTurnResponse",
    "find_root_type",
    "DecodeError",
    "LogicError",
    "ResponseDataError",
    "ResponseFormat",
    "ResponseFormatType",
    "RootContext",
    "SchemaError",
    "TypedTurnError",
    "resolve",
    "schema_type",
    "Request",
    "RequestBuilder",
    "Turn",
    "TurnBuilder",
    "TurnDefaults",
    "TurnOptions",
]
