# src/typedturn/turn/__init__.py
"""Request assembly: options, requests, builders and turn templates."""

from .options import TurnOptions
from .request import Request, RequestBuilder
from .template import Turn, TurnBuilder, TurnDefaults, merge

__all__ = [
    "TurnOptions",
    "Request",
    "RequestBuilder",
    "Turn",
    "TurnBuilder",
    "TurnDefaults",
    "merge",
]
