"""
Pytest configuration and fixtures for typedturn tests.
"""

import json
import sys
from pathlib import Path

import pytest

# Add src directory to path for imports
src_dir = Path(__file__).parent.parent / "src"
if str(src_dir) not in sys.path:
    sys.path.insert(0, str(src_dir))

from typedturn.examples import MathSolution  # noqa: E402
from typedturn.messages import Message, MessageCollection  # noqa: E402
from typedturn.response import ChatTurnResponse  # noqa: E402
from typedturn.schema import (  # noqa: E402
    ResponseFormat,
    SchemaRegistry,
    require,
)


class Step:
    """Minimal descriptor: {"n": <integer>}."""

    def __init__(self, n: int):
        self.n = n

    @classmethod
    def json_schema(cls, root_context=None):
        return {
            "type": "object",
            "properties": {"n": {"type": "integer"}},
            "required": ["n"],
        }

    @classmethod
    def from_response(cls, data):
        return cls(require(data, "n", "integer", type_name="Step"))


@pytest.fixture
def step_type():
    return Step


@pytest.fixture
def registry():
    """An isolated registry so tests never touch the default one."""
    return SchemaRegistry()


@pytest.fixture
def math_format():
    return ResponseFormat.json_schema({"type": MathSolution}, name="advanced_math_solution")


@pytest.fixture
def make_response():
    """Build a ChatTurnResponse whose assistant message is *content*."""

    def _make(content, response_format=None, role="assistant"):
        if not isinstance(content, str):
            content = json.dumps(content)
        return ChatTurnResponse(
            id="resp-1",
            model="test-model",
            created=1700000000,
            messages=MessageCollection([Message(role=role, content=content)]),
            response_format=response_format,
        )

    return _make
