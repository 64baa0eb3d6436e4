# src/typedturn/examples/math_solution.py
"""
Example descriptor types: a step-by-step math solution.

``MathSolution`` adapts its schema to the request: when the schema is named
``quick_math_solution`` the ``steps`` list is left out entirely.

    fmt = ResponseFormat.json_schema(
        {"type": MathSolution},
        name="advanced_math_solution",   # includes 'steps'
    )
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from ..schema.contract import RootContext
from ..schema.errors import DecodeError, DecodeErrorKind
from ..schema.fields import expect_object, hydrate_list, require

QUICK_SCHEMA_NAME = "quick_math_solution"


class MathStep:
    """One step of a solution."""

    def __init__(self, step_number: int, description: str, calculation: str, result: str):
        self.step_number = step_number
        self.description = description
        self.calculation = calculation
        self.result = result

    @classmethod
    def json_schema(cls, root_context: Optional[RootContext] = None) -> Dict[str, Any]:
        return {
            "type": "object",
            "properties": {
                "step_number": {
                    "type": "integer",
                    "description": "Step number, starting at 1",
                    "minimum": 1,
                },
                "description": {
                    "type": "string",
                    "description": "What is done in this step",
                },
                "calculation": {
                    "type": "string",
                    "description": "Formula or expression evaluated",
                },
                "result": {
                    "type": "string",
                    "description": "Result of the step",
                },
            },
            "required": ["step_number", "description", "calculation", "result"],
            "additionalProperties": False,
        }

    @classmethod
    def from_response(cls, data: Any) -> "MathStep":
        data = expect_object(data, type_name="MathStep")
        step_number = require(data, "step_number", "integer", type_name="MathStep")
        if step_number < 1:
            raise DecodeError(
                "field 'step_number' must be >= 1",
                kind=DecodeErrorKind.WRONG_TYPE,
                path="step_number",
                type_name="MathStep",
                raw_output=step_number,
            )
        return cls(
            step_number=step_number,
            description=require(data, "description", "string", type_name="MathStep"),
            calculation=require(data, "calculation", "string", type_name="MathStep"),
            result=require(data, "result", "string", type_name="MathStep"),
        )

    def to_response(self) -> Dict[str, Any]:
        return {
            "step_number": self.step_number,
            "description": self.description,
            "calculation": self.calculation,
            "result": self.result,
        }

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, MathStep):
            return NotImplemented
        return self.to_response() == other.to_response()

    def __str__(self) -> str:
        return (
            f"Step {self.step_number}: {self.description}\n"
            f"  Calculation: {self.calculation}\n"
            f"  Result: {self.result}"
        )


class MathSolution:
    """A solved problem; ``steps`` is empty for quick solutions."""

    def __init__(self, problem: str, steps: List[MathStep], final_answer: str):
        self.problem = problem
        self.steps = steps
        self.final_answer = final_answer

    @classmethod
    def json_schema(cls, root_context: Optional[RootContext] = None) -> Dict[str, Any]:
        schema: Dict[str, Any] = {
            "type": "object",
            "properties": {
                "problem": {
                    "type": "string",
                    "description": "The original math problem",
                },
                "final_answer": {
                    "type": "string",
                    "description": "Final answer to the problem",
                },
            },
            "required": ["problem", "final_answer"],
            "additionalProperties": False,
        }

        schema_name = root_context.schema_name if root_context else None
        if schema_name != QUICK_SCHEMA_NAME:
            schema["properties"]["steps"] = {
                "type": "array",
                "description": "Solution steps in order",
                "items": {"type": MathStep},
                "minItems": 1,
            }
            schema["required"].append("steps")

        return schema

    @classmethod
    def from_response(cls, data: Any) -> "MathSolution":
        data = expect_object(data, type_name="MathSolution")
        problem = require(data, "problem", "string", type_name="MathSolution")
        final_answer = require(data, "final_answer", "string", type_name="MathSolution")
        # Absent in quick solutions
        steps = hydrate_list(data, "steps", MathStep, required=False, type_name="MathSolution")
        return cls(problem=problem, steps=steps, final_answer=final_answer)

    def to_response(self) -> Dict[str, Any]:
        return {
            "problem": self.problem,
            "steps": [step.to_response() for step in self.steps],
            "final_answer": self.final_answer,
        }

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, MathSolution):
            return NotImplemented
        return self.to_response() == other.to_response()

    def __str__(self) -> str:
        lines = [f"Problem: {self.problem}", ""]
        if self.steps:
            lines.append("Solution:")
            lines.append("=" * 50)
            for step in self.steps:
                lines.append(str(step))
                lines.append("")
            lines.append("=" * 50)
        lines.append(f"Final answer: {self.final_answer}")
        return "\n".join(lines) + "\n"
