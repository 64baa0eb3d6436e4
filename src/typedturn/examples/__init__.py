# src/typedturn/examples/__init__.py
from .math_solution import QUICK_SCHEMA_NAME, MathSolution, MathStep

__all__ = ["QUICK_SCHEMA_NAME", "MathSolution", "MathStep"]
