"""
Runtime for evaluating monkey programs.

Provides:
- Values: immutable tagged integers and booleans
- Interpreter: tree-walking evaluator over the AST
"""

from .values import (
    Value,
    ValueType,
    int_val,
    bool_val,
    INT64_MIN,
    INT64_MAX,
)

from .interpreter import (
    Interpreter,
    ExecutionResult,
    evaluate,
    compile_and_run,
)

__all__ = [
    "Value",
    "ValueType",
    "int_val",
    "bool_val",
    "INT64_MIN",
    "INT64_MAX",
    "Interpreter",
    "ExecutionResult",
    "evaluate",
    "compile_and_run",
]
