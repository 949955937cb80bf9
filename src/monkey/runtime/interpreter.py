"""
Tree-walking interpreter for monkey programs.

Reduces AST nodes to runtime values. Operands are evaluated depth first,
left before right, before an operator or control rule is applied. The AST
is never modified, so one Program can be evaluated any number of times.
"""

import logging
from dataclasses import dataclass
from typing import List, Optional

from .values import Value, ValueType, int_val, bool_val, in_int64_range

from ..ast import (
    AstNode, Program, Statement,
    LetStatement, ReturnStatement, ExpressionStatement, BlockStatement,
    Expression, Identifier, IntegerLiteral, BooleanLiteral,
    PrefixExpression, InfixExpression, IfExpression,
    FunctionLiteral, CallExpression,
)
from ..errors import (
    MonkeyError,
    error_missing_operand,
    error_type_mismatch,
    error_unbound_identifier,
    error_uncallable,
    error_division_by_zero,
    error_integer_overflow,
    error_unsupported_node,
    error_nesting_too_deep_in_evaluation,
)
from ..tokens import TokenType, symbol_for

logger = logging.getLogger("monkey.interpreter")


@dataclass
class ExecutionResult:
    """Result of compiling and running source text."""
    success: bool
    value: Optional[Value] = None
    error: Optional[MonkeyError] = None

    @property
    def output(self) -> str:
        """Text the REPL prints: the inspected value, or '' for no value."""
        if self.value is None:
            return ""
        return self.value.inspect()

    @property
    def error_message(self) -> Optional[str]:
        if self.error is None:
            return None
        return str(self.error)


class Interpreter:
    """
    Tree-walking evaluator.

    Evaluates AST nodes by dispatching to type-specific methods. A result of
    None means the node produced no value (an empty block, or an `if` whose
    condition is false and which has no else branch).
    """

    def evaluate(self, program: Program) -> Optional[Value]:
        """
        Evaluate a program.

        Returns:
            The value of the last statement, or None for an empty program or
            one whose last statement has no value

        Raises:
            EvaluationError: at the first operation with no defined rule
        """
        try:
            result = self._eval_statements(program.statements)
        except RecursionError:
            raise error_nesting_too_deep_in_evaluation() from None
        logger.debug(
            "evaluated %d statement(s) -> %r", len(program.statements), result
        )
        return result

    def _eval_statements(self, statements: List[Statement]) -> Optional[Value]:
        result = None
        for stmt in statements:
            result = self._eval_statement(stmt)
        return result

    def _eval_statement(self, stmt: Statement) -> Optional[Value]:
        if isinstance(stmt, ExpressionStatement):
            return self._evaluate(stmt.expression)
        elif isinstance(stmt, BlockStatement):
            return self._eval_statements(stmt.statements)
        elif isinstance(stmt, (LetStatement, ReturnStatement)):
            raise error_unsupported_node(_kind(stmt))
        else:
            raise RuntimeError(f"Unknown statement type: {type(stmt).__name__}")

    def _evaluate(self, expr: Expression) -> Optional[Value]:
        """Evaluate an expression to produce a Value (or None)."""
        if isinstance(expr, IntegerLiteral):
            return int_val(expr.value)
        elif isinstance(expr, BooleanLiteral):
            return bool_val(expr.value)
        elif isinstance(expr, PrefixExpression):
            return self._eval_prefix(expr)
        elif isinstance(expr, InfixExpression):
            return self._eval_infix(expr)
        elif isinstance(expr, IfExpression):
            return self._eval_if(expr)
        elif isinstance(expr, Identifier):
            raise error_unbound_identifier(expr.name)
        elif isinstance(expr, CallExpression):
            return self._eval_call(expr)
        elif isinstance(expr, FunctionLiteral):
            raise error_unsupported_node(_kind(expr))
        else:
            raise RuntimeError(f"Unknown expression type: {type(expr).__name__}")

    def _eval_operand(self, expr: Optional[Expression], operator: TokenType) -> Value:
        """Evaluate an operator's operand, which must produce a value."""
        if expr is None:
            raise error_missing_operand(f"'{symbol_for(operator)}'", "nothing")
        value = self._evaluate(expr)
        if value is None:
            raise error_type_mismatch(f"operand of '{symbol_for(operator)}' has no value")
        return value

    def _eval_prefix(self, op: PrefixExpression) -> Value:
        """Evaluate a unary operation."""
        operand = self._eval_operand(op.operand, op.operator)

        if op.operator == TokenType.BANG:
            if operand.type != ValueType.BOOLEAN:
                raise error_type_mismatch(f"!{operand.type.value}")
            return bool_val(not operand.data)
        elif op.operator == TokenType.MINUS:
            if operand.type != ValueType.INTEGER:
                raise error_type_mismatch(f"-{operand.type.value}")
            return self._checked(-operand.data, op.operator)
        else:
            raise RuntimeError(f"Unknown prefix operator: {op.operator}")

    def _eval_infix(self, op: InfixExpression) -> Value:
        """Evaluate a binary operation. Both sides are always evaluated."""
        left = self._eval_operand(op.left, op.operator)
        right = self._eval_operand(op.right, op.operator)

        if left.type == ValueType.INTEGER and right.type == ValueType.INTEGER:
            return self._eval_integer_infix(op.operator, left.data, right.data)
        if left.type == ValueType.BOOLEAN and right.type == ValueType.BOOLEAN:
            return self._eval_boolean_infix(op.operator, left.data, right.data)
        raise error_type_mismatch(_describe_infix(op.operator, left, right))

    def _eval_integer_infix(self, operator: TokenType, left: int, right: int) -> Value:
        if operator == TokenType.PLUS:
            return self._checked(left + right, operator)
        elif operator == TokenType.MINUS:
            return self._checked(left - right, operator)
        elif operator == TokenType.STAR:
            return self._checked(left * right, operator)
        elif operator == TokenType.SLASH:
            if right == 0:
                raise error_division_by_zero()
            # Truncate toward zero; Python's // floors
            quotient = abs(left) // abs(right)
            if (left < 0) != (right < 0):
                quotient = -quotient
            return self._checked(quotient, operator)
        elif operator == TokenType.LT:
            return bool_val(left < right)
        elif operator == TokenType.GT:
            return bool_val(left > right)
        elif operator == TokenType.EQ:
            return bool_val(left == right)
        elif operator == TokenType.NE:
            return bool_val(left != right)
        else:
            raise RuntimeError(f"Unknown infix operator: {operator}")

    def _eval_boolean_infix(self, operator: TokenType, left: bool, right: bool) -> Value:
        if operator == TokenType.EQ:
            return bool_val(left == right)
        elif operator == TokenType.NE:
            return bool_val(left != right)
        raise error_type_mismatch(f"boolean {symbol_for(operator)} boolean")

    def _eval_if(self, if_expr: IfExpression) -> Optional[Value]:
        """Evaluate a conditional; the condition must be a boolean."""
        condition = self._evaluate(if_expr.condition)
        if condition is None or condition.type != ValueType.BOOLEAN:
            found = "no value" if condition is None else condition.type.value
            raise error_type_mismatch(f"if condition must be boolean, found {found}")

        if condition.data:
            return self._eval_statements(if_expr.consequence.statements)
        if if_expr.alternative is not None:
            return self._eval_statements(if_expr.alternative.statements)
        return None

    def _eval_call(self, call: CallExpression) -> Value:
        # Only integers and booleans exist at runtime, so any callee that
        # evaluates successfully is not a function.
        callee = self._evaluate(call.callee)
        type_name = "no value" if callee is None else callee.type.value
        raise error_uncallable(type_name)

    @staticmethod
    def _checked(result: int, operator: TokenType) -> Value:
        if not in_int64_range(result):
            raise error_integer_overflow(symbol_for(operator))
        return int_val(result)


def _kind(node: AstNode) -> str:
    return {
        LetStatement: "let statement",
        ReturnStatement: "return statement",
        FunctionLiteral: "function literal",
    }.get(type(node), type(node).__name__)


def _describe_infix(operator: TokenType, left: Value, right: Value) -> str:
    return f"{left.type.value} {symbol_for(operator)} {right.type.value}"


def evaluate(program: Program) -> Optional[Value]:
    """
    Evaluate a program.

    This is a convenience wrapper around Interpreter.evaluate().
    """
    return Interpreter().evaluate(program)


def compile_and_run(source: str) -> ExecutionResult:
    """
    High-level API to lex, parse and evaluate source text in one call.

        from monkey import compile_and_run

        result = compile_and_run("if (1 < 2) { 10 } else { 20 }")
        if result.success:
            print(result.output)
        else:
            print(result.error_message)

    Args:
        source: Program source text

    Returns:
        ExecutionResult with the value, or the first error raised
    """
    from ..parser import parse_program

    try:
        program = parse_program(source)
        value = Interpreter().evaluate(program)
    except MonkeyError as e:
        logger.debug("compile_and_run failed: %s", e.code)
        return ExecutionResult(success=False, error=e)
    return ExecutionResult(success=True, value=value)
