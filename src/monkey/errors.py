"""
Interpreter exceptions and error handling.

Error code ranges:
- E0xx: Lexer errors
- E1xx: Parser errors
- E2xx: Type and name errors during evaluation
- E3xx: Arithmetic and unsupported-construct errors during evaluation

Every error aborts the pass that raised it; nothing is recovered locally.
"""

from dataclasses import dataclass, field
from typing import List


@dataclass
class Diagnostic:
    """A single coded diagnostic message."""
    code: str                       # E001, E101, etc.
    message: str
    hints: List[str] = field(default_factory=list)

    def format(self) -> str:
        """Format the diagnostic as a one-line header plus hints."""
        parts = [f"error[{self.code}]: {self.message}"]
        for hint in self.hints:
            parts.append(f"    = hint: {hint}")
        return "\n".join(parts)


class MonkeyError(Exception):
    """Base exception for interpreter errors."""

    def __init__(self, diagnostic: Diagnostic):
        self.diagnostic = diagnostic
        super().__init__(diagnostic.message)

    @property
    def code(self) -> str:
        return self.diagnostic.code

    def __str__(self) -> str:
        return self.diagnostic.format()


class LexerError(MonkeyError):
    """Error during lexical analysis (E0xx)."""
    pass


class ParserError(MonkeyError):
    """Error during parsing (E1xx)."""
    pass


class UnexpectedTokenError(ParserError):
    """A required token is absent."""
    pass


class MissingPrefixHandlerError(ParserError):
    """The current token cannot begin an expression."""
    pass


class MissingOperandError(ParserError):
    """An operator's operand could not be parsed."""
    pass


class EvaluationError(MonkeyError):
    """Error during evaluation (E2xx, E3xx)."""
    pass


class TypeMismatchError(EvaluationError):
    """An operator or condition got operands of the wrong type."""
    pass


class UnboundIdentifierError(EvaluationError):
    """A name was evaluated with no binding in scope."""
    pass


class UncallableError(EvaluationError):
    """A call was applied to a value that is not a function."""
    pass


class DivisionByZeroError(EvaluationError):
    """Integer division with a zero divisor."""
    pass


class IntegerOverflowError(EvaluationError):
    """An integer result fell outside the signed 64-bit range."""
    pass


class UnsupportedNodeError(EvaluationError):
    """A node kind that has no evaluation rule."""
    pass


# --- Lexer error codes ---

def error_unexpected_character(char: str) -> LexerError:
    """E001: Unexpected character."""
    diag = Diagnostic(
        code="E001",
        message=f"unexpected character {char!r}",
    )
    return LexerError(diag)


def error_integer_out_of_range(text: str) -> LexerError:
    """E002: Integer literal does not fit in 64 bits."""
    diag = Diagnostic(
        code="E002",
        message=f"integer literal '{text}' is out of range",
        hints=["integer literals must fit in a signed 64-bit integer"],
    )
    return LexerError(diag)


# --- Parser error codes ---

def error_unexpected_token(expected: str, found: str) -> UnexpectedTokenError:
    """E101: Unexpected token."""
    diag = Diagnostic(
        code="E101",
        message=f"expected {expected}, found {found}",
    )
    return UnexpectedTokenError(diag)


def error_unexpected_eof(expected: str) -> UnexpectedTokenError:
    """E102: Unexpected end of input."""
    diag = Diagnostic(
        code="E102",
        message=f"unexpected end of input, expected {expected}",
    )
    return UnexpectedTokenError(diag)


def error_no_prefix_handler(found: str) -> MissingPrefixHandlerError:
    """E103: No prefix handler for token."""
    diag = Diagnostic(
        code="E103",
        message=f"no prefix handler for token {found}",
    )
    return MissingPrefixHandlerError(diag)


def error_missing_operand(operator: str, found: str) -> MissingOperandError:
    """E104: Operator is missing its operand."""
    diag = Diagnostic(
        code="E104",
        message=f"missing operand for {operator}, found {found}",
    )
    return MissingOperandError(diag)


def error_nesting_too_deep_in_parse() -> ParserError:
    """E105: Input nests deeper than the parser can follow."""
    diag = Diagnostic(
        code="E105",
        message="expression nested too deeply to parse",
    )
    return ParserError(diag)


# --- Evaluation error codes ---

def error_type_mismatch(detail: str) -> TypeMismatchError:
    """E201: Operator applied to unsupported operand types."""
    diag = Diagnostic(
        code="E201",
        message=f"type mismatch: {detail}",
    )
    return TypeMismatchError(diag)


def error_unbound_identifier(name: str) -> UnboundIdentifierError:
    """E202: Identifier has no binding."""
    diag = Diagnostic(
        code="E202",
        message=f"unbound identifier '{name}'",
        hints=["variable bindings are not supported by this evaluator"],
    )
    return UnboundIdentifierError(diag)


def error_uncallable(type_name: str) -> UncallableError:
    """E203: Call applied to a non-function value."""
    diag = Diagnostic(
        code="E203",
        message=f"value of type {type_name} is not callable",
    )
    return UncallableError(diag)


def error_division_by_zero() -> DivisionByZeroError:
    """E301: Integer division by zero."""
    return DivisionByZeroError(Diagnostic(code="E301", message="division by zero"))


def error_integer_overflow(operator: str) -> IntegerOverflowError:
    """E302: Integer result outside the 64-bit range."""
    diag = Diagnostic(
        code="E302",
        message=f"integer overflow in '{operator}'",
    )
    return IntegerOverflowError(diag)


def error_unsupported_node(kind: str) -> UnsupportedNodeError:
    """E303: Node kind has no evaluation rule."""
    diag = Diagnostic(
        code="E303",
        message=f"cannot evaluate {kind}",
        hints=["let, return and function literals need an environment, which is not supported"],
    )
    return UnsupportedNodeError(diag)


def error_nesting_too_deep_in_evaluation() -> EvaluationError:
    """E304: Tree nests deeper than the evaluator can follow."""
    diag = Diagnostic(
        code="E304",
        message="expression nested too deeply to evaluate",
    )
    return EvaluationError(diag)
