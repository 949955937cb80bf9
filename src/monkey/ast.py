"""
Abstract Syntax Tree (AST) node definitions for the monkey language.

The parser builds the tree in a single pass; the evaluator only reads it.
Each node owns its children exclusively, so the tree never shares subtrees
and has no cycles.

Every node renders back to source text with str(). Prefix and infix
expressions are fully parenthesised, so re-parsing the rendering yields an
equivalent tree regardless of operator precedence.
"""

from dataclasses import dataclass, field
from typing import Optional, List, Any
from abc import ABC
from .tokens import TokenType, symbol_for
from .lexer import INT64_MAX


# =============================================================================
# Base Classes
# =============================================================================

@dataclass
class AstNode(ABC):
    """Base class for all AST nodes."""

    def accept(self, visitor: "AstVisitor") -> Any:
        """Accept a visitor for traversal."""
        method_name = f"visit_{self.__class__.__name__}"
        method = getattr(visitor, method_name, visitor.generic_visit)
        return method(self)


class AstVisitor(ABC):
    """Base class for AST visitors."""

    def generic_visit(self, node: AstNode) -> Any:
        """Default visit method."""
        raise NotImplementedError(f"No visitor for {node.__class__.__name__}")


@dataclass
class Expression(AstNode):
    """Base class for all expressions."""
    pass


@dataclass
class Statement(AstNode):
    """Base class for all statements."""
    pass


# =============================================================================
# Expression Nodes
# =============================================================================

@dataclass
class Identifier(Expression):
    """A variable or function name reference."""
    name: str

    def __str__(self) -> str:
        return self.name


@dataclass
class IntegerLiteral(Expression):
    """A 64-bit signed integer literal.

    The parser only builds non-negative literals. A negative value renders as
    a negation so that the text lexes again.
    """
    value: int

    def __str__(self) -> str:
        if self.value >= 0:
            return str(self.value)
        if -self.value > INT64_MAX:
            return f"((-{INT64_MAX}) - 1)"
        return f"(-{-self.value})"


@dataclass
class BooleanLiteral(Expression):
    """A `true` or `false` literal."""
    value: bool

    def __str__(self) -> str:
        return "true" if self.value else "false"


@dataclass
class PrefixExpression(Expression):
    """A unary operation (e.g., -x, !flag).

    The parser always supplies the operand; an absent operand is rejected
    at evaluation time.
    """
    operator: TokenType     # MINUS or BANG
    operand: Optional[Expression] = None

    def __str__(self) -> str:
        return f"({symbol_for(self.operator)}{_render(self.operand)})"


@dataclass
class InfixExpression(Expression):
    """A binary operation (e.g., a + b, x == y)."""
    operator: TokenType
    left: Expression
    right: Optional[Expression] = None

    def __str__(self) -> str:
        return f"({self.left} {symbol_for(self.operator)} {_render(self.right)})"


@dataclass
class IfExpression(Expression):
    """A conditional expression: if (cond) { ... } else { ... }.

    A missing else branch is None, which is distinct from an empty block.
    """
    condition: Expression
    consequence: "BlockStatement"
    alternative: Optional["BlockStatement"] = None

    def __str__(self) -> str:
        text = f"if ({self.condition}) {self.consequence}"
        if self.alternative is not None:
            text += f" else {self.alternative}"
        return text


@dataclass
class FunctionLiteral(Expression):
    """A function literal (e.g., fn(x, y) { x + y; })."""
    parameters: List[Identifier]
    body: "BlockStatement"

    def __str__(self) -> str:
        params = ", ".join(str(p) for p in self.parameters)
        return f"fn({params}) {self.body}"


@dataclass
class CallExpression(Expression):
    """A call (e.g., add(1, 2))."""
    callee: Expression      # Identifier, FunctionLiteral or another call
    arguments: List[Expression] = field(default_factory=list)

    def __str__(self) -> str:
        args = ", ".join(str(a) for a in self.arguments)
        return f"{self.callee}({args})"


# =============================================================================
# Statement Nodes
# =============================================================================

@dataclass
class LetStatement(Statement):
    """A binding statement (e.g., let x = 5;)."""
    name: Identifier
    value: Expression

    def __str__(self) -> str:
        return f"let {self.name} = {self.value};"


@dataclass
class ReturnStatement(Statement):
    """A return statement; the value is None for a bare `return;`."""
    value: Optional[Expression] = None

    def __str__(self) -> str:
        if self.value is None:
            return "return;"
        return f"return {self.value};"


@dataclass
class ExpressionStatement(Statement):
    """An expression used as a statement."""
    expression: Expression

    def __str__(self) -> str:
        return f"{self.expression};"


@dataclass
class BlockStatement(Statement):
    """A brace-delimited sequence of statements.

    The block's value is the value of its last statement.
    """
    statements: List[Statement] = field(default_factory=list)

    def __str__(self) -> str:
        if not self.statements:
            return "{ }"
        body = " ".join(str(s) for s in self.statements)
        return f"{{ {body} }}"


@dataclass
class Program(AstNode):
    """A complete program: top-level statements in evaluation order."""
    statements: List[Statement] = field(default_factory=list)

    def __str__(self) -> str:
        return " ".join(str(s) for s in self.statements)


def _render(node: Optional[AstNode]) -> str:
    return "<missing>" if node is None else str(node)


# =============================================================================
# Visitor Helpers
# =============================================================================

class PrintVisitor(AstVisitor):
    """Debug visitor that prints the AST structure."""

    def __init__(self, indent: int = 0, write=print):
        self.indent = indent
        self.write = write

    def _print(self, text: str) -> None:
        self.write("  " * self.indent + text)

    def _child(self) -> "PrintVisitor":
        return PrintVisitor(self.indent + 2, self.write)

    def generic_visit(self, node: AstNode) -> None:
        self._print(f"{node.__class__.__name__}")
        for name, value in node.__dict__.items():
            if isinstance(value, AstNode):
                self._print(f"  {name}:")
                value.accept(self._child())
            elif isinstance(value, list):
                self._print(f"  {name}: [")
                for item in value:
                    if isinstance(item, AstNode):
                        item.accept(self._child())
                    else:
                        self._print(f"    {item!r}")
                self._print("  ]")
            elif isinstance(value, TokenType):
                self._print(f"  {name}: {value.name}")
            else:
                self._print(f"  {name}: {value!r}")


def print_ast(node: AstNode, write=print) -> None:
    """Print an AST node for debugging."""
    node.accept(PrintVisitor(write=write))
