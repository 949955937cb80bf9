"""
monkey: parser and evaluator for a small C-family expression language.

This package provides:
- Lexer: Tokenizes source code into a lazy token stream
- Parser: Builds an AST by Pratt (precedence climbing) parsing
- Interpreter: Evaluates integer/boolean expressions, blocks and conditionals

Usage:
    from monkey import tokenize, parse_program, evaluate

    program = parse_program(tokenize("if (3 == 3) { 1 } else { -1 }"))
    value = evaluate(program)
    print(value.inspect())   # 1

    # Or in one call, capturing errors
    result = compile_and_run("1 + 2 * 3")
    if result.success:
        print(result.output)
"""

from .tokens import (
    Token,
    TokenType,
    KEYWORDS,
)

from .lexer import (
    Lexer,
    TokenStream,
    tokenize,
)

from .parser import (
    Parser,
    Precedence,
    parse_program,
)

from .ast import (
    # Base
    AstNode,
    AstVisitor,
    Expression,
    Statement,
    # Expressions
    Identifier,
    IntegerLiteral,
    BooleanLiteral,
    PrefixExpression,
    InfixExpression,
    IfExpression,
    FunctionLiteral,
    CallExpression,
    # Statements
    LetStatement,
    ReturnStatement,
    ExpressionStatement,
    BlockStatement,
    Program,
    # Helpers
    print_ast,
)

from .errors import (
    MonkeyError,
    Diagnostic,
    LexerError,
    ParserError,
    UnexpectedTokenError,
    MissingPrefixHandlerError,
    MissingOperandError,
    EvaluationError,
    TypeMismatchError,
    UnboundIdentifierError,
    UncallableError,
    DivisionByZeroError,
    IntegerOverflowError,
    UnsupportedNodeError,
)

from .runtime import (
    Value,
    ValueType,
    Interpreter,
    ExecutionResult,
    evaluate,
    compile_and_run,
)

__all__ = [
    # Tokens
    "Token",
    "TokenType",
    "KEYWORDS",
    # Lexer
    "Lexer",
    "TokenStream",
    "tokenize",
    # Parser
    "Parser",
    "Precedence",
    "parse_program",
    # AST
    "AstNode",
    "AstVisitor",
    "Expression",
    "Statement",
    "Identifier",
    "IntegerLiteral",
    "BooleanLiteral",
    "PrefixExpression",
    "InfixExpression",
    "IfExpression",
    "FunctionLiteral",
    "CallExpression",
    "LetStatement",
    "ReturnStatement",
    "ExpressionStatement",
    "BlockStatement",
    "Program",
    "print_ast",
    # Errors
    "MonkeyError",
    "Diagnostic",
    "LexerError",
    "ParserError",
    "UnexpectedTokenError",
    "MissingPrefixHandlerError",
    "MissingOperandError",
    "EvaluationError",
    "TypeMismatchError",
    "UnboundIdentifierError",
    "UncallableError",
    "DivisionByZeroError",
    "IntegerOverflowError",
    "UnsupportedNodeError",
    # Runtime
    "Value",
    "ValueType",
    "Interpreter",
    "ExecutionResult",
    "evaluate",
    "compile_and_run",
]

__version__ = "0.1.0"
