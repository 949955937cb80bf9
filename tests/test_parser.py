"""
Unit tests for the monkey parser.
"""

import pytest
from monkey import (
    tokenize, parse_program, Parser, Token, TokenType,
    Program, ExpressionStatement, LetStatement, ReturnStatement, BlockStatement,
    Identifier, IntegerLiteral, BooleanLiteral,
    PrefixExpression, InfixExpression, IfExpression,
    FunctionLiteral, CallExpression,
    ParserError, UnexpectedTokenError, MissingPrefixHandlerError,
    MissingOperandError, LexerError,
)


def parse_source(source: str) -> Program:
    """Helper to parse source code."""
    return parse_program(tokenize(source))


def parse_expr(source: str):
    """Helper to parse a single expression statement."""
    program = parse_source(source)
    assert len(program.statements) == 1
    stmt = program.statements[0]
    assert isinstance(stmt, ExpressionStatement)
    return stmt.expression


class TestLiterals:
    """Test literal parsing."""

    def test_integer(self):
        expr = parse_expr("5;")
        assert expr == IntegerLiteral(5)

    def test_booleans(self):
        program = parse_source("true; false;")
        exprs = [s.expression for s in program.statements]
        assert exprs == [BooleanLiteral(True), BooleanLiteral(False)]

    def test_identifier(self):
        expr = parse_expr("foobar;")
        assert expr == Identifier("foobar")

    def test_semicolon_optional(self):
        """A trailing semicolon is optional."""
        assert parse_source("5") == parse_source("5;")


class TestOperators:
    """Test prefix and infix expressions."""

    def test_prefix_minus(self):
        expr = parse_expr("-5")
        assert expr == PrefixExpression(TokenType.MINUS, IntegerLiteral(5))

    def test_prefix_bang(self):
        expr = parse_expr("!true")
        assert expr == PrefixExpression(TokenType.BANG, BooleanLiteral(True))

    @pytest.mark.parametrize("source,token_type", [
        ("5 + 5", TokenType.PLUS),
        ("5 - 5", TokenType.MINUS),
        ("5 * 5", TokenType.STAR),
        ("5 / 5", TokenType.SLASH),
        ("5 < 5", TokenType.LT),
        ("5 > 5", TokenType.GT),
        ("5 == 5", TokenType.EQ),
        ("5 != 5", TokenType.NE),
    ])
    def test_infix(self, source, token_type):
        """Each binary operator builds an InfixExpression."""
        expr = parse_expr(source)
        assert expr == InfixExpression(token_type, IntegerLiteral(5), IntegerLiteral(5))

    @pytest.mark.parametrize("source,expected", [
        ("1 + 2 * 3", "(1 + (2 * 3))"),
        ("1 * 2 + 3", "((1 * 2) + 3)"),
        ("1 - 2 - 3", "((1 - 2) - 3)"),
        ("8 / 4 / 2", "((8 / 4) / 2)"),
        ("-a * b", "((-a) * b)"),
        ("!-a", "(!(-a))"),
        ("a + b * c + d / e - f", "(((a + (b * c)) + (d / e)) - f)"),
        ("5 > 4 == 3 < 4", "((5 > 4) == (3 < 4))"),
        ("3 + 4 * 5 == 3 * 1 + 4 * 5", "((3 + (4 * 5)) == ((3 * 1) + (4 * 5)))"),
        ("true == !false", "(true == (!false))"),
        ("(1 + 2) * 3", "((1 + 2) * 3)"),
        ("-(5 + 5)", "(-(5 + 5))"),
        ("a + add(b * c) + d", "((a + add((b * c))) + d)"),
    ])
    def test_precedence(self, source, expected):
        """Precedence and left-associativity show in the rendering."""
        assert str(parse_expr(source)) == expected

    def test_minus_is_left_associative(self):
        """1 - 2 - 3 groups as (1 - 2) - 3."""
        expr = parse_expr("1 - 2 - 3")
        assert isinstance(expr.left, InfixExpression)
        assert expr.right == IntegerLiteral(3)

    def test_grouping_has_no_node(self):
        """Parentheses only affect grouping."""
        assert parse_expr("(5)") == IntegerLiteral(5)


class TestStatements:
    """Test statement parsing."""

    def test_let(self):
        program = parse_source("let x = 5;")
        assert program.statements == [
            LetStatement(name=Identifier("x"), value=IntegerLiteral(5))
        ]

    def test_let_with_expression(self):
        stmt = parse_source("let y = 1 + 2;").statements[0]
        assert str(stmt) == "let y = (1 + 2);"

    def test_return(self):
        stmt = parse_source("return 10;").statements[0]
        assert stmt == ReturnStatement(IntegerLiteral(10))

    def test_bare_return(self):
        """A return with no value stores None."""
        program = parse_source("return;")
        assert program.statements == [ReturnStatement(None)]

    def test_bare_return_at_end_of_block(self):
        stmt = parse_source("{ return }").statements[0]
        assert stmt == BlockStatement([ReturnStatement(None)])

    def test_block(self):
        stmt = parse_source("{ 1; 2 }").statements[0]
        assert isinstance(stmt, BlockStatement)
        assert len(stmt.statements) == 2

    def test_empty_program(self):
        assert parse_source("").statements == []

    def test_statement_order(self):
        program = parse_source("1; 2; 3")
        values = [s.expression.value for s in program.statements]
        assert values == [1, 2, 3]


class TestIfExpression:
    """Test conditional parsing."""

    def test_if_without_else(self):
        """A missing else is None, not an empty block."""
        expr = parse_expr("if (x < y) { x }")
        assert isinstance(expr, IfExpression)
        assert str(expr.condition) == "(x < y)"
        assert expr.consequence == BlockStatement([ExpressionStatement(Identifier("x"))])
        assert expr.alternative is None

    def test_if_with_else(self):
        expr = parse_expr("if (x < y) { x } else { y }")
        assert expr.alternative == BlockStatement([ExpressionStatement(Identifier("y"))])

    def test_empty_else(self):
        """An empty else block is kept as an empty block."""
        expr = parse_expr("if (true) { 1 } else { }")
        assert expr.alternative == BlockStatement([])


class TestFunctions:
    """Test function literals and calls."""

    def test_function_literal(self):
        expr = parse_expr("fn(bar, baz) { return bar; }")
        assert isinstance(expr, FunctionLiteral)
        assert expr.parameters == [Identifier("bar"), Identifier("baz")]
        assert expr.body == BlockStatement([ReturnStatement(Identifier("bar"))])

    @pytest.mark.parametrize("source,names", [
        ("fn() {}", []),
        ("fn(x) {}", ["x"]),
        ("fn(x, y, z) {}", ["x", "y", "z"]),
    ])
    def test_parameters(self, source, names):
        expr = parse_expr(source)
        assert [p.name for p in expr.parameters] == names

    def test_call(self):
        expr = parse_expr("foo(bar, baz)")
        assert expr == CallExpression(
            callee=Identifier("foo"),
            arguments=[Identifier("bar"), Identifier("baz")],
        )

    def test_call_with_expressions(self):
        expr = parse_expr("add(1, 2 * 3, 4 + 5)")
        assert str(expr) == "add(1, (2 * 3), (4 + 5))"

    def test_call_without_arguments(self):
        assert parse_expr("f()") == CallExpression(Identifier("f"), [])

    def test_call_binds_tightest(self):
        """Calls bind tighter than prefix operators."""
        assert str(parse_expr("-f(1)")) == "(-f(1))"

    def test_call_of_function_literal(self):
        expr = parse_expr("fn(x) { x }(5)")
        assert isinstance(expr, CallExpression)
        assert isinstance(expr.callee, FunctionLiteral)


class TestTokenSources:
    """Test the kinds of input parse_program accepts."""

    def test_source_text(self):
        assert str(parse_program("1 + 2")) == "(1 + 2);"

    def test_token_list(self):
        tokens = [
            Token(TokenType.INT_LITERAL, 7),
            Token(TokenType.STAR),
            Token(TokenType.INT_LITERAL, 6),
            Token(TokenType.EOF),
        ]
        assert str(Parser(tokens).parse_program()) == "(7 * 6);"

    def test_lexer_error_propagates(self):
        with pytest.raises(LexerError):
            parse_program("1 + $")


class TestParserErrors:
    """Test parser error reporting."""

    def test_missing_assign(self):
        """let without '=' is an unexpected token."""
        with pytest.raises(UnexpectedTokenError) as exc_info:
            parse_source("let x 5;")
        assert exc_info.value.code == "E101"
        assert "expected '='" in str(exc_info.value)

    def test_let_without_name(self):
        with pytest.raises(UnexpectedTokenError) as exc_info:
            parse_source("let = 5;")
        assert exc_info.value.code == "E101"
        assert "identifier" in str(exc_info.value)

    def test_non_identifier_parameter(self):
        """Function parameters must be identifiers."""
        with pytest.raises(UnexpectedTokenError) as exc_info:
            parse_source("fn(1) { }")
        assert "expected identifier, found int literal '1'" in str(exc_info.value)

    def test_unclosed_block(self):
        """Running out of tokens inside a block reports end of input."""
        with pytest.raises(UnexpectedTokenError) as exc_info:
            parse_source("if (true) { 1")
        assert exc_info.value.code == "E102"

    def test_unclosed_group(self):
        with pytest.raises(UnexpectedTokenError) as exc_info:
            parse_source("(1 + 2")
        assert exc_info.value.code == "E102"

    def test_no_prefix_handler(self):
        """A token that cannot start an expression raises E103."""
        with pytest.raises(MissingPrefixHandlerError) as exc_info:
            parse_source("* 5")
        assert exc_info.value.code == "E103"
        assert "'*'" in str(exc_info.value)

    def test_reserved_loop_keyword(self):
        """Loop keywords have no grammar."""
        with pytest.raises(MissingPrefixHandlerError):
            parse_source("while (true) { 1 }")

    def test_missing_right_operand(self):
        """An infix operator with nothing after it raises E104."""
        with pytest.raises(MissingOperandError) as exc_info:
            parse_source("1 +")
        assert exc_info.value.code == "E104"

    def test_missing_prefix_operand(self):
        with pytest.raises(MissingOperandError) as exc_info:
            parse_source("-;")
        assert exc_info.value.code == "E104"

    @pytest.mark.parametrize("source", [
        "-" * 1000 + "1",
        "(" * 1000 + "1" + ")" * 1000,
    ])
    def test_nesting_too_deep(self, source):
        """Input deeper than the recursion limit is a coded parse error."""
        with pytest.raises(ParserError) as exc_info:
            parse_source(source)
        assert exc_info.value.code == "E105"

    def test_all_errors_are_parser_errors(self):
        for source in ["let x 5", "* 5", "1 +", "(1"]:
            with pytest.raises(ParserError):
                parse_source(source)
