"""
Pratt parser for the monkey language.

Statements are parsed by recursive descent; expressions by precedence
climbing over per-token prefix and infix rules. Tokens are pulled on demand
from a TokenStream, so the parser never looks further than one token ahead.
"""

import logging
from enum import IntEnum
from typing import Callable, Dict, Iterable, List, Optional, Union

from .tokens import Token, TokenType, describe
from .lexer import Lexer, TokenStream
from .ast import (
    # Expressions
    Expression, Identifier, IntegerLiteral, BooleanLiteral,
    PrefixExpression, InfixExpression, IfExpression,
    FunctionLiteral, CallExpression,
    # Statements
    Statement, LetStatement, ReturnStatement, ExpressionStatement,
    BlockStatement, Program,
)
from .errors import (
    error_unexpected_token,
    error_unexpected_eof,
    error_no_prefix_handler,
    error_missing_operand,
    error_nesting_too_deep_in_parse,
)

logger = logging.getLogger("monkey.parser")


class Precedence(IntEnum):
    """Binding power of a token in infix position (higher = tighter)."""
    LOWEST = 1
    EQUALS = 2          # == !=
    LESSGREATER = 3     # < >
    SUM = 4             # + -
    PRODUCT = 5         # * /
    PREFIX = 6          # -x !x
    CALL = 7            # f(x)


PRECEDENCE: Dict[TokenType, Precedence] = {
    TokenType.EQ: Precedence.EQUALS,
    TokenType.NE: Precedence.EQUALS,
    TokenType.LT: Precedence.LESSGREATER,
    TokenType.GT: Precedence.LESSGREATER,
    TokenType.PLUS: Precedence.SUM,
    TokenType.MINUS: Precedence.SUM,
    TokenType.STAR: Precedence.PRODUCT,
    TokenType.SLASH: Precedence.PRODUCT,
    TokenType.LPAREN: Precedence.CALL,
}

# Tokens after which a return statement carries no value
_RETURN_TERMINATORS = (TokenType.SEMICOLON, TokenType.RBRACE, TokenType.EOF)


class Parser:
    """
    Pratt parser for the monkey language.

    Usage:
        parser = Parser(tokenize(source))
        program = parser.parse_program()

    Precedence, lowest to highest:
        == !=
        < >
        + -
        * /
        unary - !
        call ( )

    All binary operators are left-associative: the right operand is parsed
    at the operator's own precedence, so an operator of equal precedence to
    its right is left for the enclosing loop.
    """

    def __init__(self, tokens: Union[TokenStream, Iterable[Token]]):
        if not isinstance(tokens, TokenStream):
            tokens = TokenStream(tokens)
        self.tokens = tokens

        self._prefix_rules: Dict[TokenType, Callable[[], Expression]] = {
            TokenType.IDENTIFIER: self._parse_identifier,
            TokenType.INT_LITERAL: self._parse_integer_literal,
            TokenType.TRUE: self._parse_boolean_literal,
            TokenType.FALSE: self._parse_boolean_literal,
            TokenType.MINUS: self._parse_prefix_expression,
            TokenType.BANG: self._parse_prefix_expression,
            TokenType.LPAREN: self._parse_grouped_expression,
            TokenType.IF: self._parse_if_expression,
            TokenType.FN: self._parse_function_literal,
        }
        self._infix_rules: Dict[TokenType, Callable[[Expression], Expression]] = {
            token_type: self._parse_infix_expression
            for token_type in PRECEDENCE
            if token_type != TokenType.LPAREN
        }
        self._infix_rules[TokenType.LPAREN] = self._parse_call_expression

    # =========================================================================
    # Token Navigation
    # =========================================================================

    def _current(self) -> Token:
        """Get current (not yet consumed) token."""
        return self.tokens.peek()

    def _is_at_end(self) -> bool:
        return self._current().type == TokenType.EOF

    def _check(self, token_type: TokenType) -> bool:
        """Check if current token is of given type."""
        return self._current().type == token_type

    def _advance(self) -> Token:
        """Consume and return current token."""
        return self.tokens.advance()

    def _consume(self, token_type: TokenType) -> Token:
        """Consume token of expected type, or raise error."""
        if self._check(token_type):
            return self._advance()
        self._error(describe(token_type))

    def _match(self, token_type: TokenType) -> Optional[Token]:
        """Consume token if it matches the given type."""
        if self._check(token_type):
            return self._advance()
        return None

    def _error(self, expected: str) -> None:
        """Raise an unexpected-token error at the current token."""
        token = self._current()
        if token.type == TokenType.EOF:
            raise error_unexpected_eof(expected)
        raise error_unexpected_token(expected, _found(token))

    def _current_precedence(self) -> Precedence:
        return PRECEDENCE.get(self._current().type, Precedence.LOWEST)

    # =========================================================================
    # Statement Parsing
    # =========================================================================

    def _parse_statement(self) -> Statement:
        """Parse a statement, dispatching on the current token only."""
        token_type = self._current().type

        if token_type == TokenType.LET:
            return self._parse_let_statement()
        if token_type == TokenType.RETURN:
            return self._parse_return_statement()
        if token_type == TokenType.LBRACE:
            block = self._parse_block_statement()
            self._match(TokenType.SEMICOLON)
            return block
        return self._parse_expression_statement()

    def _parse_let_statement(self) -> LetStatement:
        """Parse `let IDENT = EXPR [;]`."""
        self._advance()  # consume 'let'
        name = self._parse_binding_name()
        self._consume(TokenType.ASSIGN)
        value = self._parse_expression(Precedence.LOWEST)
        self._match(TokenType.SEMICOLON)
        return LetStatement(name=name, value=value)

    def _parse_return_statement(self) -> ReturnStatement:
        """Parse `return [EXPR] [;]`."""
        self._advance()  # consume 'return'

        value = None
        if self._current().type not in _RETURN_TERMINATORS:
            value = self._parse_expression(Precedence.LOWEST)

        self._match(TokenType.SEMICOLON)
        return ReturnStatement(value=value)

    def _parse_expression_statement(self) -> ExpressionStatement:
        expression = self._parse_expression(Precedence.LOWEST)
        self._match(TokenType.SEMICOLON)
        return ExpressionStatement(expression=expression)

    def _parse_block_statement(self) -> BlockStatement:
        """Parse `{ STATEMENT* }`."""
        self._consume(TokenType.LBRACE)
        statements: List[Statement] = []

        while not self._check(TokenType.RBRACE) and not self._is_at_end():
            statements.append(self._parse_statement())

        self._consume(TokenType.RBRACE)
        return BlockStatement(statements=statements)

    def _parse_binding_name(self) -> Identifier:
        token = self._consume(TokenType.IDENTIFIER)
        return Identifier(name=token.value)

    # =========================================================================
    # Expression Parsing (Pratt)
    # =========================================================================

    def _parse_expression(self, min_precedence: Precedence) -> Expression:
        """Parse an expression whose operators bind tighter than min_precedence."""
        prefix_rule = self._prefix_rules.get(self._current().type)
        if prefix_rule is None:
            raise error_no_prefix_handler(_found(self._current()))
        left = prefix_rule()

        while (not self._check(TokenType.SEMICOLON)
               and self._current_precedence() > min_precedence):
            infix_rule = self._infix_rules[self._current().type]
            left = infix_rule(left)

        return left

    def _parse_operand(self, operator: Token, precedence: Precedence) -> Expression:
        """Parse the operand following a prefix or infix operator."""
        if self._current().type not in self._prefix_rules:
            raise error_missing_operand(describe(operator.type), _found(self._current()))
        return self._parse_expression(precedence)

    def _parse_identifier(self) -> Identifier:
        token = self._advance()
        return Identifier(name=token.value)

    def _parse_integer_literal(self) -> IntegerLiteral:
        token = self._advance()
        return IntegerLiteral(value=token.value)

    def _parse_boolean_literal(self) -> BooleanLiteral:
        token = self._advance()
        return BooleanLiteral(value=token.type == TokenType.TRUE)

    def _parse_prefix_expression(self) -> PrefixExpression:
        """Parse unary `-x` or `!x`."""
        op = self._advance()
        operand = self._parse_operand(op, Precedence.PREFIX)
        return PrefixExpression(operator=op.type, operand=operand)

    def _parse_infix_expression(self, left: Expression) -> InfixExpression:
        """Parse a binary operator and its right operand."""
        op = self._advance()
        right = self._parse_operand(op, PRECEDENCE[op.type])
        return InfixExpression(operator=op.type, left=left, right=right)

    def _parse_grouped_expression(self) -> Expression:
        """Parse `( EXPR )`; grouping has no node of its own."""
        self._advance()  # consume '('
        expression = self._parse_expression(Precedence.LOWEST)
        self._consume(TokenType.RPAREN)
        return expression

    def _parse_if_expression(self) -> IfExpression:
        """Parse `if ( COND ) { ... } [else { ... }]`."""
        self._advance()  # consume 'if'
        self._consume(TokenType.LPAREN)
        condition = self._parse_expression(Precedence.LOWEST)
        self._consume(TokenType.RPAREN)
        consequence = self._parse_block_statement()

        alternative = None
        if self._match(TokenType.ELSE):
            alternative = self._parse_block_statement()

        return IfExpression(
            condition=condition,
            consequence=consequence,
            alternative=alternative
        )

    def _parse_function_literal(self) -> FunctionLiteral:
        """Parse `fn ( PARAM, ... ) { BODY }`."""
        self._advance()  # consume 'fn'
        self._consume(TokenType.LPAREN)

        parameters: List[Identifier] = []
        if not self._check(TokenType.RPAREN):
            parameters.append(self._parse_binding_name())
            while self._match(TokenType.COMMA):
                parameters.append(self._parse_binding_name())
        self._consume(TokenType.RPAREN)

        body = self._parse_block_statement()
        return FunctionLiteral(parameters=parameters, body=body)

    def _parse_call_expression(self, callee: Expression) -> CallExpression:
        """Parse the argument list applied to callee."""
        self._advance()  # consume '('

        arguments: List[Expression] = []
        if not self._check(TokenType.RPAREN):
            arguments.append(self._parse_expression(Precedence.LOWEST))
            while self._match(TokenType.COMMA):
                arguments.append(self._parse_expression(Precedence.LOWEST))
        self._consume(TokenType.RPAREN)

        return CallExpression(callee=callee, arguments=arguments)

    # =========================================================================
    # Program
    # =========================================================================

    def parse_program(self) -> Program:
        """Parse statements until EOF.

        Raises:
            ParserError: on the first syntax error; there is no recovery.
            LexerError: if the token source fails while being read.
        """
        statements: List[Statement] = []
        try:
            while not self._is_at_end():
                statements.append(self._parse_statement())
        except RecursionError:
            raise error_nesting_too_deep_in_parse() from None

        logger.debug("parsed program with %d statement(s)", len(statements))
        return Program(statements=statements)


def _found(token: Token) -> str:
    if token.type in (TokenType.IDENTIFIER, TokenType.INT_LITERAL):
        return f"{describe(token.type)} '{token.value}'"
    return describe(token.type)


def parse_program(tokens: Union[str, TokenStream, Iterable[Token]]) -> Program:
    """
    Convenience function to parse a program.

    Args:
        tokens: A TokenStream, any iterable of tokens ending in EOF, or
            source text (which is lexed lazily)

    Returns:
        Parsed Program AST

    Raises:
        ParserError: If parsing fails
        LexerError: If source text contains an invalid token
    """
    if isinstance(tokens, str):
        tokens = Lexer(tokens)
    return Parser(tokens).parse_program()
