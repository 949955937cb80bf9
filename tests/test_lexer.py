"""
Unit tests for the monkey lexer and token stream.
"""

import pytest
from monkey import tokenize, Lexer, TokenStream, Token, TokenType, LexerError


class TestLexerBasics:
    """Test basic lexer functionality."""

    def test_empty_source(self):
        """Empty source produces only EOF."""
        tokens = tokenize("")
        assert len(tokens) == 1
        assert tokens[0].type == TokenType.EOF

    def test_whitespace_only(self):
        """Whitespace-only source produces only EOF."""
        tokens = tokenize("  \t\n  ")
        assert [t.type for t in tokens] == [TokenType.EOF]

    def test_let_statement(self):
        """Basic let statement tokenization."""
        tokens = tokenize("let five = 5;")
        types = [t.type for t in tokens]
        assert types == [
            TokenType.LET,
            TokenType.IDENTIFIER,
            TokenType.ASSIGN,
            TokenType.INT_LITERAL,
            TokenType.SEMICOLON,
            TokenType.EOF,
        ]

    def test_identifier_value(self):
        """Identifier token carries its name."""
        tokens = tokenize("foo_bar123")
        assert tokens[0].type == TokenType.IDENTIFIER
        assert tokens[0].value == "foo_bar123"

    def test_leading_underscore(self):
        """Identifiers may start with an underscore."""
        tokens = tokenize("_x")
        assert tokens[0] == Token(TokenType.IDENTIFIER, "_x", "_x")

    def test_integer_value(self):
        """Integer literal carries its numeric value."""
        tokens = tokenize("1234")
        assert tokens[0].type == TokenType.INT_LITERAL
        assert tokens[0].value == 1234
        assert tokens[0].lexeme == "1234"

    def test_comment_skipped(self):
        """Comments run to the end of the line."""
        tokens = tokenize("1 # ignored ! @\n2")
        assert [t.value for t in tokens[:-1]] == [1, 2]

    def test_single_eof(self):
        """Exactly one EOF ends the token list."""
        tokens = tokenize("a b c")
        assert [t.type for t in tokens].count(TokenType.EOF) == 1
        assert tokens[-1].type == TokenType.EOF


class TestLexerKeywords:
    """Test keyword recognition."""

    @pytest.mark.parametrize("word,token_type", [
        ("let", TokenType.LET),
        ("fn", TokenType.FN),
        ("return", TokenType.RETURN),
        ("if", TokenType.IF),
        ("else", TokenType.ELSE),
        ("true", TokenType.TRUE),
        ("false", TokenType.FALSE),
        ("while", TokenType.WHILE),
        ("for", TokenType.FOR),
        ("loop", TokenType.LOOP),
    ])
    def test_keyword(self, word, token_type):
        """Reserved words lex to their own token types."""
        token = tokenize(word)[0]
        assert token.type == token_type
        assert token.value is None

    def test_keyword_prefix_is_identifier(self):
        """A word that merely starts with a keyword is an identifier."""
        tokens = tokenize("lets iffy")
        assert [t.type for t in tokens[:-1]] == [TokenType.IDENTIFIER, TokenType.IDENTIFIER]


class TestLexerOperators:
    """Test operator and delimiter tokenization."""

    def test_single_char_operators(self):
        """Single-character operators and delimiters."""
        tokens = tokenize("+-*/<>!=,;(){}")
        types = [t.type for t in tokens[:-1]]
        assert types == [
            TokenType.PLUS, TokenType.MINUS, TokenType.STAR, TokenType.SLASH,
            TokenType.LT, TokenType.GT, TokenType.NE, TokenType.COMMA,
            TokenType.SEMICOLON, TokenType.LPAREN, TokenType.RPAREN,
            TokenType.LBRACE, TokenType.RBRACE,
        ]

    def test_two_char_operators(self):
        """== and != are single tokens."""
        tokens = tokenize("a == b != c")
        types = [t.type for t in tokens[:-1]]
        assert types == [
            TokenType.IDENTIFIER, TokenType.EQ, TokenType.IDENTIFIER,
            TokenType.NE, TokenType.IDENTIFIER,
        ]

    def test_bang_and_assign(self):
        """Lone ! and = are BANG and ASSIGN."""
        tokens = tokenize("! =")
        assert [t.type for t in tokens[:-1]] == [TokenType.BANG, TokenType.ASSIGN]

    def test_negative_number_is_two_tokens(self):
        """Minus is never part of an integer literal."""
        tokens = tokenize("-5")
        assert tokens[0].type == TokenType.MINUS
        assert tokens[1].value == 5


class TestLexerErrors:
    """Test lexer error handling."""

    def test_unexpected_character(self):
        """Unknown characters raise E001."""
        with pytest.raises(LexerError) as exc_info:
            tokenize("let x = @;")
        assert exc_info.value.code == "E001"
        assert "'@'" in str(exc_info.value)

    def test_integer_out_of_range(self):
        """Literals beyond the signed 64-bit range raise E002."""
        with pytest.raises(LexerError) as exc_info:
            tokenize("9223372036854775808")
        assert exc_info.value.code == "E002"

    def test_largest_integer(self):
        """The largest signed 64-bit value is accepted."""
        tokens = tokenize("9223372036854775807")
        assert tokens[0].value == 2**63 - 1

    def test_error_is_lazy(self):
        """Iteration reports a bad character only when it is reached."""
        tokens = iter(Lexer("1 + @"))
        assert next(tokens).value == 1
        assert next(tokens).type == TokenType.PLUS
        with pytest.raises(LexerError):
            next(tokens)


class TestTokenStream:
    """Test one-token lookahead over a token source."""

    def test_peek_does_not_consume(self):
        """peek() returns the same token until advance()."""
        stream = TokenStream(Lexer("a b"))
        assert stream.peek().value == "a"
        assert stream.peek().value == "a"
        assert stream.advance().value == "a"
        assert stream.peek().value == "b"

    def test_eof_is_sticky(self):
        """Once EOF is current, advance() keeps returning it."""
        stream = TokenStream(Lexer(""))
        assert stream.advance().type == TokenType.EOF
        assert stream.advance().type == TokenType.EOF
        assert stream.peek().type == TokenType.EOF

    def test_pulls_lazily(self):
        """Tokens are only requested from the source when needed."""
        pulled = []

        def source():
            for token in [Token(TokenType.INT_LITERAL, 1), Token(TokenType.EOF)]:
                pulled.append(token)
                yield token

        stream = TokenStream(source())
        assert pulled == []
        stream.peek()
        assert len(pulled) == 1

    def test_missing_eof(self):
        """A source that ends without EOF is rejected."""
        stream = TokenStream([Token(TokenType.INT_LITERAL, 1)])
        stream.advance()
        with pytest.raises(ValueError):
            stream.peek()


class TestTokenDisplay:
    """Test token rendering."""

    def test_payload_token(self):
        assert str(Token(TokenType.IDENTIFIER, "x", "x")) == "IDENTIFIER('x')"
        assert str(Token(TokenType.INT_LITERAL, 5, "5")) == "INT_LITERAL(5)"

    def test_plain_token(self):
        assert str(Token(TokenType.PLUS, None, "+")) == "PLUS"
