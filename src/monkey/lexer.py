"""
Lexer for the monkey language.

Converts source text into a lazily produced stream of tokens for the parser.
Supports:
- Single-line comments (#)
- Decimal integer literals (signed 64-bit range)
- Identifiers and keywords
- One- and two-character operators (== and !=)

The parser reads tokens through a TokenStream, which offers exactly one
token of lookahead.
"""

from typing import Iterable, Iterator, List, Optional
from .tokens import Token, TokenType, lookup_keyword
from .errors import (
    error_unexpected_character,
    error_integer_out_of_range,
)

INT64_MAX = 2**63 - 1


def _is_digit(ch: str) -> bool:
    # str.isdigit() also accepts non-ASCII digits such as superscripts
    return '0' <= ch <= '9'


class Lexer:
    """
    Tokenizer for the monkey language.

    Usage:
        lexer = Lexer(source_code)
        tokens = lexer.tokenize()

    Or for streaming:
        lexer = Lexer(source_code)
        for token in lexer:
            process(token)

    Scanning is lazy when iterating: a bad character is only reported once
    the token containing it is requested.
    """

    def __init__(self, source: str):
        self.source = source
        self.pos = 0            # Current position in source

    def _peek(self, offset: int = 0) -> str:
        """Look at character at current position + offset without consuming."""
        idx = self.pos + offset
        if idx >= len(self.source):
            return '\0'
        return self.source[idx]

    def _advance(self) -> str:
        """Consume and return current character."""
        if self.pos >= len(self.source):
            return '\0'
        ch = self.source[self.pos]
        self.pos += 1
        return ch

    def _match(self, expected: str) -> bool:
        """Consume character if it matches expected."""
        if self._peek() == expected:
            self._advance()
            return True
        return False

    def _is_at_end(self) -> bool:
        return self.pos >= len(self.source)

    def _skip_whitespace_and_comments(self) -> None:
        while not self._is_at_end():
            ch = self._peek()
            if ch.isspace():
                self._advance()
            elif ch == '#':
                while self._peek() != '\n' and not self._is_at_end():
                    self._advance()
            else:
                break

    def _make_token(self, token_type: TokenType, value, start: int) -> Token:
        """Create a token spanning source[start:pos]."""
        return Token(token_type, value, self.source[start:self.pos])

    def _scan_number(self) -> Token:
        """Scan a decimal integer literal."""
        start = self.pos
        while _is_digit(self._peek()):
            self._advance()

        lexeme = self.source[start:self.pos]
        value = int(lexeme)
        if value > INT64_MAX:
            raise error_integer_out_of_range(lexeme)
        return self._make_token(TokenType.INT_LITERAL, value, start)

    def _scan_identifier_or_keyword(self) -> Token:
        """Scan an identifier or keyword."""
        start = self.pos

        while self._peek().isalnum() or self._peek() == '_':
            self._advance()

        lexeme = self.source[start:self.pos]
        keyword = lookup_keyword(lexeme)
        if keyword is not None:
            return self._make_token(keyword, None, start)
        return self._make_token(TokenType.IDENTIFIER, lexeme, start)

    def _scan_token(self) -> Token:
        """Scan the next token."""
        self._skip_whitespace_and_comments()

        if self._is_at_end():
            return Token(TokenType.EOF)

        start = self.pos
        ch = self._peek()

        if _is_digit(ch):
            return self._scan_number()

        if ch.isalpha() or ch == '_':
            return self._scan_identifier_or_keyword()

        self._advance()

        # Two-character operators
        if ch == '=' and self._match('='):
            return self._make_token(TokenType.EQ, None, start)
        if ch == '!' and self._match('='):
            return self._make_token(TokenType.NE, None, start)

        single_char_tokens = {
            '+': TokenType.PLUS,
            '-': TokenType.MINUS,
            '*': TokenType.STAR,
            '/': TokenType.SLASH,
            '<': TokenType.LT,
            '>': TokenType.GT,
            '!': TokenType.BANG,
            '=': TokenType.ASSIGN,
            ',': TokenType.COMMA,
            ';': TokenType.SEMICOLON,
            '(': TokenType.LPAREN,
            ')': TokenType.RPAREN,
            '{': TokenType.LBRACE,
            '}': TokenType.RBRACE,
        }

        if ch in single_char_tokens:
            return self._make_token(single_char_tokens[ch], None, start)

        raise error_unexpected_character(ch)

    def tokenize(self) -> List[Token]:
        """Tokenize the entire source, returning a list of tokens."""
        return list(self)

    def __iter__(self) -> Iterator[Token]:
        """Iterate over tokens, ending with a single EOF."""
        while True:
            token = self._scan_token()
            yield token
            if token.type == TokenType.EOF:
                break


class TokenStream:
    """
    One-token lookahead over an iterable of tokens.

    The stream has a single reader and is consumed in order exactly once.
    Once EOF becomes current it stays current; advance() keeps returning it.
    """

    def __init__(self, tokens: Iterable[Token]):
        self._tokens = iter(tokens)
        self._current: Optional[Token] = None

    def peek(self) -> Token:
        """Return the current token without consuming it."""
        if self._current is None:
            try:
                self._current = next(self._tokens)
            except StopIteration:
                raise ValueError("token stream ended without an EOF token") from None
        return self._current

    def advance(self) -> Token:
        """Consume and return the current token."""
        token = self.peek()
        if token.type != TokenType.EOF:
            self._current = None
        return token


def tokenize(source: str) -> List[Token]:
    """
    Convenience function to tokenize source code.

    Args:
        source: The source code to tokenize

    Returns:
        List of tokens, the last of which is EOF

    Raises:
        LexerError: If tokenization fails
    """
    return Lexer(source).tokenize()
