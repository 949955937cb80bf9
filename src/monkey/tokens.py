"""
Token types for the monkey lexer.

Tokens carry no source positions; the parser only ever needs the tag and,
for identifiers and integer literals, the payload.
"""

from enum import Enum, auto
from dataclasses import dataclass
from typing import Any, Optional


class TokenType(Enum):
    """All token types recognized by the lexer."""

    # --- Literals ---
    INT_LITERAL = auto()        # 42

    # --- Identifiers ---
    IDENTIFIER = auto()         # user-defined names

    # --- Keywords ---
    LET = auto()                # let
    RETURN = auto()             # return
    IF = auto()                 # if
    ELSE = auto()               # else
    FN = auto()                 # fn
    TRUE = auto()               # true
    FALSE = auto()              # false
    WHILE = auto()              # while (reserved)
    FOR = auto()                # for (reserved)
    LOOP = auto()               # loop (reserved)

    # --- Arithmetic operators ---
    PLUS = auto()               # +
    MINUS = auto()              # -
    STAR = auto()               # *
    SLASH = auto()              # /

    # --- Comparison operators ---
    LT = auto()                 # <
    GT = auto()                 # >
    EQ = auto()                 # ==
    NE = auto()                 # !=

    # --- Logical operators ---
    BANG = auto()               # !

    # --- Assignment ---
    ASSIGN = auto()             # =

    # --- Delimiters ---
    COMMA = auto()              # ,
    SEMICOLON = auto()          # ;
    LPAREN = auto()             # (
    RPAREN = auto()             # )
    LBRACE = auto()             # {
    RBRACE = auto()             # }

    # --- Special ---
    EOF = auto()                # end of input


@dataclass(frozen=True)
class Token:
    """A single token from the lexer."""
    type: TokenType
    value: Any = None       # identifier name or integer value
    lexeme: str = ""        # the original source text

    def __str__(self) -> str:
        if self.type in (TokenType.INT_LITERAL, TokenType.IDENTIFIER):
            return f"{self.type.name}({self.value!r})"
        return self.type.name


# Keyword mapping - maps string to token type
KEYWORDS: dict[str, TokenType] = {
    "let": TokenType.LET,
    "return": TokenType.RETURN,
    "if": TokenType.IF,
    "else": TokenType.ELSE,
    "fn": TokenType.FN,
    "true": TokenType.TRUE,
    "false": TokenType.FALSE,

    # Reserved for loop constructs; no grammar yet
    "while": TokenType.WHILE,
    "for": TokenType.FOR,
    "loop": TokenType.LOOP,
}


# Source spelling of every operator, used when rendering the AST
OPERATOR_SYMBOLS: dict[TokenType, str] = {
    TokenType.PLUS: "+",
    TokenType.MINUS: "-",
    TokenType.STAR: "*",
    TokenType.SLASH: "/",
    TokenType.LT: "<",
    TokenType.GT: ">",
    TokenType.EQ: "==",
    TokenType.NE: "!=",
    TokenType.BANG: "!",
}


_DELIMITER_NAMES: dict[TokenType, str] = {
    TokenType.ASSIGN: "'='",
    TokenType.COMMA: "','",
    TokenType.SEMICOLON: "';'",
    TokenType.LPAREN: "'('",
    TokenType.RPAREN: "')'",
    TokenType.LBRACE: "'{'",
    TokenType.RBRACE: "'}'",
    TokenType.EOF: "end of input",
}


def describe(token_type: TokenType) -> str:
    """Human-readable name for a token type, e.g. "'+'" or "identifier"."""
    if token_type in OPERATOR_SYMBOLS:
        return f"'{OPERATOR_SYMBOLS[token_type]}'"
    for keyword, kw_type in KEYWORDS.items():
        if kw_type is token_type:
            return f"'{keyword}'"
    return _DELIMITER_NAMES.get(token_type, token_type.name.lower().replace("_", " "))


def symbol_for(token_type: TokenType) -> str:
    """Source spelling of an operator token type."""
    return OPERATOR_SYMBOLS[token_type]


def lookup_keyword(word: str) -> Optional[TokenType]:
    """Token type for a reserved word, or None for a plain identifier."""
    return KEYWORDS.get(word)
