"""Tokenization of free-text signatures found in documentation comments.

Signatures such as ``void select(int index, string role = "display")`` are
written in a C++-like notation. This module splits them into tokens and
tracks parenthesis and bracket nesting while they are read.
"""

import re
from enum import Enum, auto


class Tok(Enum):
    EOI = auto()
    IDENT = auto()
    STRING = auto()
    CHAR_LITERAL = auto()
    NUMBER = auto()
    GULBRANDSEN = auto()  # ::
    ELLIPSIS = auto()
    LEFT_PAREN = auto()
    RIGHT_PAREN = auto()
    LEFT_BRACKET = auto()
    RIGHT_BRACKET = auto()
    LEFT_BRACE = auto()
    RIGHT_BRACE = auto()
    LEFT_ANGLE = auto()
    RIGHT_ANGLE = auto()
    COMMA = auto()
    EQUAL = auto()
    AMPERSAND = auto()
    ASTER = auto()
    CARET = auto()
    SEMICOLON = auto()
    OTHER = auto()
    # Keywords
    VOID = auto()
    INT = auto()
    CHAR = auto()
    DOUBLE = auto()
    SIGNED = auto()
    UNSIGNED = auto()
    SHORT = auto()
    LONG = auto()
    INT64 = auto()
    CONST = auto()


KEYWORDS = {
    "void": Tok.VOID,
    "int": Tok.INT,
    "char": Tok.CHAR,
    "double": Tok.DOUBLE,
    "signed": Tok.SIGNED,
    "unsigned": Tok.UNSIGNED,
    "short": Tok.SHORT,
    "long": Tok.LONG,
    "__int64": Tok.INT64,
    "const": Tok.CONST,
}

PUNCTUATION = {
    "::": Tok.GULBRANDSEN,
    "...": Tok.ELLIPSIS,
    "(": Tok.LEFT_PAREN,
    ")": Tok.RIGHT_PAREN,
    "[": Tok.LEFT_BRACKET,
    "]": Tok.RIGHT_BRACKET,
    "{": Tok.LEFT_BRACE,
    "}": Tok.RIGHT_BRACE,
    "<": Tok.LEFT_ANGLE,
    ">": Tok.RIGHT_ANGLE,
    ",": Tok.COMMA,
    "=": Tok.EQUAL,
    "&": Tok.AMPERSAND,
    "*": Tok.ASTER,
    "^": Tok.CARET,
    ";": Tok.SEMICOLON,
}

_TOKEN_RE = re.compile(
    r"""
      (?P<space>\s+)
    | (?P<string>"(?:[^"\\]|\\.)*"?)
    | (?P<char>'(?:[^'\\]|\\.)*'?)
    | (?P<number>\d[\w.]*|\.\d[\w.]*)
    | (?P<ident>[A-Za-z_$][\w$]*)
    | (?P<punct>::|\.\.\.|.)
    """,
    re.VERBOSE | re.DOTALL,
)


def tokenize_signature(text: str) -> list[tuple[Tok, str]]:
    """Split a signature into (token kind, lexeme) pairs.

    Args:
        text: Signature text, e.g. taken from a ``\\qmlmethod`` line.

    Returns:
        List of tokens without whitespace and without the end-of-input marker.

    Examples:
        >>> [lexeme for _, lexeme in tokenize_signature("int foo(a::b x)")]
        ['int', 'foo', '(', 'a', '::', 'b', 'x', ')']
    """
    tokens = []
    for match in _TOKEN_RE.finditer(text):
        group = match.lastgroup
        lexeme = match.group()
        if group == "space":
            continue
        if group == "string":
            tokens.append((Tok.STRING, lexeme))
        elif group == "char":
            tokens.append((Tok.CHAR_LITERAL, lexeme))
        elif group == "number":
            tokens.append((Tok.NUMBER, lexeme))
        elif group == "ident":
            tokens.append((KEYWORDS.get(lexeme, Tok.IDENT), lexeme))
        else:
            tokens.append((PUNCTUATION.get(lexeme, Tok.OTHER), lexeme))
    return tokens


class SignatureTokenizer:
    """Reads signature tokens one at a time.

    ``paren_depth`` and ``bracket_depth`` already account for the token
    most recently returned by ``get_token``.
    """

    def __init__(self, text: str):
        self._tokens = tokenize_signature(text)
        self._index = 0
        self._lexeme = ""
        self._previous_lexeme = ""
        self.paren_depth = 0
        self.bracket_depth = 0

    def get_token(self) -> Tok:
        self._previous_lexeme = self._lexeme
        if self._index >= len(self._tokens):
            self._lexeme = ""
            return Tok.EOI

        tok, self._lexeme = self._tokens[self._index]
        self._index += 1

        if tok is Tok.LEFT_PAREN:
            self.paren_depth += 1
        elif tok is Tok.RIGHT_PAREN:
            self.paren_depth -= 1
        elif tok is Tok.LEFT_BRACKET:
            self.bracket_depth += 1
        elif tok is Tok.RIGHT_BRACKET:
            self.bracket_depth -= 1
        return tok

    def lexeme(self) -> str:
        return self._lexeme

    def previous_lexeme(self) -> str:
        return self._previous_lexeme


def join_lexeme(chunk: str, lexeme: str) -> str:
    """Append a lexeme to accumulated code text.

    A blank separates the two only when both sides are word characters.

    Examples:
        >>> join_lexeme("unsigned", "int")
        'unsigned int'
        >>> join_lexeme("QString", "&")
        'QString&'
    """
    if chunk and lexeme and _is_word_char(chunk[-1]) and _is_word_char(lexeme[0]):
        return f"{chunk} {lexeme}"
    return chunk + lexeme


def _is_word_char(char: str) -> bool:
    return char.isalnum() or char in "_$"
