from dataclasses import dataclass
from enum import Enum
import re
from typing import Callable, Iterator

WHITESPACE = "\t\n\r "

NUMBER_RE = re.compile(
    r"0[xX][0-9a-fA-F_]+|0[bB][01_]+|0[oO][0-7_]+"
    r"|\d[\d_]*(?:\.\d*)?(?:[eE][+-]?\d+)?"
    r"|\.\d+(?:[eE][+-]?\d+)?"
)
STRING_RE = re.compile(r'"(?:\\[^\n]|[^"\\\n])*"?')
RAW_STRING_RE = re.compile(r"`[^`]*`?")
CHAR_RE = re.compile(r"'(?:\\[^\n]|[^'\\\n])*'?")
BLOCK_COMMENT_RE = re.compile(r"/\*.*?(?:\*/|\Z)", re.DOTALL)
LINE_COMMENT_RE = re.compile(r"//[^\n]*")

QUOTE_CHARS = "\"'`"


class TokenKind(Enum):
    IDENT = "ident"
    INT = "int"
    FLOAT = "float"
    CHAR = "char"
    STRING = "string"
    RAW_STRING = "raw_string"
    COMMENT = "comment"
    PUNCT = "punct"


@dataclass
class Token:
    kind: TokenKind
    text: str
    pos: int


def is_ident_rune(ch: str, i: int) -> bool:
    return ch == "_" or ch.isalpha() or (ch.isdecimal() and i > 0)


def is_variable_rune(ch: str, i: int) -> bool:
    # Template references start with $ or . and may be dotted: $.User.Name
    if i == 0:
        return ch in "$." or ch == "_" or ch.isalpha()
    return ch in "._" or ch.isalpha() or ch.isdecimal()


class Scanner:
    def __init__(
        self,
        text: str,
        whitespace: str = WHITESPACE,
        ident_rune: Callable[[str, int], bool] = is_ident_rune,
    ):
        self.text = text
        self.whitespace = whitespace
        self.ident_rune = ident_rune

    def __iter__(self) -> Iterator[Token]:
        text = self.text
        size = len(text)
        pos = 0
        while pos < size:
            ch = text[pos]
            if ch in self.whitespace:
                pos += 1
                continue
            nxt = text[pos + 1] if pos + 1 < size else ""

            if self.ident_rune(ch, 0):
                end = pos + 1
                while end < size and self.ident_rune(text[end], end - pos):
                    end += 1
                token = Token(TokenKind.IDENT, text[pos:end], pos)
            elif ch.isdecimal() or (ch == "." and nxt.isdecimal()):
                match = NUMBER_RE.match(text, pos)
                value = match.group(0) if match else ch
                kind = TokenKind.INT
                if not value.lower().startswith("0x") and any(c in value for c in ".eE"):
                    kind = TokenKind.FLOAT
                token = Token(kind, value, pos)
            elif ch == '"':
                token = Token(TokenKind.STRING, STRING_RE.match(text, pos).group(0), pos)
            elif ch == "`":
                token = Token(TokenKind.RAW_STRING, RAW_STRING_RE.match(text, pos).group(0), pos)
            elif ch == "'":
                token = Token(TokenKind.CHAR, CHAR_RE.match(text, pos).group(0), pos)
            elif ch == "/" and nxt == "*":
                token = Token(TokenKind.COMMENT, BLOCK_COMMENT_RE.match(text, pos).group(0), pos)
            elif ch == "/" and nxt == "/":
                token = Token(TokenKind.COMMENT, LINE_COMMENT_RE.match(text, pos).group(0), pos)
            else:
                token = Token(TokenKind.PUNCT, ch, pos)

            yield token
            pos += len(token.text)


def is_quoted(value: str) -> bool:
    return len(value) >= 2 and value[0] in QUOTE_CHARS and value[-1] == value[0]


def trim_quotes(value: str) -> str:
    if is_quoted(value):
        return value[1:-1]
    return value
