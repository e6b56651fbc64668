"""
Tokenizer for the leading region of PHP-style source files.

Produces the token shapes a PHP code sniffer emits for a file header: the open
tag, whitespace split at line ends, and doc comments broken into their open
tag, stars, tags, strings, whitespace and close tag. Anything else is emitted
as coarse code or comment tokens, which is enough to locate doc comments
further down a file but is not a general PHP lexer.
"""
import enum
import re
from dataclasses import dataclass
from typing import List


class TokenType(enum.Enum):
    T_OPEN_TAG = "T_OPEN_TAG"
    T_WHITESPACE = "T_WHITESPACE"
    T_COMMENT = "T_COMMENT"
    T_CODE = "T_CODE"
    T_DOC_COMMENT_OPEN_TAG = "T_DOC_COMMENT_OPEN_TAG"
    T_DOC_COMMENT_WHITESPACE = "T_DOC_COMMENT_WHITESPACE"
    T_DOC_COMMENT_STAR = "T_DOC_COMMENT_STAR"
    T_DOC_COMMENT_TAG = "T_DOC_COMMENT_TAG"
    T_DOC_COMMENT_STRING = "T_DOC_COMMENT_STRING"
    T_DOC_COMMENT_CLOSE_TAG = "T_DOC_COMMENT_CLOSE_TAG"


@dataclass(frozen=True)
class Token:
    type: TokenType
    content: str
    line: int


OPEN_TAG = "<?php"
DOC_COMMENT_OPEN = "/**"
DOC_COMMENT_CLOSE = "*/"

_OPEN_TAG_RE     = re.compile(r"<\?php(?:\r\n|\n|\r|[ \t])?")
_EOL_RE          = re.compile(r"\r\n|\n|\r")
_WHITESPACE_RE   = re.compile(r"[ \t\f\v]*(?:\r\n|\n|\r)|[ \t\f\v]+")
_INLINE_WS_RE    = re.compile(r"[ \t\f\v]+")
_LINE_COMMENT_RE = re.compile(r"//[^\r\n]*")
_CODE_RE         = re.compile(r"(?:(?!/\*|//)[^ \t\f\v\r\n])+")
_DOC_LINE_RE     = re.compile(r"[^\r\n]*(?:\r\n|\n|\r)|[^\r\n]+")
_DOC_TAG_RE      = re.compile(r"@[^ \t\f\v\r\n]+")


def count_line_breaks(text: str) -> int:
    return len(_EOL_RE.findall(text))


def _is_doc_comment_start(text: str, pos: int) -> bool:
    # "/**/" is an ordinary comment; a doc comment needs whitespace after the opener.
    end = pos + len(DOC_COMMENT_OPEN)
    return text.startswith(DOC_COMMENT_OPEN, pos) and end < len(text) and text[end].isspace()


def _tokenize_doc_comment(comment: str, line: int) -> List[Token]:
    """
    Splits a complete doc comment (including its delimiters) into doc comment tokens.
    An unterminated comment simply has no close tag token.
    """
    tokens = [Token(TokenType.T_DOC_COMMENT_OPEN_TAG, DOC_COMMENT_OPEN, line)]

    closed = len(comment) >= len(DOC_COMMENT_OPEN) + len(DOC_COMMENT_CLOSE) and comment.endswith(DOC_COMMENT_CLOSE)
    body = comment[len(DOC_COMMENT_OPEN):-len(DOC_COMMENT_CLOSE)] if closed else comment[len(DOC_COMMENT_OPEN):]

    def emit(kind: TokenType, content: str) -> None:
        if content:
            tokens.append(Token(kind, content, line))

    for i, raw in enumerate(_DOC_LINE_RE.findall(body)):
        text = raw.rstrip("\r\n")
        eol = raw[len(text):]
        pos = 0

        m = _INLINE_WS_RE.match(text, pos)
        if m:
            emit(TokenType.T_DOC_COMMENT_WHITESPACE, m.group())
            pos = m.end()

        # Leading stars only count on continuation lines
        if i > 0 and text.startswith("*", pos):
            emit(TokenType.T_DOC_COMMENT_STAR, "*")
            pos += 1
            m = _INLINE_WS_RE.match(text, pos)
            if m:
                emit(TokenType.T_DOC_COMMENT_WHITESPACE, m.group())
                pos = m.end()

        m = _DOC_TAG_RE.match(text, pos)
        if m:
            emit(TokenType.T_DOC_COMMENT_TAG, m.group())
            pos = m.end()
            m = _INLINE_WS_RE.match(text, pos)
            if m:
                emit(TokenType.T_DOC_COMMENT_WHITESPACE, m.group())
                pos = m.end()

        string = text[pos:].rstrip(" \t\f\v")
        emit(TokenType.T_DOC_COMMENT_STRING, string)
        emit(TokenType.T_DOC_COMMENT_WHITESPACE, text[pos + len(string):])

        if eol:
            emit(TokenType.T_DOC_COMMENT_WHITESPACE, eol)
            line += 1

    if closed:
        emit(TokenType.T_DOC_COMMENT_CLOSE_TAG, DOC_COMMENT_CLOSE)

    return tokens


def tokenize(text: str) -> List[Token]:
    """
    Converts source text into an ordered list of tokens with 1-based line numbers.

    Concatenating the contents of the returned tokens always reproduces `text`.
    """
    tokens: List[Token] = []
    line = 1
    pos = 0

    if text.startswith(OPEN_TAG):
        m = _OPEN_TAG_RE.match(text)
        tokens.append(Token(TokenType.T_OPEN_TAG, m.group(), line))
        line += count_line_breaks(m.group())
        pos = m.end()

    while pos < len(text):
        m = _WHITESPACE_RE.match(text, pos)
        if m:
            kind, end = TokenType.T_WHITESPACE, m.end()
        elif _is_doc_comment_start(text, pos):
            close = text.find(DOC_COMMENT_CLOSE, pos + len(DOC_COMMENT_OPEN))
            end = len(text) if close == -1 else close + len(DOC_COMMENT_CLOSE)
            comment = text[pos:end]
            tokens.extend(_tokenize_doc_comment(comment, line))
            line += count_line_breaks(comment)
            pos = end
            continue
        elif text.startswith("/*", pos):
            close = text.find("*/", pos + 2)
            kind, end = TokenType.T_COMMENT, (len(text) if close == -1 else close + 2)
        elif text.startswith("//", pos):
            kind, end = TokenType.T_COMMENT, _LINE_COMMENT_RE.match(text, pos).end()
        else:
            kind, end = TokenType.T_CODE, _CODE_RE.match(text, pos).end()

        chunk = text[pos:end]
        tokens.append(Token(kind, chunk, line))
        line += count_line_breaks(chunk)
        pos = end

    return tokens
