"""
Builds the expected file header from a template and compares it, token by
token, against the leading tokens of a source file.

The comparison stops at the first divergence so that a single, line-precise
diagnostic is produced per file.
"""
import datetime
import enum
import re
from dataclasses import dataclass
from typing import List, Optional, Sequence

from headerlint.tokens import OPEN_TAG, Token, TokenType, tokenize


ISSUE_INVALID_FORMAT = "InvalidHeaderFormat"
OWNER_PLACEHOLDER = "OWNER"
YEAR_PLACEHOLDER = "YYYY"
LINE_BREAK = "\n"

DEFAULT_CODE_OWNER = "Blue Acorn iCi"
DEFAULT_TEMPLATE = (
    "<?php\n"
    "/**\n"
    " * @author    Blue Acorn iCi <code@blueacornici.com>\n"
    " * @copyright YYYY OWNER. All Rights Reserved.\n"
    " */\n"
)

_YEAR_RE = re.compile(r"[0-9]{4}")


class HeaderTemplateError(ValueError):
    """
    Raised when a header template cannot be used to check files.
    """


@dataclass(frozen=True)
class HeaderConfig:
    force_current_year: bool = False
    code_owner: str = DEFAULT_CODE_OWNER
    template: str = DEFAULT_TEMPLATE


###############################################################################
# Template
###############################################################################

def build_template(template: str, code_owner: str, force_current_year: bool, today: Optional[datetime.date] = None) -> str:
    """
    Substitutes the owner placeholder and, if `force_current_year` is set, the year placeholder.

    The year is read at call time unless `today` is given.
    """
    result = template.replace(OWNER_PLACEHOLDER, code_owner)
    if force_current_year:
        year = (today or datetime.date.today()).year
        result = result.replace(YEAR_PLACEHOLDER, f"{year:04d}")
    return result


def validate_template(template: str) -> None:
    if not template:
        raise HeaderTemplateError("Header template is empty.")
    for placeholder in (OWNER_PLACEHOLDER, YEAR_PLACEHOLDER):
        if placeholder not in template:
            raise HeaderTemplateError(f"Header template does not contain the {placeholder} placeholder.")
    tokens = tokenize(template)
    entry_offset = find_entry_offset(tokens)
    if entry_offset is None:
        raise HeaderTemplateError("Header template does not contain a doc comment block.")
    # Expected tokens are cut at the file's entry offset, so the template's doc
    # comment has to sit where a PHP file's does: right after the open tag.
    if entry_offset != 1 or tokens[0].type != TokenType.T_OPEN_TAG:
        raise HeaderTemplateError(f"Header template must start with '{OPEN_TAG}' immediately followed by the doc comment.")


def find_entry_offset(tokens: Sequence[Token]) -> Optional[int]:
    """
    Returns the position of the first doc comment opener, where the header is expected to begin.
    """
    for i, token in enumerate(tokens):
        if token.type == TokenType.T_DOC_COMMENT_OPEN_TAG:
            return i
    return None


###############################################################################
# Matching
###############################################################################

class MismatchKind(enum.Enum):
    CONTENT_MISMATCH = "content-mismatch"
    UNEXPECTED_LINE_BREAK = "unexpected-line-break"


@dataclass(frozen=True)
class MismatchDescriptor:
    kind: MismatchKind
    actual: Token
    expected: Token
    line: int

    @property
    def message(self) -> str:
        if self.kind == MismatchKind.UNEXPECTED_LINE_BREAK:
            return "Invalid token, unexpected line-break."
        return f'Invalid token, expected "{self.expected.content}".'


@dataclass(frozen=True)
class Match:
    pass


@dataclass(frozen=True)
class Skip:
    reason: str


@dataclass(frozen=True)
class Mismatch:
    descriptor: MismatchDescriptor


Outcome = Match | Skip | Mismatch


def _comparable_content(actual: Token, expected: Token, force_current_year: bool) -> str:
    # Any literal year is accepted where the template keeps the placeholder
    if not force_current_year and YEAR_PLACEHOLDER in expected.content:
        return _YEAR_RE.sub(YEAR_PLACEHOLDER, actual.content)
    return actual.content


def match_header(actual: Sequence[Token], entry_offset: int, expected: Sequence[Token], force_current_year: bool = False) -> Outcome:
    """
    Compares `expected` against `actual` starting at `entry_offset` and reports the first divergence.

    Returns Skip when the entry offset lies beyond the expected header, or when the
    file has fewer tokens left than the header has.
    """
    if entry_offset < 0:
        return Skip(f"entry offset {entry_offset} is negative")

    if entry_offset > len(expected):
        return Skip(f"entry offset {entry_offset} is beyond the {len(expected)} header tokens")

    remaining = len(actual) - entry_offset
    if remaining < len(expected):
        return Skip(f"only {remaining} tokens available for a {len(expected)} token header")

    for actual_token, expected_token in zip(actual[entry_offset:], expected):
        content = _comparable_content(actual_token, expected_token, force_current_year)
        if actual_token.type == expected_token.type and content == expected_token.content:
            continue

        kind = MismatchKind.UNEXPECTED_LINE_BREAK if expected_token.content == LINE_BREAK else MismatchKind.CONTENT_MISMATCH
        return Mismatch(MismatchDescriptor(kind, actual_token, expected_token, actual_token.line))

    return Match()


def expected_tokens(template: str, config: HeaderConfig, entry_offset: int = 0) -> List[Token]:
    """
    Tokenizes the rendered header and drops the tokens before `entry_offset`, so that
    whatever precedes the doc comment in the template lines up with the file's own prefix.
    """
    text = build_template(template, config.code_owner, config.force_current_year)
    return tokenize(text)[entry_offset:]


def check_header(tokens: Sequence[Token], entry_offset: int, template: str, config: HeaderConfig) -> Outcome:
    expected = expected_tokens(template, config, entry_offset)
    return match_header(tokens, entry_offset, expected, config.force_current_year)
