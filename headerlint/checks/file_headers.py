"""
* [x] Check that every source file starts with the corporate header: a doc comment naming the
      author and the copyright owner, with the copyright year either free (any four digits) or
      pinned to the current year.
* [ ] Offer a fix that inserts the header into files that have no doc comment at all.
"""
import logging
from pathlib import Path
from typing import Iterable, List

from headerlint.checks.base import FileCheck, Issue, IssueType, Severity
from headerlint.header import (
    ISSUE_INVALID_FORMAT, HeaderConfig, Match, Mismatch, MismatchDescriptor, MismatchKind, Skip,
    check_header, find_entry_offset, validate_template,
)
from headerlint.tokens import tokenize


DEFAULT_EXTENSIONS = (".php", ".phtml", ".inc")

E_UNEXPECTED_LINE_BREAK = IssueType(ISSUE_INVALID_FORMAT, "Invalid token, unexpected line-break.")
E_UNEXPECTED_TOKEN      = IssueType(ISSUE_INVALID_FORMAT, 'Invalid token, expected "{expected}".')
E_HEADER_READ_ERROR     = IssueType("HeaderReadError", "Could not read '{filename}' during header check: {error}.", Severity.WARNING)


def issue_for(descriptor: MismatchDescriptor) -> Issue:
    if descriptor.kind == MismatchKind.UNEXPECTED_LINE_BREAK:
        return E_UNEXPECTED_LINE_BREAK.make()
    return E_UNEXPECTED_TOKEN.make(expected=descriptor.expected.content)


class FileHeaderCheck(FileCheck):
    """
    Verifies the header of each source file against the configured template.

    The template is validated when the check is created, so a broken template
    fails the run up front instead of once per file.
    """
    def __init__(self, config: HeaderConfig = HeaderConfig(), extensions: Iterable[str] = DEFAULT_EXTENSIONS):
        validate_template(config.template)
        self.config = config
        self.extensions = frozenset(ext.lower() for ext in extensions)

    def applies_to(self, path: Path) -> bool:
        return path.suffix.lower() in self.extensions

    def check(self, file: Path) -> List[Issue]:
        if not file.is_file(): return []
        if file.is_symlink(): return [] # Don't check symlinks directly

        try:
            # Decode the raw bytes so that CRLF line endings reach the tokenizer untouched
            text = file.read_bytes().decode('utf-8')
        except (OSError, UnicodeDecodeError) as e:
            return [E_HEADER_READ_ERROR.make(filename=file.name, error=e).at(file)]

        tokens = tokenize(text)
        entry_offset = find_entry_offset(tokens)
        if entry_offset is None:
            logging.debug(f"No doc comment in {file}, header not checked.")
            return []

        match check_header(tokens, entry_offset, self.config.template, self.config):
            case Match():
                return []
            case Skip(reason):
                logging.debug(f"Header check skipped for {file}: {reason}")
                return []
            case Mismatch(descriptor):
                return [issue_for(descriptor).at(file, line=descriptor.line)]
