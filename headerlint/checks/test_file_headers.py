from pathlib import Path

import pytest

from headerlint.checks.base import Severity
from headerlint.checks.file_headers import (
    E_HEADER_READ_ERROR, E_UNEXPECTED_LINE_BREAK, E_UNEXPECTED_TOKEN, FileHeaderCheck,
)
from headerlint.header import HeaderConfig, HeaderTemplateError


GOOD_HEADER = (
    "<?php\n"
    "/**\n"
    " * @author    Blue Acorn iCi <code@blueacornici.com>\n"
    " * @copyright 2018 Blue Acorn iCi. All Rights Reserved.\n"
    " */\n"
    "\n"
    "namespace BlueAcorn\\Module;\n"
)


def write(tmp_path: Path, name: str, content: str | bytes) -> Path:
    path = tmp_path / name
    if isinstance(content, bytes):
        path.write_bytes(content)
    else:
        path.write_bytes(content.encode('utf-8'))
    return path


def test_good_header(tmp_path):
    assert FileHeaderCheck().check(write(tmp_path, "Good.php", GOOD_HEADER)) == []


def test_wrong_owner(tmp_path):
    file = write(tmp_path, "Owner.php", GOOD_HEADER.replace("2018 Blue Acorn iCi", "2018 Mediotype"))
    issues = FileHeaderCheck().check(file)
    assert len(issues) == 1
    issue = issues[0]
    assert issue.issue_type == E_UNEXPECTED_TOKEN
    assert issue.code == "InvalidHeaderFormat"
    assert issue.location.path == file
    assert issue.location.lines == (4,)
    assert issue.message == 'Invalid token, expected "YYYY Blue Acorn iCi. All Rights Reserved.".'


def test_configured_owner(tmp_path):
    file = write(tmp_path, "Owner.php", GOOD_HEADER.replace("2018 Blue Acorn iCi", "2018 Mediotype"))
    assert FileHeaderCheck(HeaderConfig(code_owner="Mediotype")).check(file) == []


def test_crlf_file(tmp_path):
    file = write(tmp_path, "Crlf.php", GOOD_HEADER.replace("\n", "\r\n"))
    issues = FileHeaderCheck().check(file)
    assert [i.issue_type for i in issues] == [E_UNEXPECTED_LINE_BREAK]
    assert issues[0].code == "InvalidHeaderFormat"
    assert issues[0].location.lines == (2,)


def test_file_without_doc_comment_is_not_judged(tmp_path):
    file = write(tmp_path, "Plain.php", "<?php\necho 'hello';\n")
    assert FileHeaderCheck().check(file) == []


def test_short_file_is_not_judged(tmp_path):
    file = write(tmp_path, "Short.php", "<?php\n/** */\n")
    assert FileHeaderCheck().check(file) == []


def test_non_utf8_file(tmp_path):
    file = write(tmp_path, "Latin.php", "<?php\n/** caf\xe9 */\n".encode('latin-1'))
    issues = FileHeaderCheck().check(file)
    assert [i.issue_type for i in issues] == [E_HEADER_READ_ERROR]
    assert issues[0].issue_type.severity == Severity.WARNING
    assert "Latin.php" in issues[0].message


def test_missing_and_directory_paths(tmp_path):
    assert FileHeaderCheck().check(tmp_path / "missing.php") == []
    assert FileHeaderCheck().check(tmp_path) == []


def test_invalid_template_fails_up_front():
    with pytest.raises(HeaderTemplateError):
        FileHeaderCheck(HeaderConfig(template="<?php\n// YYYY OWNER\n"))


def test_applies_to():
    check = FileHeaderCheck(extensions=[".php", ".PHTML"])
    assert check.applies_to(Path("a/B.php"))
    assert check.applies_to(Path("view.phtml"))
    assert not check.applies_to(Path("README.md"))
