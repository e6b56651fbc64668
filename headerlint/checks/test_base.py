from pathlib import Path

import pytest

from headerlint.checks.base import FileLocation, IssueList, IssueType


E_SAMPLE = IssueType("SampleIssue", "Sample issue {name}.")


def test_issue_code_must_be_an_identifier():
    with pytest.raises(ValueError):
        IssueType("invalid header format", "x")
    with pytest.raises(ValueError):
        IssueType("", "x")


def test_file_location_combination():
    a = FileLocation(Path("x.php"), (4,))
    b = FileLocation(Path("x.php"), (2, 4))
    assert (a + b).lines == (2, 4)
    with pytest.raises(ValueError):
        a + FileLocation(Path("y.php"), (1,))


def test_issue_list_folds_repeated_issues():
    issues = IssueList()
    issues.append(E_SAMPLE.make(name="a").at(Path("x.php"), line=3))
    issues.append(E_SAMPLE.make(name="a").at(Path("x.php"), line=5))
    issues.append(E_SAMPLE.make(name="b").at(Path("x.php"), line=6))
    issues.append(E_SAMPLE.make(name="b").at(Path("y.php"), line=6))
    assert len(issues) == 3
    first = list(issues)[0]
    assert first.location.lines == (3, 5)
    assert first.message == "Sample issue a."
