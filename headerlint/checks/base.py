import abc
import enum
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, List, Mapping, Tuple


ISSUE_CODE_RE = re.compile(r"^[A-Z][A-Za-z0-9]*$")


@dataclass(frozen=True)
class FileLocation:
    path: Path
    lines: Tuple[int, ...] = ()

    def __add__(self, other: 'FileLocation') -> 'FileLocation':
        """
        Combines two FileLocations.
        """
        if self.path != other.path:
            raise ValueError("Cannot combine different file locations.")

        return FileLocation(self.path, tuple(sorted(set(self.lines) | set(other.lines))))


class Severity(enum.Enum):
    """
    Severity levels for checks.
    """
    WARNING = "warning"
    ERROR = "error"


@dataclass(frozen=True)
class IssueType:
    """
    Represents a type of issue.

    The ID is the issue code downstream tooling filters and suppresses on, so
    several issue types may share one.
    """
    id: str
    message: str
    severity: Severity = Severity.ERROR

    def __post_init__(self):
        if not isinstance(self.id, str) or not ISSUE_CODE_RE.match(self.id):
            raise ValueError(f"Invalid issue code: {self.id}")

    def make(self, **kwargs) -> 'Issue':
        """
        Creates an Issue of this type.
        """
        return Issue(self, data=kwargs)


@dataclass
class Issue:
    """
    Represents an issue found during a check.
    """
    issue_type: IssueType
    data: Mapping[str, Any] | None = None
    location: FileLocation | None = None

    @property
    def code(self) -> str:
        return self.issue_type.id

    @property
    def message(self) -> str:
        return self.issue_type.message.format(**(self.data or {}))

    def at(self, path: Path, line: int | None = None) -> 'Issue':
        """
        Returns an Issue with the specified path.
        """
        lines = (line,) if line is not None else ()
        if self.location is None:
            self.location = FileLocation(path, lines)
        else:
            if self.location.path != path:
                raise ValueError("Cannot change the path of an existing issue.")
            self.location = self.location + FileLocation(path, lines)
        return self


@dataclass
class IssueList:
    """
    Represents a list of issues found during a check.
    """
    issues: List[Issue] = field(default_factory=list)

    def append(self, issue: Issue) -> None:
        """
        Adds an issue, folding it into the previous one when only the location differs.
        """
        if self.issues:
            last = self.issues[-1]
            if last == issue: return
            if last.issue_type == issue.issue_type and last.data == issue.data \
                    and last.location is not None and issue.location is not None \
                    and last.location.path == issue.location.path:
                last.location = last.location + issue.location
                return
        self.issues.append(issue)

    def extend(self, issues: List[Issue] | 'IssueList') -> None:
        for issue in issues:
            self.append(issue)

    def __iter__(self):
        return iter(self.issues)

    def __len__(self) -> int:
        return len(self.issues)


class FileCheck(abc.ABC):
    @abc.abstractmethod
    def check(self, path: Path) -> List[Issue]:
        raise NotImplementedError()

    def applies_to(self, path: Path) -> bool:
        return True
