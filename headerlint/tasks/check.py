from __future__ import annotations
from dataclasses import dataclass, field
from typing import List
from pathlib import Path
from functools import cached_property
from argparse import ArgumentParser
import logging

import pathspec

from headerlint.checks.base import FileCheck, IssueList
from headerlint.checks.file_headers import FileHeaderCheck
from headerlint.config import Config, load_config
from headerlint.messages import report, success


@dataclass(frozen=True)
class RepoContext:
    root: Path
    ignore: List[str] = field(default_factory=list)

    def with_ignore(self, ignore: List[str]) -> RepoContext:
        return RepoContext(
            root=self.root,
            ignore=self.ignore + ignore,
        )

    @cached_property
    def spec(self) -> pathspec.PathSpec:
        """
        Returns a pathspec.PathSpec object for the ignore patterns.
        """
        return pathspec.PathSpec.from_lines("gitwildmatch", self.ignore)

    def is_ignored(self, path: Path) -> bool:
        relative = path.relative_to(self.root).as_posix()
        if path.is_dir():
            relative += "/"
        return self.spec.match_file(relative)


def read_gitignore(path: Path) -> List[str]:
    """
    Reads the .gitignore file and returns a list of patterns to ignore.
    """
    with path.open(encoding='utf-8') as f:
        return [line.strip() for line in f if line.strip() and not line.strip().startswith("#")]


def rebase_gitignore_pattern(pattern: str, base: str) -> str:
    """
    Anchors a pattern read from the .gitignore in directory `base` (relative to the
    walk root, posix style) so that it only matches below that directory.

    Patterns with a slash before their last character are relative to the .gitignore
    itself; the others match at any depth below it.
    """
    if not base:
        return pattern

    negate = pattern.startswith("!")
    if negate:
        pattern = pattern[1:]

    if "/" in pattern.rstrip("/"):
        pattern = f"/{base}/{pattern.lstrip('/')}"
    else:
        pattern = f"/{base}/**/{pattern}"

    return ("!" if negate else "") + pattern


def collect_files(root: Path, ignore: List[str], checks: List[FileCheck]) -> List[Path]:
    """
    Lists the files under `root` that at least one check applies to, skipping ignored paths.
    """
    if root.is_file():
        return [root] if any(check.applies_to(root) for check in checks) else []

    files: List[Path] = []

    def go(path: Path, repo: RepoContext) -> None:
        if (path / ".gitignore").is_file():
            base = "" if path == repo.root else path.relative_to(repo.root).as_posix()
            repo = repo.with_ignore([rebase_gitignore_pattern(p, base) for p in read_gitignore(path / ".gitignore")])

        for child in sorted(path.iterdir()):
            if repo.is_ignored(child):
                logging.debug(f"Skipping {child} due to ignore patterns")
                continue
            if child.is_dir():
                if not child.is_symlink():
                    go(child, repo)
            elif any(check.applies_to(child) for check in checks):
                files.append(child)

    go(root, RepoContext(root=root, ignore=["/.git/"] + ignore))
    return files


def check_main(path: str | Path, config: Config | None = None) -> int:
    """
    Checks every matching file under `path` and reports the issues found.

    Returns the number of issues reported.
    """
    if config is None:
        config = load_config()

    root = Path(path)
    if not root.exists():
        raise ValueError(f"Path does not exist: {root}")

    checks: List[FileCheck] = [
        FileHeaderCheck(config.header, config.extensions),
    ]

    files = collect_files(root, list(config.ignore), checks)
    logging.debug(f"Checking {len(files)} files under {root}")

    issue_count = 0
    for file in files:
        issues = IssueList()
        for check in checks:
            if check.applies_to(file):
                issues.extend(check.check(file))
        for issue in issues:
            report(issue)
        issue_count += len(issues)

    if issue_count == 0:
        success(f"Checked {len(files)} files, no header issues found.")
    return issue_count


if __name__ == "__main__":
    parser = ArgumentParser(description="Check file headers.")
    parser.add_argument("path", type=str, nargs='?', default='.', help="Directory or file to check.")

    args = parser.parse_args()

    raise SystemExit(1 if check_main(args.path) else 0)
