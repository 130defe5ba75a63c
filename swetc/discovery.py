"""File discovery, solution listing and line counting."""

from __future__ import annotations

import fnmatch
import logging
import re
from pathlib import Path
from typing import Iterable

from swetc.models import MatchRule

logger = logging.getLogger(__name__)

_SLN_PROJECT_RE = re.compile(r'Project[^,]+,[^"]*"([^"]+)"')


def _should_skip(path: Path, root: Path, skip_dirs: Iterable[str]) -> bool:
    for part in path.relative_to(root).parts[:-1]:
        for pattern in skip_dirs:
            if fnmatch.fnmatch(part, pattern):
                return True
    return False


def find_files(
    directory: str | Path,
    rules: Iterable[MatchRule],
    recursive: bool = True,
    skip_dirs: Iterable[str] = (),
) -> list[Path]:
    """Return canonical paths of files under ``directory`` matching any rule."""
    root = Path(directory).resolve()
    rules = list(rules)
    skip_dirs = list(skip_dirs)
    candidates = root.rglob("*") if recursive else root.iterdir()

    found: list[Path] = []
    for path in candidates:
        if not path.is_file():
            continue
        if skip_dirs and _should_skip(path, root, skip_dirs):
            continue
        if any(rule.matches(path.name) for rule in rules):
            found.append(path.resolve())
    return sorted(set(found))


def cmake_files(directory: str | Path, skip_dirs: Iterable[str] = ()) -> list[Path]:
    return find_files(directory, [MatchRule.wildcard("CMakeLists.txt")], skip_dirs=skip_dirs)


def vcxproj_files(directory: str | Path, skip_dirs: Iterable[str] = ()) -> list[Path]:
    return find_files(directory, [MatchRule.extension("vcxproj")], skip_dirs=skip_dirs)


def csproj_files(directory: str | Path, skip_dirs: Iterable[str] = ()) -> list[Path]:
    return find_files(directory, [MatchRule.extension("csproj")], skip_dirs=skip_dirs)


def sln_files(directory: str | Path, skip_dirs: Iterable[str] = ()) -> list[Path]:
    return find_files(directory, [MatchRule.extension("sln")], skip_dirs=skip_dirs)


def projects_of_solution(sln: str | Path) -> list[Path]:
    """List the existing project files referenced by a Visual Studio solution.

    Solution folders and projects missing on disk are skipped.
    """
    sln = Path(sln).resolve()
    text = sln.read_text(encoding="utf-8-sig", errors="replace")
    projects: list[Path] = []
    for rel in _SLN_PROJECT_RE.findall(text):
        candidate = (sln.parent / rel.replace("\\", "/")).resolve()
        if candidate.is_file() and candidate not in projects:
            projects.append(candidate)
    return projects


# ── Line counting ─────────────────────────────────────────────


def count_lines_in_text(text: str) -> int:
    return len(text.splitlines())


def count_lines(path: str | Path) -> int:
    try:
        with open(path, encoding="utf-8", errors="replace") as f:
            return sum(1 for _ in f)
    except OSError as e:
        logger.debug("cannot count lines of %s: %s", path, e)
        return 0


def count_lines_of_files(paths: Iterable[str | Path]) -> int:
    return sum(count_lines(p) for p in paths)
