"""Data models for the swetc project analysis pipeline."""

from __future__ import annotations

import enum
import fnmatch
import re
from dataclasses import dataclass, field
from pathlib import Path


class TargetKind(enum.Enum):
    EXECUTABLE = "exe"
    STATIC_LIBRARY = "staticlibrary"
    SHARED_LIBRARY = "library"


class ProjectFormat(enum.Enum):
    VCXPROJ = "vcxproj"
    CSPROJ = "csproj"
    CMAKE = "cmake"


class MatchKind(enum.Enum):
    EXTENSION = "extension"
    WILDCARD = "wildcard"
    REGEX = "regex"


@dataclass(frozen=True)
class MatchRule:
    """A file-name matcher used by discovery."""
    kind: MatchKind
    pattern: str

    @classmethod
    def extension(cls, ext: str) -> MatchRule:
        return cls(MatchKind.EXTENSION, ext.lstrip("."))

    @classmethod
    def wildcard(cls, pattern: str) -> MatchRule:
        return cls(MatchKind.WILDCARD, pattern)

    @classmethod
    def regex(cls, pattern: str) -> MatchRule:
        return cls(MatchKind.REGEX, pattern)

    def matches(self, file_name: str) -> bool:
        if self.kind is MatchKind.EXTENSION:
            suffix = Path(file_name).suffix.lstrip(".")
            return suffix.lower() == self.pattern.lower()
        if self.kind is MatchKind.WILDCARD:
            return fnmatch.fnmatch(file_name, self.pattern)
        return re.fullmatch(self.pattern, file_name) is not None


@dataclass(frozen=True)
class RawTarget:
    """Unnormalized output of a project-file collaborator."""
    name: str
    kind: str
    tokens: tuple[str, ...] = ()


@dataclass(frozen=True)
class TargetDescriptor:
    """One build target declared by one project file."""
    name: str
    kind: TargetKind
    dependencies: frozenset[str] = frozenset()


@dataclass(frozen=True)
class ParseFailure:
    path: str
    reason: str


@dataclass
class AnalysisConfig:
    """Configuration for a discovery + analysis run."""
    source_dir: Path = field(default_factory=lambda: Path("."))
    project_format: ProjectFormat = ProjectFormat.CMAKE
    properties: dict[str, str] = field(default_factory=dict)  # msbuild /p: overrides
    msbuild: str = "msbuild"
    tf: str = "tf"
    workers: int = 1
    skip_dirs: list[str] = field(default_factory=lambda: [
        ".git", ".svn", ".vs", "node_modules", "__pycache__",
        "bin", "obj", "packages",
    ])
