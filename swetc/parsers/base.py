"""Abstract base project parser."""

from __future__ import annotations

import abc
from pathlib import Path

from swetc.discovery import find_files
from swetc.models import MatchRule, ProjectFormat, RawTarget, TargetDescriptor
from swetc.normalizer import to_descriptor


class BaseProjectParser(abc.ABC):
    """Base class for per-format project parsers."""

    project_format: ProjectFormat
    match_rules: tuple[MatchRule, ...]

    def __init__(self, skip_dirs: list[str] | None = None):
        self.skip_dirs = skip_dirs or []

    @abc.abstractmethod
    def read_raw(self, file_path: Path) -> RawTarget:
        """Extract the unnormalized target description of one project file."""

    def parse_file(self, file_path: Path) -> TargetDescriptor:
        return to_descriptor(self.read_raw(Path(file_path)), self.project_format)

    def find_projects(self, directory: Path) -> list[Path]:
        """Recursively find project files of this format."""
        return find_files(directory, self.match_rules, skip_dirs=self.skip_dirs)
