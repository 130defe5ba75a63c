"""Project parser registry."""

from __future__ import annotations

from swetc.models import AnalysisConfig, ProjectFormat
from swetc.parsers.base import BaseProjectParser
from swetc.parsers.msbuild_parser import CsprojParser, MsBuildProjectParser, VcxprojParser

# CMake support needs the tree-sitter grammar pack
_HAS_TREESITTER = False
try:
    from swetc.parsers.cmake_parser import CMakeParser
    _HAS_TREESITTER = True
except ImportError:
    CMakeParser = None  # type: ignore[misc,assignment]


def get_parser(config: AnalysisConfig) -> BaseProjectParser:
    """Build the parser for ``config.project_format``."""
    fmt = config.project_format
    if fmt is ProjectFormat.CMAKE:
        if not _HAS_TREESITTER:
            raise ValueError(
                "CMake parsing requires tree-sitter-language-pack. "
                "Install with: pip install tree-sitter-language-pack"
            )
        return CMakeParser(skip_dirs=config.skip_dirs)
    if fmt is ProjectFormat.VCXPROJ:
        return VcxprojParser(config.properties, msbuild=config.msbuild, skip_dirs=config.skip_dirs)
    if fmt is ProjectFormat.CSPROJ:
        return CsprojParser(config.properties, msbuild=config.msbuild, skip_dirs=config.skip_dirs)
    raise ValueError(f"No parser for format: {fmt}")


__all__ = [
    "BaseProjectParser",
    "MsBuildProjectParser",
    "VcxprojParser",
    "CsprojParser",
    "CMakeParser",
    "get_parser",
]
