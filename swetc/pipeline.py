"""Analysis pipeline: discover -> index -> resolve -> find cycles."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Callable

from swetc.analysis import (
    AnalysisResult,
    ProjectIndex,
    build_dependency_graph,
    build_project_index,
    build_target_index,
    find_cycles,
)
from swetc.discovery import projects_of_solution
from swetc.models import AnalysisConfig
from swetc.parsers import BaseProjectParser, get_parser

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[str, int, int], None]


def discover_projects(config: AnalysisConfig, parser: BaseProjectParser | None = None) -> list[Path]:
    """Project files for ``config``; a ``.sln`` source limits them to that solution."""
    parser = parser or get_parser(config)
    source = Path(config.source_dir)
    if source.is_file() and source.suffix.lower() == ".sln":
        return [
            p for p in projects_of_solution(source)
            if any(rule.matches(p.name) for rule in parser.match_rules)
        ]
    return parser.find_projects(source)


def run_index(config: AnalysisConfig, progress: ProgressCallback | None = None) -> ProjectIndex:
    """Stage 1-2: discover and parse project files."""
    parser = get_parser(config)

    if progress:
        progress("Discovering", 0, 1)
    paths = discover_projects(config, parser)
    if progress:
        progress("Discovering", 1, 1)
    logger.info("Found %d %s project file(s)", len(paths), config.project_format.value)

    if progress:
        progress("Parsing", 0, len(paths))
    index = build_project_index(paths, parser.parse_file, workers=config.workers)
    if progress:
        progress("Parsing", len(paths), len(paths))
    return index


def run_analysis(config: AnalysisConfig, progress: ProgressCallback | None = None) -> AnalysisResult:
    """Run the full analysis and return the graph and its cycles."""
    index = run_index(config, progress=progress)

    if progress:
        progress("Resolving", 0, 1)
    targets = build_target_index(index)
    graph = build_dependency_graph(index, targets)
    if progress:
        progress("Resolving", 1, 1)

    if progress:
        progress("Finding cycles", 0, 1)
    cycles = find_cycles(graph)
    if progress:
        progress("Finding cycles", 1, 1)

    return AnalysisResult(index=index, targets=targets, graph=graph, cycles=cycles)
