"""Project index, dependency graph and cycle analysis."""

from __future__ import annotations

from swetc.analysis.cycles import cycle_edges, find_cycles
from swetc.analysis.dependency_graph import build_dependency_graph
from swetc.analysis.graph_models import (
    AnalysisResult,
    Cycle,
    DependencyGraph,
    ProjectIndex,
    TargetIndex,
)
from swetc.analysis.project_index import build_project_index, build_target_index

__all__ = [
    "AnalysisResult",
    "Cycle",
    "DependencyGraph",
    "ProjectIndex",
    "TargetIndex",
    "build_project_index",
    "build_target_index",
    "build_dependency_graph",
    "cycle_edges",
    "find_cycles",
]
