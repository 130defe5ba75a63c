"""Dependency graph builder — resolves declared dependency names to projects."""

from __future__ import annotations

from swetc.analysis.graph_models import DependencyGraph, ProjectIndex, TargetIndex
from swetc.analysis.project_index import build_target_index


def build_dependency_graph(
    index: ProjectIndex,
    targets: TargetIndex | None = None,
) -> DependencyGraph:
    """Build the project -> {direct dependency projects} map.

    Names without an owning project in ``index`` are external dependencies
    and are left out of the graph.
    """
    if targets is None:
        targets = build_target_index(index)

    graph: DependencyGraph = {}
    for path, descriptor in index.projects.items():
        graph[path] = {
            targets[name] for name in descriptor.dependencies if name in targets
        }
    return graph
