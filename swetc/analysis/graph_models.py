"""Data models for the project dependency graph."""

from __future__ import annotations

from dataclasses import dataclass, field

from swetc.models import ParseFailure, TargetDescriptor

TargetIndex = dict[str, str]  # target name -> project path
DependencyGraph = dict[str, set[str]]  # project path -> {project paths}
Cycle = list[str]  # [n0, n1, ..., nk] means n0 -> n1 -> ... -> nk -> n0


@dataclass
class ProjectIndex:
    projects: dict[str, TargetDescriptor] = field(default_factory=dict)
    failures: list[ParseFailure] = field(default_factory=list)


@dataclass
class AnalysisResult:
    index: ProjectIndex
    targets: TargetIndex
    graph: DependencyGraph
    cycles: list[Cycle] = field(default_factory=list)
