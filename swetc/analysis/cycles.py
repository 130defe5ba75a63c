"""Cycle enumerator — every distinct elementary cycle of a dependency graph.

A DFS runs from every node (not only unvisited ones); whenever a successor is
already on the current path the closing part of the path is a cycle. The same
cycle is found once per start node on it, so results are deduplicated by
their directed edge set::

    {a: {b}, b: {c}, c: {a}}
    raw:    [a, b, c]  [b, c, a]  [c, a, b]
    edges:  {(a, b), (b, c), (c, a)}  (identical for all three)
    result: [[a, b, c]]

Worst case is exponential in dense graphs; there is no size or depth limit.
"""

from __future__ import annotations

from typing import Hashable, Iterable, Iterator, Mapping

from swetc.analysis.graph_models import Cycle

_DONE = object()


def cycle_edges(cycle: Iterable[Hashable]) -> frozenset[tuple]:
    """The directed edges of a cycle, including the closing edge."""
    nodes = list(cycle)
    return frozenset(zip(nodes, nodes[1:] + nodes[:1]))


def _node_key(node: Hashable) -> tuple:
    # same-type nodes compare naturally; mixed types group by type name
    return type(node).__name__, node


def canonical_rotation(cycle: list) -> list:
    """Rotate a cycle to start at its smallest node."""
    if not cycle:
        return []
    i = cycle.index(min(cycle, key=_node_key))
    return cycle[i:] + cycle[:i]


def cycles_from(start: Hashable, graph: Mapping[Hashable, Iterable[Hashable]]) -> Iterator[list]:
    """Yield every raw cycle reachable by a DFS that starts at ``start``."""
    path = [start]
    position = {start: 0}
    stack = [iter(graph.get(start, ()))]

    while stack:
        succ = next(stack[-1], _DONE)
        if succ is _DONE:
            stack.pop()
            del position[path.pop()]
            continue

        i = position.get(succ)
        if i is not None:
            yield path[i:]
        else:
            position[succ] = len(path)
            path.append(succ)
            stack.append(iter(graph.get(succ, ())))


def find_cycles(graph: Mapping[Hashable, Iterable[Hashable]]) -> list[Cycle]:
    """Return one representative per distinct elementary cycle in ``graph``.

    Two cycles are the same when they have the same edge set. Each
    representative starts at its smallest node and the list is sorted.
    """
    distinct: dict[frozenset, list] = {}
    for start in graph:
        for raw in cycles_from(start, graph):
            distinct.setdefault(cycle_edges(raw), raw)
    return sorted(
        (canonical_rotation(c) for c in distinct.values()),
        key=lambda cycle: [_node_key(n) for n in cycle],
    )
