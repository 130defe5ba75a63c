"""Project index builder — one target descriptor per distinct project file."""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import Callable, Iterable

from swetc.analysis.graph_models import ProjectIndex, TargetIndex
from swetc.errors import NoTargetDeclared
from swetc.models import ParseFailure, TargetDescriptor

logger = logging.getLogger(__name__)

ParseFunction = Callable[[Path], TargetDescriptor]


def canonical_paths(paths: Iterable[str | Path]) -> list[Path]:
    """Resolve paths and drop duplicates, keeping first-seen order."""
    seen: dict[Path, None] = {}
    for p in paths:
        seen.setdefault(Path(p).resolve(), None)
    return list(seen)


def _try_parse(parse: ParseFunction, path: Path) -> TargetDescriptor | ParseFailure:
    try:
        return parse(path)
    except NoTargetDeclared as e:
        logger.debug("Skipping %s: %s", path, e.reason)
        return ParseFailure(str(path), e.reason)
    except Exception as e:
        logger.warning("Error parsing: %s (%s)", path, e)
        return ParseFailure(str(path), str(e))


def build_project_index(
    paths: Iterable[str | Path],
    parse: ParseFunction,
    workers: int = 1,
) -> ProjectIndex:
    """Parse every distinct project file; failures are recorded, never fatal."""
    unique = canonical_paths(paths)

    if workers > 1 and len(unique) > 1:
        with ThreadPoolExecutor(max_workers=workers) as pool:
            outcomes = list(pool.map(lambda p: _try_parse(parse, p), unique))
    else:
        outcomes = [_try_parse(parse, p) for p in unique]

    index = ProjectIndex()
    for path, outcome in zip(unique, outcomes):
        if isinstance(outcome, ParseFailure):
            index.failures.append(outcome)
        else:
            index.projects[str(path)] = outcome

    logger.info(
        "Indexed %d project(s), %d failure(s)",
        len(index.projects), len(index.failures),
    )
    return index


def build_target_index(index: ProjectIndex) -> TargetIndex:
    """Map target name -> declaring project. Later projects win on collision."""
    targets: TargetIndex = {}
    for path, descriptor in index.projects.items():
        previous = targets.get(descriptor.name)
        if previous is not None and previous != path:
            logger.debug(
                "Target %r declared by %s and %s; keeping the latter",
                descriptor.name, previous, path,
            )
        targets[descriptor.name] = path
    return targets
