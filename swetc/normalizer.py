"""Normalize raw, ecosystem-specific dependency tokens into target names."""

from __future__ import annotations

import re
from typing import Iterable

from swetc.models import ProjectFormat, RawTarget, TargetDescriptor, TargetKind

_MSVC_SEPARATORS = re.compile(r"[; \n]")

# CMake keywords that scope link items, never target names
_CMAKE_SCOPE_KEYWORDS = frozenset({"PRIVATE", "PUBLIC", "INTERFACE"})

_EXECUTABLE_KINDS = {"exe", "winexe", "application", "appcontainerexe"}
_SHARED_KINDS = {"library", "dll", "dynamiclibrary"}


def _split_msvc(tokens: str | Iterable[str]) -> list[str]:
    if isinstance(tokens, str):
        tokens = [tokens]
    parts: list[str] = []
    for token in tokens:
        parts.extend(_MSVC_SEPARATORS.split(token))
    return parts


def normalize_msvc_links(tokens: str | Iterable[str]) -> frozenset[str]:
    """Linker inputs: ``Foo.lib;bar.lib`` -> ``{"Foo", "bar"}``.

    Accepts the raw blob printed by msbuild or an already split list; each
    piece is split again on ``;``, space and newline.
    """
    names = set()
    for part in _split_msvc(tokens):
        part = part.strip()
        if part.endswith(".lib"):
            part = part[:-4]
        names.add(part)
    return frozenset(names)


def normalize_assembly_references(tokens: Iterable[str]) -> frozenset[str]:
    """Assembly references keep only the simple name before the first comma."""
    return frozenset(token.split(",", 1)[0].strip() for token in tokens)


def normalize_cmake_links(tokens: Iterable[str]) -> frozenset[str]:
    """``libfoo.so`` -> ``foo``; scope keywords are dropped."""
    names = set()
    for token in tokens:
        if token.startswith("lib") and token.endswith(".so"):
            token = token[3:-3]
        names.add(token)
    return frozenset(names - _CMAKE_SCOPE_KEYWORDS)


def target_kind(raw_kind: str) -> TargetKind:
    kind = raw_kind.strip().lower()
    if kind in _EXECUTABLE_KINDS:
        return TargetKind.EXECUTABLE
    if kind in _SHARED_KINDS:
        return TargetKind.SHARED_LIBRARY
    return TargetKind.STATIC_LIBRARY


_NORMALIZERS = {
    ProjectFormat.VCXPROJ: normalize_msvc_links,
    ProjectFormat.CSPROJ: normalize_assembly_references,
    ProjectFormat.CMAKE: normalize_cmake_links,
}


def to_descriptor(raw: RawTarget, project_format: ProjectFormat) -> TargetDescriptor:
    """Turn a collaborator's raw output into a ``TargetDescriptor``."""
    normalize = _NORMALIZERS[project_format]
    return TargetDescriptor(
        name=raw.name,
        kind=target_kind(raw.kind),
        dependencies=normalize(raw.tokens),
    )
