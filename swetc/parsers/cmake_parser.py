"""CMakeLists.txt parser built on the tree-sitter ``cmake`` grammar."""

from __future__ import annotations

import re
from pathlib import Path

from swetc.errors import NoTargetDeclared, ProjectParseError
from swetc.models import MatchRule, ProjectFormat, RawTarget
from swetc.parsers.base import BaseProjectParser
from swetc.parsers.cmake_interpreter import Invocation, interpret, to_raw_target

try:
    from tree_sitter_language_pack import get_parser
except ImportError as _err:
    raise ImportError(
        "tree-sitter-language-pack is required. Install with: "
        "pip install tree-sitter-language-pack"
    ) from _err

_BRACKET_RE = re.compile(r"^\[(=*)\[(.*)\]\1\]$", re.DOTALL)

# Definitions are not executed where they appear
_SKIPPED_BLOCKS = {"function_def", "macro_def"}


def _argument_text(node) -> str:
    text = node.text.decode("utf-8", errors="replace")
    kind = node.children[0].type if node.children else ""
    if kind == "quoted_argument":
        return text[1:-1]
    if kind == "bracket_argument":
        m = _BRACKET_RE.match(text)
        if m:
            return m.group(2).lstrip("\n")
    return text


def _collect_arguments(node, out: list[str]) -> None:
    for child in node.children:
        if child.type == "argument":
            out.append(_argument_text(child))
        else:
            _collect_arguments(child, out)


def _walk(node, out: list[Invocation]) -> None:
    if node.type in _SKIPPED_BLOCKS:
        return
    if node.type == "normal_command":
        name_node = node.children[0] if node.children else None
        if name_node is not None and name_node.type == "identifier":
            args: list[str] = []
            _collect_arguments(node, args)
            out.append((name_node.text.decode("utf-8"), tuple(args)))
        return
    for child in node.children:
        _walk(child, out)


class CMakeParser(BaseProjectParser):
    """Reads the target declared by a CMakeLists.txt."""

    project_format = ProjectFormat.CMAKE
    match_rules = (MatchRule.wildcard("CMakeLists.txt"),)

    def parse_invocations(self, source: bytes) -> list[Invocation]:
        """List every command invocation in ``source`` in document order."""
        # One parser per call; parse_file may run on worker threads
        tree = get_parser("cmake").parse(source)
        if tree.root_node.has_error:
            raise ValueError("syntax error in CMake script")
        invocations: list[Invocation] = []
        _walk(tree.root_node, invocations)
        return invocations

    def read_raw(self, file_path: Path) -> RawTarget:
        path = str(file_path)
        try:
            invocations = self.parse_invocations(Path(file_path).read_bytes())
        except (OSError, ValueError) as e:
            raise ProjectParseError(path, str(e)) from e

        state = interpret(invocations)
        if not state.name or not state.kind:
            raise NoTargetDeclared(path, "no add_executable/add_library")
        return to_raw_target(state)
