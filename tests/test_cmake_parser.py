"""Tests for the tree-sitter backed CMakeLists.txt parser."""

from pathlib import Path

import pytest

from swetc.errors import NoTargetDeclared
from swetc.models import TargetKind

FIXTURES = Path(__file__).parent / "fixtures" / "cmake_tree"

# Only run if tree-sitter is installed
try:
    from swetc.parsers.cmake_parser import CMakeParser
    HAS_TREESITTER = True
except ImportError:
    HAS_TREESITTER = False

pytestmark = pytest.mark.skipif(not HAS_TREESITTER, reason="tree-sitter not installed")


@pytest.fixture
def parser():
    return CMakeParser()


def test_invocations_in_order(parser):
    invocations = parser.parse_invocations(b"set(A 1)\nadd_executable(app main.cpp)\n")
    assert invocations == [("set", ("A", "1")), ("add_executable", ("app", "main.cpp"))]


def test_quoted_and_bracket_arguments(parser):
    source = b'set(MSG "hello world")\nset(RAW [[raw text]])\n'
    invocations = parser.parse_invocations(source)
    assert invocations[0] == ("set", ("MSG", "hello world"))
    assert invocations[1] == ("set", ("RAW", "raw text"))


def test_commands_inside_if_blocks(parser):
    source = b"if(WIN32)\n  add_library(win STATIC w.cpp)\nendif()\n"
    names = [name for name, _ in parser.parse_invocations(source)]
    assert "add_library" in names


def test_function_bodies_not_executed(parser):
    source = b"function(helper)\n  add_executable(bogus b.cpp)\nendfunction()\n"
    assert parser.parse_invocations(source) == []


def test_executable_with_variables(parser):
    desc = parser.parse_file(FIXTURES / "app" / "CMakeLists.txt")
    assert desc.name == "sample_app"
    assert desc.kind is TargetKind.EXECUTABLE
    assert desc.dependencies == {"core", "util", "pthread"}


def test_shared_library_with_so_dependency(parser):
    desc = parser.parse_file(FIXTURES / "core" / "CMakeLists.txt")
    assert desc.name == "core"
    assert desc.kind is TargetKind.SHARED_LIBRARY
    assert desc.dependencies == {"util"}


def test_static_library_with_list_append(parser):
    desc = parser.parse_file(FIXTURES / "util" / "CMakeLists.txt")
    assert desc.kind is TargetKind.STATIC_LIBRARY
    assert desc.dependencies == {"core", "ws2_32"}


def test_top_level_script_declares_no_target(parser):
    with pytest.raises(NoTargetDeclared):
        parser.parse_file(FIXTURES / "CMakeLists.txt")


def test_find_projects(parser):
    found = parser.find_projects(FIXTURES)
    assert len(found) == 4
    assert all(p.name == "CMakeLists.txt" for p in found)
