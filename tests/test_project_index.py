"""Tests for the project index and dependency graph builders."""

import pytest

from swetc.analysis import (
    ProjectIndex,
    build_dependency_graph,
    build_project_index,
    build_target_index,
    find_cycles,
)
from swetc.errors import NoTargetDeclared, ProjectParseError
from swetc.models import TargetDescriptor, TargetKind


def _desc(name, *deps, kind=TargetKind.STATIC_LIBRARY):
    return TargetDescriptor(name=name, kind=kind, dependencies=frozenset(deps))


def _index(**projects):
    return ProjectIndex(projects={f"/p/{key}": desc for key, desc in projects.items()})


class TestBuildProjectIndex:
    def test_parses_each_path(self, tmp_path):
        a = tmp_path / "a.proj"
        b = tmp_path / "b.proj"
        a.write_text("")
        b.write_text("")
        index = build_project_index([a, b], lambda p: _desc(p.stem))
        assert set(index.projects) == {str(a.resolve()), str(b.resolve())}
        assert index.failures == []

    def test_duplicate_paths_collapse(self, tmp_path):
        sub = tmp_path / "sub"
        sub.mkdir()
        f = sub / "x.proj"
        f.write_text("")
        calls = []

        def parse(p):
            calls.append(p)
            return _desc("x")

        index = build_project_index([f, sub / ".." / "sub" / "x.proj", str(f)], parse)
        assert len(index.projects) == 1
        assert len(calls) == 1

    def test_failure_does_not_abort_batch(self, tmp_path, caplog):
        good = tmp_path / "good.proj"
        bad = tmp_path / "bad.proj"

        def parse(p):
            if p.stem == "bad":
                raise ProjectParseError(str(p), "broken")
            return _desc(p.stem)

        index = build_project_index([bad, good], parse)
        assert list(index.projects) == [str(good.resolve())]
        assert len(index.failures) == 1
        assert index.failures[0].path == str(bad.resolve())
        assert str(bad.resolve()) in caplog.text

    def test_unexpected_exception_is_recorded(self, tmp_path):
        def parse(p):
            raise RuntimeError("boom")

        index = build_project_index([tmp_path / "x"], parse)
        assert index.projects == {}
        assert "boom" in index.failures[0].reason

    def test_no_target_is_a_failure(self, tmp_path):
        def parse(p):
            raise NoTargetDeclared(str(p), "no add_executable/add_library")

        index = build_project_index([tmp_path / "CMakeLists.txt"], parse)
        assert index.projects == {}
        assert len(index.failures) == 1

    def test_workers_preserve_order(self, tmp_path):
        paths = [tmp_path / f"p{i}.proj" for i in range(20)]
        index = build_project_index(paths, lambda p: _desc(p.stem), workers=4)
        assert list(index.projects) == [str(p.resolve()) for p in paths]


class TestTargetIndex:
    def test_maps_name_to_path(self):
        index = _index(a=_desc("liba"), b=_desc("libb"))
        assert build_target_index(index) == {"liba": "/p/a", "libb": "/p/b"}

    def test_last_write_wins(self):
        index = _index(first=_desc("dup"), second=_desc("dup"))
        assert build_target_index(index) == {"dup": "/p/second"}


class TestDependencyGraph:
    def test_resolves_names(self):
        index = _index(app=_desc("app", "core", kind=TargetKind.EXECUTABLE), core=_desc("core"))
        graph = build_dependency_graph(index)
        assert graph == {"/p/app": {"/p/core"}, "/p/core": set()}

    def test_unresolved_names_dropped(self):
        index = _index(app=_desc("app", "core", "pthread", "kernel32"), core=_desc("core"))
        graph = build_dependency_graph(index)
        assert graph["/p/app"] == {"/p/core"}

    def test_self_dependency_is_self_edge(self):
        index = _index(x=_desc("x", "x"))
        graph = build_dependency_graph(index)
        assert graph == {"/p/x": {"/p/x"}}
        assert find_cycles(graph) == [["/p/x"]]

    def test_duplicate_target_name_resolves_to_last_project(self):
        index = _index(a=_desc("a", "b1", "b2"), b1=_desc("b1"), b2=_desc("b1"))
        # both b1 and b2 declare "b1"; later one owns it, "b2" resolves nowhere
        graph = build_dependency_graph(index)
        assert graph["/p/a"] == {"/p/b2"}

    def test_explicit_target_index(self):
        index = _index(a=_desc("a", "b"), b=_desc("b"))
        graph = build_dependency_graph(index, {"b": "/p/b"})
        assert graph["/p/a"] == {"/p/b"}

    @pytest.mark.parametrize("deps,expected", [
        ((), set()),
        (("missing",), set()),
    ])
    def test_no_resolvable_deps(self, deps, expected):
        index = _index(a=_desc("a", *deps))
        assert build_dependency_graph(index)["/p/a"] == expected


def test_end_to_end_cycle_from_descriptors():
    index = _index(
        app=_desc("app", "core", kind=TargetKind.EXECUTABLE),
        core=_desc("core", "util", kind=TargetKind.SHARED_LIBRARY),
        util=_desc("util", "core"),
    )
    cycles = find_cycles(build_dependency_graph(index))
    assert cycles == [["/p/core", "/p/util"]]
