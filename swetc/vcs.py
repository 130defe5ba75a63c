"""Pass-through wrappers for the Team Foundation ``tf`` command."""

from __future__ import annotations

from pathlib import Path

from swetc.tools import ToolResult, run_tool


def tf_add(path: str | Path, tf: str = "tf") -> ToolResult:
    return run_tool([tf, "add", path])


def tf_checkout(path: str | Path, tf: str = "tf") -> ToolResult:
    return run_tool([tf, "checkout", path])


def tf_rename(source: str | Path, destination: str | Path, tf: str = "tf") -> ToolResult:
    return run_tool([tf, "rename", source, destination])


def tf_undo(path: str | Path, tf: str = "tf") -> ToolResult:
    return run_tool([tf, "undo", "/noprompt", path])
