"""Run external command-line tools (msbuild, tf) without raising on a missing binary."""

from __future__ import annotations

import logging
import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import Sequence

from swetc.errors import ToolInvocationError

logger = logging.getLogger(__name__)


@dataclass
class ToolResult:
    """Outcome of one tool invocation.

    ``error`` is set when the tool could not be started at all; in that case
    the other fields are empty.
    """
    argv: tuple[str, ...]
    returncode: int = 0
    stdout: str = ""
    stderr: str = ""
    error: ToolInvocationError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None and self.returncode == 0


def run_tool(argv: Sequence[str], cwd: Path | None = None) -> ToolResult:
    argv = tuple(str(a) for a in argv)
    logger.debug("running: %s", " ".join(argv))
    try:
        proc = subprocess.run(
            argv,
            cwd=cwd,
            capture_output=True,
            text=True,
            errors="replace",
        )
    except FileNotFoundError:
        return ToolResult(argv=argv, error=ToolInvocationError(argv[0], "not found"))
    except OSError as e:
        return ToolResult(argv=argv, error=ToolInvocationError(argv[0], str(e)))

    if proc.returncode != 0:
        logger.info("%s exited with status %d", argv[0], proc.returncode)
    return ToolResult(
        argv=argv,
        returncode=proc.returncode,
        stdout=proc.stdout or "",
        stderr=proc.stderr or "",
    )
