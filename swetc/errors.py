"""Exception types raised by swetc."""

from __future__ import annotations


class SwetcError(Exception):
    """Base class for swetc errors."""


class ProjectParseError(SwetcError):
    """A project file could not be reduced to a target descriptor."""

    def __init__(self, path: str, reason: str):
        super().__init__(f"{path}: {reason}")
        self.path = path
        self.reason = reason


class NoTargetDeclared(ProjectParseError):
    """The project file parsed fine but declares no build target."""


class ToolInvocationError(SwetcError):
    """An external tool could not be started."""

    def __init__(self, tool: str, reason: str):
        super().__init__(f"{tool}: {reason}")
        self.tool = tool
        self.reason = reason
