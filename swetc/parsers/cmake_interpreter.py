"""Interpret a CMake command-invocation list into a raw target description.

The interpreter is a fold: each invocation takes an immutable
``InterpreterState`` and returns a new one.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field, replace
from functools import reduce
from typing import Iterable, Mapping

from swetc.models import RawTarget

# (command name, expanded-later argument strings)
Invocation = tuple[str, tuple[str, ...]]

_VAR_REF = re.compile(r"\$\{([^${}]*)\}")
_MAX_EXPANSION_PASSES = 32

_SET_TERMINATORS = {"CACHE", "PARENT_SCOPE"}


@dataclass(frozen=True)
class InterpreterState:
    bindings: Mapping[str, str] = field(default_factory=dict)
    name: str = ""
    kind: str = ""
    tokens: tuple[str, ...] = ()


def expand(argument: str, bindings: Mapping[str, str]) -> str:
    """Expand ``${VAR}`` references, innermost first. Unknown variables are empty."""
    for _ in range(_MAX_EXPANSION_PASSES):
        expanded = _VAR_REF.sub(lambda m: bindings.get(m.group(1), ""), argument)
        if expanded == argument:
            break
        argument = expanded
    return argument


def _split_list(value: str) -> list[str]:
    return [v for v in value.split(";") if v]


def _set(state: InterpreterState, args: tuple[str, ...]) -> InterpreterState:
    if not args:
        return state
    var = expand(args[0], state.bindings)
    values: list[str] = []
    for arg in args[1:]:
        if arg in _SET_TERMINATORS:
            break
        values.append(expand(arg, state.bindings))
    bindings = dict(state.bindings)
    if values:
        bindings[var] = ";".join(values)
    else:
        bindings.pop(var, None)
    return replace(state, bindings=bindings)


def _list(state: InterpreterState, args: tuple[str, ...]) -> InterpreterState:
    if len(args) < 2 or args[0].upper() != "APPEND":
        return state
    var = expand(args[1], state.bindings)
    items = _split_list(state.bindings.get(var, ""))
    for arg in args[2:]:
        items.extend(_split_list(expand(arg, state.bindings)))
    return replace(state, bindings={**state.bindings, var: ";".join(items)})


def _add_executable(state: InterpreterState, args: tuple[str, ...]) -> InterpreterState:
    if not args or "IMPORTED" in args[1:] or "ALIAS" in args[1:]:
        return state
    return replace(state, name=expand(args[0], state.bindings), kind="exe")


def _add_library(state: InterpreterState, args: tuple[str, ...]) -> InterpreterState:
    if not args or "IMPORTED" in args[1:] or "ALIAS" in args[1:]:
        return state
    shared = any(arg.upper() == "SHARED" for arg in args[1:])
    return replace(
        state,
        name=expand(args[0], state.bindings),
        kind="library" if shared else "staticlibrary",
    )


def _target_link_libraries(state: InterpreterState, args: tuple[str, ...]) -> InterpreterState:
    tokens = list(state.tokens)
    for arg in args[1:]:
        tokens.extend(_split_list(expand(arg, state.bindings)))
    return replace(state, tokens=tuple(tokens))


_COMMANDS = {
    "SET": _set,
    "LIST": _list,
    "ADD_EXECUTABLE": _add_executable,
    "ADD_LIBRARY": _add_library,
    "TARGET_LINK_LIBRARIES": _target_link_libraries,
}


def step(state: InterpreterState, invocation: Invocation) -> InterpreterState:
    command, args = invocation
    handler = _COMMANDS.get(command.upper())
    if handler is None:
        return state
    return handler(state, tuple(args))


def interpret(invocations: Iterable[Invocation]) -> InterpreterState:
    return reduce(step, invocations, InterpreterState())


def to_raw_target(state: InterpreterState) -> RawTarget:
    return RawTarget(name=state.name, kind=state.kind, tokens=state.tokens)
