"""Evaluate a user function against an object, either as context or as argument."""

from __future__ import annotations

import builtins
import inspect
import types
from typing import Any, Callable

_POSITIONAL_KINDS = (
    inspect.Parameter.POSITIONAL_ONLY,
    inspect.Parameter.POSITIONAL_OR_KEYWORD,
    inspect.Parameter.VAR_POSITIONAL,
)


def accepts_argument(fn: Callable[..., Any]) -> bool:
    """Return True if ``fn`` can take the object as a positional argument.

    Callables whose signature cannot be inspected are assumed to take one.
    """
    try:
        signature = inspect.signature(fn)
    except (TypeError, ValueError):
        return True
    return any(param.kind in _POSITIONAL_KINDS for param in signature.parameters.values())


class ObjectNamespace(dict):
    """Globals mapping that resolves names against an object, then a module.

    Lookups happen only when the running code loads a global, so names on
    branches that are never taken are never read from the object. Names
    found on neither fall through to builtins.
    """

    __slots__ = ("_obj", "_module_globals")

    def __init__(self, obj: Any, module_globals: dict[str, Any]) -> None:
        # Function objects read __builtins__ from the raw dict
        super().__init__(__builtins__=module_globals.get("__builtins__", builtins))
        self._obj = obj
        self._module_globals = module_globals

    def __getitem__(self, name: str) -> Any:
        if dict.__contains__(self, name) and name != "__builtins__":
            # assigned through a ``global`` statement during this call
            return dict.__getitem__(self, name)
        if name == "self":
            return self._obj
        try:
            return getattr(self._obj, name)
        except AttributeError:
            pass
        # KeyError here makes the interpreter fall back to builtins
        return self._module_globals[name]


def _bind_to_context(obj: Any, fn: types.FunctionType) -> types.FunctionType:
    """Copy ``fn`` with globals that resolve against ``obj`` before its module.

    The original function and its module globals are left untouched.
    """
    bound = types.FunctionType(
        fn.__code__, ObjectNamespace(obj, fn.__globals__), fn.__name__, fn.__defaults__, fn.__closure__
    )
    bound.__kwdefaults__ = fn.__kwdefaults__
    return bound


def instance_eval_or_call(obj: Any, fn: Callable[..., Any]) -> Any:
    """Evaluate ``fn`` for ``obj``.

    Functions that take a positional parameter are called with ``obj``.
    Zero-parameter plain functions are evaluated with ``obj`` as their
    context: free names they reference resolve to ``obj``'s attributes
    (``self`` resolves to ``obj``), falling back to the module globals, at
    the moment the function reads them.
    Other zero-parameter callables (builtins, partials, bound methods)
    cannot be rebound and are called with no arguments.

    Whatever ``fn`` raises propagates unchanged.
    """
    if accepts_argument(fn):
        return fn(obj)
    if isinstance(fn, types.FunctionType):
        return _bind_to_context(obj, fn)()
    return fn()
