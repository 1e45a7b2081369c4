"""Extractors: the ways a field value is pulled out of an object for indexing.

Every extractor implements ``value_for(obj)`` and returns the extracted value
after it has been through :class:`~data_extractor.filter.Filter`.
"""

from __future__ import annotations

import abc
import inspect
from typing import Any, Callable

from data_extractor.filter import filter_value
from data_extractor.utils.invocation import instance_eval_or_call
from data_extractor.utils.sanitize import resolve_encoding


class DataExtractor(abc.ABC):
    """Base class for extractors. Instances are immutable once constructed."""

    __slots__ = ("_encoding",)

    def __init__(self, encoding: str | None = None) -> None:
        # None defers to the configured default encoding at call time
        if encoding is not None:
            encoding = resolve_encoding(encoding)
        object.__setattr__(self, "_encoding", encoding)

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError(f"{type(self).__name__} is immutable")

    def __delattr__(self, name: str) -> None:
        raise AttributeError(f"{type(self).__name__} is immutable")

    @abc.abstractmethod
    def value_for(self, obj: Any) -> Any:
        """Return the sanitized value extracted from ``obj``."""
        ...

    def _filter(self, value: Any) -> Any:
        return filter_value(value, self._encoding)


def _is_accessor(value: Any, obj: Any) -> bool:
    """True when ``value`` is a method bound to ``obj`` or to its class."""
    if not inspect.isroutine(value):
        return False
    owner = getattr(value, "__self__", None)
    return owner is obj or owner is type(obj)


class AttributeExtractor(DataExtractor):
    """Extract by reading a named attribute, calling it if it is a method.

    The attribute is looked up on each call, not at construction. A missing
    attribute raises ``AttributeError`` to the caller.

    Only methods bound to the object (or its class) are called; callables
    stored as data, such as a class or a callback, are returned as they are.
    """

    __slots__ = ("_attribute_name",)

    def __init__(self, attribute_name: str, encoding: str | None = None) -> None:
        if not isinstance(attribute_name, str) or not attribute_name:
            raise ValueError("attribute_name must be a non-empty string")
        super().__init__(encoding)
        object.__setattr__(self, "_attribute_name", attribute_name)

    @property
    def attribute_name(self) -> str:
        return self._attribute_name

    def value_for(self, obj: Any) -> Any:
        value = getattr(obj, self._attribute_name)
        if _is_accessor(value, obj):
            value = value()
        return self._filter(value)

    def __repr__(self) -> str:
        return f"AttributeExtractor({self._attribute_name!r})"


class BlockExtractor(DataExtractor):
    """Extract by evaluating a function for the object.

    A function taking one argument is called with the object. A function
    taking none is evaluated with the object as its context, so bare names
    in its body resolve to the object's attributes::

        BlockExtractor(lambda post: post.title.upper())
        BlockExtractor(lambda: title.upper())

    Exceptions raised by the function propagate unchanged.
    """

    __slots__ = ("_fn",)

    def __init__(self, fn: Callable[..., Any], encoding: str | None = None) -> None:
        if not callable(fn):
            raise TypeError(f"BlockExtractor needs a callable, got {type(fn).__name__}")
        super().__init__(encoding)
        object.__setattr__(self, "_fn", fn)

    @property
    def fn(self) -> Callable[..., Any]:
        return self._fn

    def value_for(self, obj: Any) -> Any:
        return self._filter(instance_eval_or_call(obj, self._fn))

    def __repr__(self) -> str:
        name = getattr(self._fn, "__qualname__", None) or repr(self._fn)
        return f"BlockExtractor({name})"


ComputationExtractor = BlockExtractor


class ConstantExtractor(DataExtractor):
    """Extract the same value for every object.

    The stored value is kept as given and filtered again on every call,
    so a mutable constant is never modified in place.
    """

    __slots__ = ("_value",)

    def __init__(self, value: Any, encoding: str | None = None) -> None:
        super().__init__(encoding)
        object.__setattr__(self, "_value", value)

    @property
    def value(self) -> Any:
        return self._value

    def value_for(self, obj: Any) -> Any:
        return self._filter(self._value)

    def __repr__(self) -> str:
        return f"ConstantExtractor({self._value!r})"
