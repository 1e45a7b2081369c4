"""Type-dispatched cleaning of extracted field values."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from data_extractor.config.loader import get_settings
from data_extractor.utils.sanitize import clean_string, resolve_encoding

_STRING_TYPES = (str, bytes, bytearray)


def _clean_if_string(value: Any, encoding: str) -> Any:
    if isinstance(value, _STRING_TYPES):
        return clean_string(value, encoding)
    return value


class Filter:
    """Strip control characters out of a raw extracted value.

    - strings (and byte strings) are repaired for the declared encoding,
      then stripped of Unicode ``Cc`` code points
    - lists and tuples get a new sequence whose direct string elements are
      cleaned
    - mappings get a new ``dict`` whose string keys and values are cleaned
    - anything else is returned as-is

    Containers nested inside a sequence or mapping are not descended into.
    ``value()`` never raises; an unknown or unusable ``encoding`` fails at
    construction with ``LookupError``.
    """

    __slots__ = ("_value", "_encoding")

    def __init__(self, value: Any, encoding: str | None = None) -> None:
        self._value = value
        self._encoding = resolve_encoding(encoding or get_settings().default_encoding)

    @property
    def encoding(self) -> str:
        return self._encoding

    def value(self) -> Any:
        value = self._value
        encoding = self._encoding

        if isinstance(value, _STRING_TYPES):
            return clean_string(value, encoding)

        if isinstance(value, list):
            return [_clean_if_string(item, encoding) for item in value]

        if isinstance(value, tuple):
            cleaned = [_clean_if_string(item, encoding) for item in value]
            # namedtuples keep their type
            if hasattr(value, "_make"):
                return value._make(cleaned)
            return tuple(cleaned)

        if isinstance(value, Mapping):
            cleaned_map: dict[Any, Any] = {}
            # Iterates in the mapping's own order, so when two keys clean to
            # the same key the later entry wins.
            for key, item in value.items():
                cleaned_map[_clean_if_string(key, encoding)] = _clean_if_string(item, encoding)
            return cleaned_map

        return value


def filter_value(value: Any, encoding: str | None = None) -> Any:
    """Functional form of ``Filter(value, encoding).value()``."""
    return Filter(value, encoding).value()
