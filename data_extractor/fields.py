"""Named field definitions and the extractor chosen for each."""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from pathlib import Path
from types import MappingProxyType
from typing import Any, Callable

import yaml

from data_extractor.config.loader import get_settings
from data_extractor.extractors import (
    AttributeExtractor,
    BlockExtractor,
    ConstantExtractor,
    DataExtractor,
)
from data_extractor.logging_config import get_logger

logger = get_logger(__name__)

_UNSET: Any = object()

# Keys a declarative field definition may use
_DEFINITION_KEYS = frozenset({"attribute", "constant", "encoding"})


def extractor_for(
    name: str,
    attribute: str | None = None,
    fn: Callable[..., Any] | None = None,
    constant: Any = _UNSET,
    encoding: str | None = None,
) -> DataExtractor:
    """Pick the extractor for a field.

    A constant wins, then a function; otherwise the field reads the attribute
    ``attribute`` (defaulting to the field name). Giving more than one
    source is an error.
    """
    if not isinstance(name, str) or not name:
        raise ValueError("Field name must be a non-empty string")

    given = [
        source
        for source, present in (
            ("attribute", attribute is not None),
            ("fn", fn is not None),
            ("constant", constant is not _UNSET),
        )
        if present
    ]
    if len(given) > 1:
        raise ValueError(f"Field {name!r} declares more than one value source: {', '.join(given)}")

    if constant is not _UNSET:
        return ConstantExtractor(constant, encoding=encoding)
    if fn is not None:
        return BlockExtractor(fn, encoding=encoding)
    return AttributeExtractor(attribute or name, encoding=encoding)


class FieldSet:
    """Ordered, read-only mapping of field name to extractor."""

    __slots__ = ("_extractors",)

    def __init__(self, extractors: Mapping[str, DataExtractor]) -> None:
        for name, extractor in extractors.items():
            if not isinstance(extractor, DataExtractor):
                raise TypeError(f"Field {name!r} is not a DataExtractor: {extractor!r}")
        object.__setattr__(self, "_extractors", MappingProxyType(dict(extractors)))

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError("FieldSet is read-only")

    def __delattr__(self, name: str) -> None:
        raise AttributeError("FieldSet is read-only")

    @classmethod
    def from_mapping(cls, definitions: Mapping[str, Any]) -> FieldSet:
        """Build a field set from declarative definitions.

        Each definition is empty/None (read the attribute named like the
        field), ``{"attribute": name}`` or ``{"constant": value}``, with an
        optional ``encoding``.
        """
        if not isinstance(definitions, Mapping):
            raise ValueError(f"Field definitions must be a mapping, got {type(definitions).__name__}")

        extractors: dict[str, DataExtractor] = {}
        for name, definition in definitions.items():
            definition = definition or {}
            if not isinstance(definition, Mapping):
                raise ValueError(f"Definition of field {name!r} must be a mapping")
            unknown = set(definition) - _DEFINITION_KEYS
            if unknown:
                raise ValueError(f"Field {name!r} has unknown keys: {', '.join(sorted(unknown))}")
            extractors[name] = extractor_for(
                name,
                attribute=definition.get("attribute"),
                constant=definition.get("constant", _UNSET),
                encoding=definition.get("encoding"),
            )
        return cls(extractors)

    @classmethod
    def from_yaml(cls, path: str | Path) -> FieldSet:
        """Load field definitions from the ``fields`` key of a YAML file."""
        path = Path(path)
        with open(path, encoding="utf-8") as f:
            document = yaml.safe_load(f) or {}
        if not isinstance(document, Mapping):
            raise ValueError(f"{path} must contain a mapping")
        field_set = cls.from_mapping(document.get("fields") or {})
        logger.info("field_set_loaded", path=str(path), fields=len(field_set))
        return field_set

    @property
    def names(self) -> tuple[str, ...]:
        return tuple(self._extractors)

    def __getitem__(self, name: str) -> DataExtractor:
        return self._extractors[name]

    def __contains__(self, name: object) -> bool:
        return name in self._extractors

    def __iter__(self) -> Iterator[str]:
        return iter(self._extractors)

    def __len__(self) -> int:
        return len(self._extractors)

    def __repr__(self) -> str:
        return f"FieldSet({dict(self._extractors)!r})"

    def extract(self, obj: Any) -> dict[str, Any]:
        """Return every field's sanitized value for ``obj``, in declaration order.

        Extractor errors propagate; no partial result is returned.
        """
        return {name: extractor.value_for(obj) for name, extractor in self._extractors.items()}


def load_field_set(path: str | Path | None = None) -> FieldSet:
    """Load a field set from ``path``, or from the configured ``fields_file``."""
    if path is None:
        path = get_settings().fields_file
    if not path:
        raise ValueError("No field definitions file given and DATA_EXTRACTOR_FIELDS_FILE is not set")
    return FieldSet.from_yaml(path)
