"""Shared string cleaning used by the value filter."""

from __future__ import annotations

import codecs
import re

from data_extractor.logging_config import get_logger

logger = get_logger(__name__)

# Unicode general category Cc:
# C0 controls (\x00-\x1f), DEL (\x7f), C1 controls (\x80-\x9f).
CONTROL_CHARS_RE = re.compile(r"[\x00-\x1f\x7f-\x9f]")

# Lone surrogates are the only code points a Unicode codec cannot encode.
_SURROGATES_RE = re.compile("[\ud800-\udfff]")

UNICODE_REPLACEMENT = "\ufffd"

# Exercises both replacement paths a codec must support for repair to work
_ENCODING_CHECK_TEXT = "a..b\x01\u00e9\u2603\ud800"
_ENCODING_CHECK_BYTES = b"a..b\x01\xff\xfe"


def resolve_encoding(encoding: str) -> str:
    """Return the normalized codec name for ``encoding``.

    Raises ``LookupError`` for unknown codecs and for codecs that cannot
    round-trip text with replacement (bytes-to-bytes codecs such as ``hex``,
    text transforms such as ``rot13``, strict-only codecs such as ``idna``).
    """
    info = codecs.lookup(encoding)
    if not getattr(info, "_is_text_encoding", True):
        raise LookupError(f"{encoding!r} is not a text encoding")
    try:
        _ENCODING_CHECK_TEXT.encode(info.name, errors="replace").decode(info.name, errors="replace")
        _ENCODING_CHECK_BYTES.decode(info.name, errors="replace")
    except (UnicodeError, LookupError, TypeError, ValueError) as exc:
        raise LookupError(f"{encoding!r} cannot be used to repair text: {exc}") from None
    return info.name


def is_unicode_encoding(encoding: str) -> bool:
    """Return True for the UTF family of codecs (normalized codec names)."""
    return encoding.startswith("utf")


def repair_encoding(value: str | bytes | bytearray, encoding: str) -> str:
    """Return ``value`` as text that is valid for ``encoding``.

    Byte strings are decoded with invalid sequences replaced by U+FFFD.
    Text that cannot be encoded is substituted with the codec's replacement
    character: U+FFFD for Unicode codecs, ``?`` for the rest.
    Never raises for an encoding accepted by :func:`resolve_encoding`.
    """
    if isinstance(value, (bytes, bytearray)):
        text = bytes(value).decode(encoding, errors="replace")
        if UNICODE_REPLACEMENT in text:
            logger.debug("encoding_repaired", encoding=encoding, source="bytes")
        return text

    if is_unicode_encoding(encoding):
        if not _SURROGATES_RE.search(value):
            return value
        logger.debug("encoding_repaired", encoding=encoding, source="str")
        return _SURROGATES_RE.sub(UNICODE_REPLACEMENT, value)

    try:
        value.encode(encoding)
    except UnicodeError:
        logger.debug("encoding_repaired", encoding=encoding, source="str")
        return value.encode(encoding, errors="replace").decode(encoding, errors="replace")
    return value


def strip_control_chars(value: str) -> str:
    """Strip all control characters from a string."""
    return CONTROL_CHARS_RE.sub("", value)


def clean_string(value: str | bytes | bytearray, encoding: str = "utf-8") -> str:
    """Repair ``value`` for ``encoding``, then strip control characters.

    Repair runs first so the control character scan only ever sees valid text.
    """
    return strip_control_chars(repair_encoding(value, encoding))
