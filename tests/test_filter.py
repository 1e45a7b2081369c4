"""Tests for the value filter."""

from __future__ import annotations

import datetime
from collections import OrderedDict, namedtuple
from decimal import Decimal

import pytest

from data_extractor.filter import Filter, filter_value


class TestFilterStrings:
    """Standalone strings are repaired and stripped of control characters."""

    def test_strips_control_characters(self):
        assert filter_value("Al\x07ice") == "Alice"

    @pytest.mark.parametrize("code", list(range(0x00, 0x20)) + [0x7F] + list(range(0x80, 0xA0)))
    def test_no_control_codepoint_survives(self, code):
        assert filter_value(f"a{chr(code)}b") == "ab"

    def test_clean_string_is_identity(self):
        value = "Plain text, with punctuation! 42 é日"
        assert filter_value(value) == value

    def test_idempotent(self):
        raw = "\x00x\x1by\x7fz\x85"
        once = filter_value(raw)
        assert filter_value(once) == once == "xyz"

    def test_invalid_bytes_do_not_raise(self):
        assert filter_value(b"\x01caf\xe9\x02") == "caf\ufffd"

    def test_lone_surrogate_replaced(self):
        assert filter_value("a\ud83d\x03b") == "a\ufffdb"

    def test_empty_string(self):
        assert filter_value("") == ""

    def test_only_control_characters(self):
        assert filter_value("\r\n\t") == ""


class TestFilterSequences:
    """Lists and tuples clean direct string elements only."""

    def test_list_elements_cleaned_in_order(self):
        assert filter_value(["a\x01", "b\x02", "c\x03"]) == ["a", "b", "c"]

    def test_list_length_preserved(self):
        raw = ["\x00", "x", 3, None]
        result = filter_value(raw)
        assert len(result) == len(raw)
        assert result == ["", "x", 3, None]

    def test_non_string_elements_untouched(self):
        when = datetime.date(2024, 1, 2)
        assert filter_value([1, 2.5, True, when]) == [1, 2.5, True, when]

    def test_nested_containers_not_sanitized(self):
        nested_list = ["in\x01ner"]
        nested_dict = {"k\x01": "v\x02"}
        result = filter_value(["out\x01er", nested_list, nested_dict])
        assert result[0] == "outer"
        assert result[1] is nested_list
        assert result[1] == ["in\x01ner"]
        assert result[2] is nested_dict

    def test_returns_new_list(self):
        raw = ["a\x01"]
        result = filter_value(raw)
        assert result is not raw
        assert raw == ["a\x01"]

    def test_tuple_stays_tuple(self):
        assert filter_value(("a\x01", 2)) == ("a", 2)

    def test_namedtuple_keeps_type(self):
        Point = namedtuple("Point", "label value")
        result = filter_value(Point("p\x01", 1))
        assert isinstance(result, Point)
        assert result == Point("p", 1)

    def test_byte_string_elements_decoded(self):
        assert filter_value([b"ab\x00c"]) == ["abc"]


class TestFilterMappings:
    """Mappings clean string keys and values, one level deep."""

    def test_keys_and_values_cleaned(self):
        assert filter_value({"k\x01": "v\x02", "other": 5}) == {"k": "v", "other": 5}

    def test_non_string_keys_untouched(self):
        assert filter_value({1: "a\x01", None: 2}) == {1: "a", None: 2}

    def test_nested_values_not_sanitized(self):
        inner = {"x\x01": "y\x02"}
        result = filter_value({"outer": inner, "list": ["z\x03"]})
        assert result["outer"] is inner
        assert result["list"] == ["z\x03"]

    def test_returns_plain_dict(self):
        result = filter_value(OrderedDict([("a\x01", 1)]))
        assert type(result) is dict
        assert result == {"a": 1}

    def test_input_mapping_not_mutated(self):
        raw = {"a\x01": "b\x02"}
        filter_value(raw)
        assert raw == {"a\x01": "b\x02"}

    def test_colliding_keys_last_entry_wins(self):
        """Distinct raw keys that clean to the same key: the later one in insertion order wins."""
        raw = {"name\x01": "first", "name": "second", "na\x02me": "third"}
        assert filter_value(raw) == {"name": "third"}

    def test_colliding_keys_order_matters(self):
        raw = {"name": "plain", "name\x00": "dirty"}
        assert filter_value(raw) == {"name": "dirty"}

    def test_collision_keeps_first_key_position(self):
        raw = {"a\x01": 1, "b": 2, "a": 3}
        assert list(filter_value(raw).items()) == [("a", 3), ("b", 2)]


class TestFilterPassThrough:
    """Everything that is not a string, sequence or mapping is returned as-is."""

    @pytest.mark.parametrize(
        "value",
        [0, -1, 3.14, Decimal("1.5"), True, False, None, datetime.datetime(2024, 1, 1, 12, 0)],
    )
    def test_scalars_unchanged(self, value):
        assert filter_value(value) is value

    def test_set_not_sanitized(self):
        value = {"a\x01"}
        assert filter_value(value) is value

    def test_arbitrary_object_unchanged(self):
        marker = object()
        assert filter_value(marker) is marker


class TestFilterClass:
    """Filter can be used as an object with a value() operation."""

    def test_value_method(self):
        assert Filter("x\x01").value() == "x"

    def test_value_can_be_called_repeatedly(self):
        f = Filter(["a\x01"])
        assert f.value() == f.value() == ["a"]

    def test_encoding_defaults_to_settings(self):
        assert Filter("x").encoding == "utf-8"

    def test_encoding_from_env(self, monkeypatch):
        monkeypatch.setenv("DATA_EXTRACTOR_DEFAULT_ENCODING", "ascii")
        assert Filter("x").encoding == "ascii"
        assert filter_value("café\x01") == "caf?"

    def test_explicit_encoding_normalized(self):
        assert Filter("x", encoding="UTF8").encoding == "utf-8"

    def test_unknown_encoding_fails_at_construction(self):
        with pytest.raises(LookupError):
            Filter("x", encoding="no-such-codec")

    @pytest.mark.parametrize("encoding", ["hex", "base64", "rot13", "idna"])
    def test_non_text_codec_fails_at_construction(self, encoding):
        with pytest.raises(LookupError):
            Filter("a..b\x01", encoding=encoding)
