"""Tests for addressing modes and join-key location."""

from __future__ import annotations

import pytest

from maptag.core.addressing import AddressingMode, locate_key
from maptag.core.exceptions import UnknownAddressingModeError
from maptag.schemas.metric import Metric, NamespaceElement, dynamic_element, new_namespace


# -- helpers -----------------------------------------------------------------


def _metric(*elements: NamespaceElement, **tags: str) -> Metric:
    return Metric(namespace=list(elements), tags=dict(tags))


def _named(name: str, value: str) -> NamespaceElement:
    return NamespaceElement(name=name, value=value)


# -- AddressingMode.parse ----------------------------------------------------


class TestParse:
    @pytest.mark.parametrize("value", ["tag", "ns_name", "ns_value"])
    def test_known_modes(self, value):
        assert AddressingMode.parse(value).value == value

    def test_enum_passthrough(self):
        assert AddressingMode.parse(AddressingMode.TAG) is AddressingMode.TAG

    def test_unknown_mode(self):
        with pytest.raises(UnknownAddressingModeError) as exc_info:
            AddressingMode.parse("label")
        assert exc_info.value.mode == "label"


# -- tag ---------------------------------------------------------------------


class TestTagMode:
    def test_tag_present(self):
        m = _metric(tagone="valueone")
        assert locate_key(m, AddressingMode.TAG, "tagone") == "valueone"

    def test_tag_absent(self):
        m = _metric(tagtwo="valuetwo")
        assert locate_key(m, AddressingMode.TAG, "tagone") is None

    def test_ignores_namespace(self):
        m = _metric(_named("tagone", "fromns"))
        assert locate_key(m, AddressingMode.TAG, "tagone") is None


# -- ns_name -----------------------------------------------------------------


class TestNamespaceNameMode:
    def test_named_element(self):
        m = _metric(*new_namespace("test"), _named("dynamic", "valuedynamic"))
        assert locate_key(m, AddressingMode.NS_NAME, "dynamic") == "valuedynamic"

    def test_last_match_wins(self):
        m = _metric(_named("host", "first"), _named("host", "second"))
        assert locate_key(m, AddressingMode.NS_NAME, "host") == "second"

    def test_no_named_element(self):
        m = _metric(*new_namespace("test", "dynamic", "pi"))
        assert locate_key(m, AddressingMode.NS_NAME, "dynamic") is None

    def test_dynamic_placeholder_value(self):
        m = _metric(dynamic_element("host", "host name"))
        assert locate_key(m, AddressingMode.NS_NAME, "host") == "*"


# -- ns_value ----------------------------------------------------------------


class TestNamespaceValueMode:
    def test_value_present_returns_reference_name(self):
        m = _metric(*new_namespace("test", "static", "namespace", "pi"))
        assert locate_key(m, AddressingMode.NS_VALUE, "namespace") == "namespace"

    def test_matches_dynamic_element_value(self):
        m = _metric(_named("dynamic", "valuedynamic"))
        assert locate_key(m, AddressingMode.NS_VALUE, "valuedynamic") == "valuedynamic"

    def test_value_absent(self):
        m = _metric(*new_namespace("test", "pi"))
        assert locate_key(m, AddressingMode.NS_VALUE, "namespace") is None

    def test_does_not_match_element_name(self):
        m = _metric(_named("namespace", "other"))
        assert locate_key(m, AddressingMode.NS_VALUE, "namespace") is None
