# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

import json
import logging

import pytest

from djclient.errors import TreeCoercionError
from djclient.http.models import HttpResponse
from djclient.tree import (
    check_django_error,
    error_tree,
    parse_property_tree,
    ptree_has_child,
    ptree_vector,
)


def test_parse_property_tree_keeps_object_order():
    tree = parse_property_tree(HttpResponse(code=200, body=b'{"z": 1, "a": {"b": 2}}'), "http://x")
    assert list(tree) == ["z", "a"]
    assert tree["a"] == {"b": 2}


def test_parse_property_tree_error_tree_for_non_200(caplog):
    with caplog.at_level(logging.ERROR, logger="djclient.tree"):
        tree = parse_property_tree(HttpResponse(code=403, body=b'{"a": 1}'), "http://x/y")
    assert tree == error_tree("Status 403 when getting http://x/y")
    assert "received non-OK code 403" in caplog.text


def test_parse_property_tree_reraises_invalid_utf8():
    with pytest.raises(UnicodeDecodeError):
        parse_property_tree(HttpResponse(code=200, body=b"\xff\xfe\xfa"), "http://x")


def test_parse_property_tree_reraises_empty_body():
    with pytest.raises(json.JSONDecodeError):
        parse_property_tree(HttpResponse(code=200, body=b""), "http://x")


def test_ptree_has_child():
    tree = {"a": None, "b": {"c": 1}}
    assert ptree_has_child(tree, "a") is True
    assert ptree_has_child(tree, "b") is True
    assert ptree_has_child(tree, "c") is False
    assert ptree_has_child([1, 2], "0") is False
    assert ptree_has_child("scalar", "s") is False


def test_check_django_error_clean_tree():
    assert check_django_error({"a": 1}) is False
    assert check_django_error([{"error": "nested"}]) is False


def test_check_django_error_null_tree(caplog):
    with caplog.at_level(logging.ERROR, logger="djclient.tree"):
        assert check_django_error(None) is True
    assert "JSON Error: null property tree" in caplog.text


def test_check_django_error_prefers_info_traceback(caplog):
    tree = {"djerror": "second", "error": "third", "info": "first", "traceback": "Traceback (most recent call last)"}
    with caplog.at_level(logging.ERROR, logger="djclient.tree"):
        assert check_django_error(tree) is True
    messages = [record.getMessage() for record in caplog.records]
    assert messages == ["Django error: first", "    traceback: Traceback (most recent call last)"]


def test_check_django_error_info_without_traceback_falls_through(caplog):
    with caplog.at_level(logging.ERROR, logger="djclient.tree"):
        assert check_django_error({"info": "only", "djerror": "dj"}) is True
    assert [record.getMessage() for record in caplog.records] == ["Django error: dj"]


def test_check_django_error_plain_error(caplog):
    with caplog.at_level(logging.ERROR, logger="djclient.tree"):
        assert check_django_error({"error": {"code": 7}}) is True
    assert [record.getMessage() for record in caplog.records] == ['HTTP Error: {"code": 7}']


def test_ptree_vector_array_of_ints():
    out: list[int] = []
    tree = json.loads("[1,2,3]")
    assert ptree_vector(tree, out, int) == 3
    assert out == [1, 2, 3]


def test_ptree_vector_appends_and_uses_mapping_order():
    out = ["existing"]
    assert ptree_vector({"b": 2, "a": 1}, out) == 2
    assert out == ["existing", "2", "1"]


def test_ptree_vector_scalar_or_empty_tree():
    out: list[str] = []
    assert ptree_vector([], out) == 0
    assert ptree_vector("scalar", out) == 0
    assert out == []


def test_ptree_vector_rejects_uncoercible_values():
    out: list[int] = []
    with pytest.raises(TreeCoercionError):
        ptree_vector([1, "two", 3], out, int)
    with pytest.raises(ValueError):
        ptree_vector([[1], [2]], out, int)
    assert out == []


def test_ptree_vector_text_keeps_json_spelling():
    out: list[str] = []
    assert ptree_vector(["a", True, None, 1.5, 2], out) == 5
    assert out == ["a", "true", "null", "1.5", "2"]


@pytest.mark.parametrize("values", [[1.5, 2.9], [True, 2], [1, None]])
def test_ptree_vector_int_rejects_lossy_values(values):
    out: list[int] = []
    with pytest.raises(TreeCoercionError):
        ptree_vector(values, out, int)
    assert out == []


def test_ptree_vector_int_accepts_whole_floats_and_digit_strings():
    out: list[int] = []
    assert ptree_vector([1.0, "7", 3], out, int) == 3
    assert out == [1, 7, 3]


def test_ptree_vector_float_rejects_booleans():
    with pytest.raises(TreeCoercionError):
        ptree_vector([1.5, False], [], float)
