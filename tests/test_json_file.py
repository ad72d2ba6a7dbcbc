from __future__ import annotations

import json

import pytest

from dino.errors import StoreCorruptError
from dino.json_file import dump_tree, is_scalar, parse_tree


@pytest.mark.parametrize("raw", ["", "   ", "\n\t"])
def test_blank_text_parses_as_empty(raw):
    assert parse_tree(raw) == {}


def test_parse_nested_object():
    assert parse_tree('{"a": "1", "n": {"b": "2"}}') == {"a": "1", "n": {"b": "2"}}


@pytest.mark.parametrize("raw", ["{", "null", '"text"', "[]", "12"])
def test_parse_rejects_non_objects(raw):
    with pytest.raises(StoreCorruptError):
        parse_tree(raw)


def test_dump_is_sorted_and_newline_terminated():
    text = dump_tree({"b": "2", "a": "1"})
    assert text.endswith("\n")
    assert text.index('"a"') < text.index('"b"')
    assert json.loads(text) == {"a": "1", "b": "2"}


def test_dump_keeps_non_ascii():
    assert "ü" in dump_tree({"k": "über"}, indent=None)


def test_is_scalar():
    assert is_scalar("x") and is_scalar(1) and is_scalar(1.0) and is_scalar(True)
    assert not is_scalar(None)
    assert not is_scalar({})
