# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
from __future__ import annotations

import pytest

from slicejson.parser import SliceSyntaxError, parse_slice


def _const_string(literal: str) -> str:
	doc = parse_slice('module M { const string S = ' + literal + '; }')
	return doc.modules[0].definitions[0].value.value


@pytest.mark.parametrize(
	("literal", "expected"),
	[
		(r'"\u20ac"', "€"),
		('"€"', "€"),
		(r'"\U0001F600"', "\U0001F600"),
		(r'"\xff"', "\xff"),
		(r'"\101"', "A"),
		('"café"', "café"),
		(r'"a\\b"', "a\\b"),
		(r'"say \"hi\""', 'say "hi"'),
		(r'"tab\there\n"', "tab\there\n"),
		(r'"\?"', "?"),
	],
)
def test_string_escapes(literal: str, expected: str):
	assert _const_string(literal) == expected


def test_escape_out_of_range_is_a_syntax_error():
	with pytest.raises(SliceSyntaxError, match="invalid string literal"):
		_const_string(r'"\xFFFFFFFFFF"')


def test_metadata_strings_are_decoded_too():
	doc = parse_slice(r'["js:name:été"] module M { }')
	assert doc.modules[0].metadata == ["js:name:été"]
