# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
from __future__ import annotations

import json

from slicejson.parser import parse_slice


def test_to_dict_is_json_serialisable_and_tagged():
	doc = parse_slice(
		"""
#include <Ice/Identity.ice>
module Demo
{
    struct Pair { Ice::Identity first; optional(3) string second; }
}
"""
	)
	data = doc.to_dict()
	json.dumps(data)

	assert data["includes"] == ["Ice/Identity"]
	assert data["pragmaOnce"] is False
	module = data["modules"][0]
	assert module["kind"] == "module"
	assert module["name"] == "Demo"
	assert module["loc"]["line"] == 3

	pair = module["definitions"][0]
	assert pair["kind"] == "struct"
	assert [m["name"] for m in pair["members"]] == ["first", "second"]
	second = pair["members"][1]
	assert second["kind"] == "dataMember"
	assert second["tag"] == 3
	assert second["type"] == {"kind": "type", "name": "string", "optional": False, "proxy": False}
	assert second["loc"]["line"] == 5
	assert "loc" not in second["type"]
