# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
from __future__ import annotations

import asyncio
from pathlib import Path
from types import SimpleNamespace

import pytest

from slicejson.loader import (
	SliceNotFoundError,
	SliceParseError,
	load_closure,
	load_closure_sync,
	resolve_logical_name,
)


def _module(name: str, *includes: str) -> str:
	lines = [f"#include <{inc}.ice>" for inc in includes]
	lines.append(f"module {name} {{ }}")
	return "\n".join(lines) + "\n"


def test_end_to_end_include_is_followed(tmp_path: Path, write_slice):
	proj = tmp_path / "proj"
	path = write_slice(proj, "a/B", _module("B", "c/D"))
	write_slice(proj, "c/D", _module("D"))

	name = resolve_logical_name(str(path), [str(proj)])
	result = load_closure_sync([name], [str(proj)])

	assert list(result) == ["a/B", "c/D"]
	assert result["a/B"].parsed.includes == ["c/D"]
	assert result["c/D"].root_dir == str(proj)


def test_cycle_terminates_and_loads_each_once(tmp_path: Path, write_slice, counting_reader):
	a = write_slice(tmp_path, "A", _module("A", "B"))
	b = write_slice(tmp_path, "B", _module("B", "A"))

	result = asyncio.run(load_closure(["A"], [str(tmp_path)], reader=counting_reader))

	assert set(result) == {"A", "B"}
	assert counting_reader.reads_of(a) == 1
	assert counting_reader.reads_of(b) == 1


def test_self_include_is_harmless(tmp_path: Path, write_slice, counting_reader):
	a = write_slice(tmp_path, "A", _module("A", "A"))

	result = asyncio.run(load_closure(["A"], [str(tmp_path)], reader=counting_reader))

	assert list(result) == ["A"]
	assert counting_reader.reads_of(a) == 1


def test_fan_in_reads_shared_include_once(tmp_path: Path, write_slice, counting_reader):
	write_slice(tmp_path, "A", _module("A", "B"))
	write_slice(tmp_path, "C", _module("C", "B"))
	b = write_slice(tmp_path, "B", _module("B"))

	result = asyncio.run(load_closure(["A", "C"], [str(tmp_path)], reader=counting_reader))

	assert set(result) == {"A", "B", "C"}
	assert counting_reader.reads_of(b) == 1


def test_direct_and_included_request_share_one_load(tmp_path: Path, write_slice, counting_reader):
	write_slice(tmp_path, "A", _module("A", "B"))
	b = write_slice(tmp_path, "B", _module("B"))

	result = asyncio.run(load_closure(["A", "B", "B"], [str(tmp_path)], reader=counting_reader))

	assert set(result) == {"A", "B"}
	assert counting_reader.reads_of(b) == 1


def test_unreachable_files_are_never_loaded(tmp_path: Path, write_slice, counting_reader):
	write_slice(tmp_path, "A", _module("A"))
	lonely = write_slice(tmp_path, "Lonely", _module("Lonely"))

	result = asyncio.run(load_closure(["A"], [str(tmp_path)], reader=counting_reader))

	assert list(result) == ["A"]
	assert counting_reader.attempts[str(lonely)] == 0


def test_includes_resolve_across_roots(tmp_path: Path, write_slice):
	app = tmp_path / "app"
	lib = tmp_path / "lib"
	write_slice(app, "Main", _module("Main", "Ice/Identity", "util/Log"))
	write_slice(lib, "util/Log", _module("Log"))
	write_slice(lib, "Ice/Identity", _module("Ice"))

	result = load_closure_sync(["Main"], [str(app), str(lib)])

	assert result["Main"].root_dir == str(app)
	assert result["util/Log"].root_dir == str(lib)
	assert result["Ice/Identity"].root_dir == str(lib)


def test_parse_failure_in_include_fails_the_closure(tmp_path: Path, write_slice):
	write_slice(tmp_path, "A", _module("A", "B"))
	write_slice(tmp_path, "B", "module B {")

	with pytest.raises(SliceParseError) as excinfo:
		load_closure_sync(["A"], [str(tmp_path)])
	assert excinfo.value.logical_name == "B"


def test_missing_include_fails_the_closure(tmp_path: Path, write_slice):
	write_slice(tmp_path, "A", _module("A", "gone/Missing"))

	with pytest.raises(SliceNotFoundError) as excinfo:
		load_closure_sync(["A"], [str(tmp_path)])
	assert excinfo.value.logical_name == "gone/Missing"
	assert excinfo.value.included_from == "A"


def _fake_tree(graph: dict[str, list[str]], failing: set[str]):
	"""reader/parse pair over an in-memory include graph; contents are the logical name."""
	calls: list[str] = []

	def reader(path: str) -> str:
		name = Path(path).relative_to("/virtual").with_suffix("").as_posix()
		if name not in graph:
			raise FileNotFoundError(path)
		calls.append(name)
		return name

	def parse(contents: str):
		if contents in failing:
			raise ValueError(f"cannot parse {contents}")
		return SimpleNamespace(includes=graph[contents])

	return reader, parse, calls


def test_failure_stops_new_loads():
	# Root fails; its includes are never discovered, so nothing else starts.
	graph = {"Root": ["Child"], "Child": []}
	reader, parse, calls = _fake_tree(graph, failing={"Root"})

	with pytest.raises(SliceParseError):
		load_closure_sync(["Root"], ["/virtual"], reader=reader, parse=parse)
	assert calls == ["Root"]


def test_all_started_loads_settle_before_failure_is_raised():
	graph = {"Bad": [], "Good": ["Leaf"], "Leaf": []}
	reader, parse, calls = _fake_tree(graph, failing={"Bad"})
	settled: list[str] = []

	def tracking_parse(contents: str):
		try:
			return parse(contents)
		finally:
			settled.append(contents)

	with pytest.raises(SliceParseError) as excinfo:
		load_closure_sync(["Bad", "Good"], ["/virtual"], reader=reader, parse=tracking_parse)
	assert excinfo.value.logical_name == "Bad"
	# Both initial loads were started before any failure and both settled.
	assert {"Bad", "Good"} <= set(settled)


def test_injected_documents_without_includes():
	reader, _parse, _calls = _fake_tree({"A": []}, failing=set())

	result = load_closure_sync(["A"], ["/virtual"], reader=reader, parse=lambda _c: SimpleNamespace())

	assert list(result) == ["A"]
	assert result["A"].includes == []


def test_empty_input_is_an_empty_closure():
	assert load_closure_sync([], ["/virtual"]) == {}
