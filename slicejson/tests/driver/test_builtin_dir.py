# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
from __future__ import annotations

from pathlib import Path

import pytest

from slicejson.builtin import BUILTIN_DIR_ENV, builtin_slice_dir
from slicejson.driver.compile import CompileOptions, effective_root_dirs
from slicejson.parser import parse_slice

_BUNDLED = sorted((Path(builtin_slice_dir({})) / "Ice").glob("*.ice"))


def test_bundled_dir_exists():
	assert Path(builtin_slice_dir({})).is_dir()
	assert [p.name for p in _BUNDLED] == ["BuiltinSequences.ice", "Context.ice", "Identity.ice", "Version.ice"]


@pytest.mark.parametrize("path", _BUNDLED, ids=lambda p: p.name)
def test_bundled_files_parse(path: Path):
	doc = parse_slice(path.read_text())
	assert doc.pragma_once is True
	assert [m.name for m in doc.modules] == ["Ice"]


def test_environment_override(tmp_path: Path):
	assert builtin_slice_dir({BUILTIN_DIR_ENV: str(tmp_path)}) == str(tmp_path)


def test_builtin_dir_is_appended_after_user_roots(tmp_path: Path, monkeypatch):
	monkeypatch.chdir(tmp_path)
	opts = CompileOptions(inputs=[], root_dirs=["a", str(tmp_path / "b")], out_dir=tmp_path, builtin_dir="/opt/ice")

	assert effective_root_dirs(opts) == [str(tmp_path / "a"), str(tmp_path / "b"), "/opt/ice"]


def test_no_builtin_dir(tmp_path: Path):
	opts = CompileOptions(inputs=[], root_dirs=[str(tmp_path)], out_dir=tmp_path)

	assert effective_root_dirs(opts) == [str(tmp_path)]
