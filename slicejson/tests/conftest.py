# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
from __future__ import annotations

import collections
import logging
import threading
from pathlib import Path

import pytest

from slicejson.core.log import LOGGER_NAME
from slicejson.loader import read_text_file


class CountingReader:
	"""Filesystem probe: counts read attempts and successful reads per path."""

	def __init__(self) -> None:
		self._lock = threading.Lock()
		self.attempts: collections.Counter[str] = collections.Counter()
		self.reads: collections.Counter[str] = collections.Counter()

	def __call__(self, path: str) -> str:
		with self._lock:
			self.attempts[path] += 1
		text = read_text_file(path)
		with self._lock:
			self.reads[path] += 1
		return text

	def reads_of(self, path: Path) -> int:
		return self.reads[str(path)]


@pytest.fixture(autouse=True)
def _reset_slicejson_logger():
	# The CLI installs a stderr handler bound to whatever stream capture is active.
	yield
	logger = logging.getLogger(LOGGER_NAME)
	for handler in list(logger.handlers):
		if getattr(handler, "_slicejson_handler", False):
			logger.removeHandler(handler)
	logger.setLevel(logging.NOTSET)


@pytest.fixture
def counting_reader() -> CountingReader:
	return CountingReader()


@pytest.fixture
def write_slice():
	def _write(root: Path, logical_name: str, content: str) -> Path:
		path = root.joinpath(*logical_name.split("/")).with_name(logical_name.split("/")[-1] + ".ice")
		path.parent.mkdir(parents=True, exist_ok=True)
		path.write_text(content)
		return path

	return _write
