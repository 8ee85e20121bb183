# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Include-closure loading.

`load_closure` loads a set of logical names plus everything they include,
transitively, with each name read and parsed at most once per call.

Registry discipline:
- the registry maps a logical name to the asyncio Task loading it;
- a name is claimed by inserting its Task synchronously, with no `await`
  between the membership check and the insert, so two requests for the same
  name (direct, via includes, or via a cycle) always share one Task;
- includes are discovered only after a file is parsed, so the closure is done
  when the registry stops growing and every Task in it has settled.

Failure policy: the first failure observed stops new registrations (best
effort; Tasks already running still finish), every started Task is awaited,
then that first failure is raised. No partial result is returned.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Iterable, Sequence

from slicejson.parser import parse_slice

from .load import LoadedSlice, ParseFn, Reader, load_slice, read_text_file

logger = logging.getLogger(__name__)


class _ClosureLoader:
	def __init__(self, root_dirs: Sequence[str], reader: Reader, parse: ParseFn) -> None:
		self._root_dirs = list(root_dirs)
		self._reader = reader
		self._parse = parse
		self._registry: dict[str, asyncio.Task[LoadedSlice]] = {}
		self._failure: BaseException | None = None

	def request(self, name: str, *, included_from: str | None = None) -> None:
		"""Claim `name` and start loading it unless it is already registered."""
		if name in self._registry:
			return
		if self._failure is not None:
			logger.debug("%s: not started, closure already failed", name)
			return
		logger.debug("%s: registered (included from %s)", name, included_from or "<input>")
		self._registry[name] = asyncio.ensure_future(self._load(name, included_from))

	async def _load(self, name: str, included_from: str | None) -> LoadedSlice:
		try:
			loaded = await load_slice(
				name,
				self._root_dirs,
				reader=self._reader,
				parse=self._parse,
				included_from=included_from,
			)
		except Exception as err:
			if self._failure is None:
				self._failure = err
			raise
		for include in loaded.includes:
			self.request(include, included_from=name)
		return loaded

	async def run(self, names: Iterable[str]) -> dict[str, LoadedSlice]:
		for name in names:
			self.request(name)
		try:
			while True:
				pending = [task for task in self._registry.values() if not task.done()]
				if not pending:
					break
				await asyncio.wait(pending)
		finally:
			for task in self._registry.values():
				if not task.done():
					task.cancel()

		# Retrieve every exception so none is reported as "never retrieved".
		for task in self._registry.values():
			if not task.cancelled():
				task.exception()
		if self._failure is not None:
			raise self._failure
		return {name: task.result() for name, task in self._registry.items()}


async def load_closure(
	names: Iterable[str],
	root_dirs: Sequence[str],
	*,
	reader: Reader = read_text_file,
	parse: ParseFn = parse_slice,
) -> dict[str, LoadedSlice]:
	"""
	Load `names` and their transitive includes from `root_dirs`.

	Returns a mapping of logical name to `LoadedSlice` in registration order.
	Raises the first `SliceLoadError` observed when any unit fails.
	"""
	loader = _ClosureLoader(root_dirs, reader, parse)
	result = await loader.run(names)
	logger.debug("closure complete: %d unit(s)", len(result))
	return result


def load_closure_sync(
	names: Iterable[str],
	root_dirs: Sequence[str],
	*,
	reader: Reader = read_text_file,
	parse: ParseFn = parse_slice,
) -> dict[str, LoadedSlice]:
	"""Run `load_closure` on a fresh event loop."""
	return asyncio.run(load_closure(names, root_dirs, reader=reader, parse=parse))


__all__ = ["load_closure", "load_closure_sync"]
