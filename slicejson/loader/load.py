# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Single-file loading: logical name -> physical file -> parsed document.
"""

from __future__ import annotations

import asyncio
import logging
import os
from dataclasses import dataclass
from typing import Any, Callable, Sequence

from slicejson.parser import SliceSyntaxError, parse_slice

from .errors import SliceNotFoundError, SliceParseError
from .names import logical_name_to_relpath

logger = logging.getLogger(__name__)

# reader(path) -> text; raises OSError (or UnicodeDecodeError) when the file cannot be read.
Reader = Callable[[str], str]
# parse(contents) -> document exposing an optional `includes` sequence.
ParseFn = Callable[[str], Any]


@dataclass(frozen=True)
class LoadedSlice:
	"""A read and parsed Slice file. `root_dir` is the root the file was found under."""

	root_dir: str
	contents: str
	parsed: Any

	@property
	def includes(self) -> list[str]:
		return list(getattr(self.parsed, "includes", None) or [])


def read_text_file(path: str) -> str:
	with open(path, encoding="utf-8", newline="") as fh:
		return fh.read()


async def load_slice(
	logical_name: str,
	root_dirs: Sequence[str],
	*,
	reader: Reader = read_text_file,
	parse: ParseFn = parse_slice,
	included_from: str | None = None,
) -> LoadedSlice:
	"""
	Locate `logical_name` in the first root dir that has it, read and parse it.

	Root dirs are tried strictly in order and the search stops at the first
	successful read. Reads run in a worker thread so independent loads overlap
	on the event loop; parsing runs on the loop thread.
	"""
	relpath = logical_name_to_relpath(logical_name)
	found: tuple[str, str, str] | None = None
	for root in root_dirs:
		path = os.path.join(root, relpath)
		try:
			contents = await asyncio.to_thread(reader, path)
		except (OSError, UnicodeDecodeError) as err:
			logger.debug("%s: not readable under %s (%s)", logical_name, root, err.__class__.__name__)
			continue
		found = (root, path, contents)
		break

	if found is None:
		raise SliceNotFoundError(logical_name, included_from=included_from)

	root, path, contents = found
	logger.debug("%s: read %s", logical_name, path)
	try:
		parsed = parse(contents)
	except SliceSyntaxError as err:
		raise SliceParseError(logical_name, path, str(err), line=err.line, column=err.column) from err
	except Exception as err:
		# Injected parsers may raise anything; keep the file identity with it.
		raise SliceParseError(
			logical_name,
			path,
			str(err) or err.__class__.__name__,
			line=getattr(err, "line", None),
			column=getattr(err, "column", None),
		) from err
	return LoadedSlice(root_dir=root, contents=contents, parsed=parsed)


__all__ = ["LoadedSlice", "ParseFn", "Reader", "load_slice", "read_text_file"]
