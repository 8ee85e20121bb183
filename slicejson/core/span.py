# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Lightweight source span representation used by diagnostics.

A Span carries the best-effort file/line/column of a problem. Loader errors
know the physical file; parser errors add the line and column.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional


@dataclass(frozen=True)
class Span:
	"""Represents a source span (best-effort file/line/column)."""

	file: Optional[str] = None
	line: Optional[int] = None
	column: Optional[int] = None

	@classmethod
	def from_loc(cls, loc: Any, *, file: Optional[str] = None) -> "Span":
		"""
		Construct a Span from a parser location object.

		`loc` may be a Span, a parser `Located`, a lark exception or anything
		with `line`/`column` attributes. `file` fills in a missing file name.
		"""
		if loc is None:
			return cls(file=file)
		if isinstance(loc, cls):
			return loc if loc.file is not None or file is None else cls(file=file, line=loc.line, column=loc.column)
		return cls(
			file=getattr(loc, "file", None) or file,
			line=getattr(loc, "line", None),
			column=getattr(loc, "column", None),
		)

	def format_short(self) -> str:
		line = self.line if self.line is not None else "?"
		column = self.column if self.column is not None else "?"
		return f"{self.file or '<unknown>'}:{line}:{column}"


__all__ = ["Span"]
