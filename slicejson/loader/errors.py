# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Loader error taxonomy.

Every error here is fatal for the run: nothing is retried and nothing is
recovered locally. The driver turns them into diagnostics via
`to_diagnostic()`.
"""

from __future__ import annotations

from typing import Sequence

from slicejson.core.diagnostics import Diagnostic
from slicejson.core.span import Span


class SliceLoadError(ValueError):
	"""Base class for resolution and loading failures."""

	phase = "load"
	code = "E-LOAD"

	def __init__(
		self,
		message: str,
		*,
		logical_name: str | None = None,
		path: str | None = None,
		line: int | None = None,
		column: int | None = None,
	) -> None:
		super().__init__(message)
		self.message = message
		self.logical_name = logical_name
		self.path = path
		self.line = line
		self.column = column

	def notes(self) -> list[str]:
		return []

	def to_diagnostic(self) -> Diagnostic:
		return Diagnostic(
			message=self.message,
			code=self.code,
			phase=self.phase,
			span=Span.from_loc(self, file=self.path),
			notes=self.notes(),
		)


class NotInAnyRootDirError(SliceLoadError):
	"""An input path sits under none of the configured root directories."""

	phase = "resolve"
	code = "E-NOT-IN-ROOT"

	def __init__(self, path: str, root_dirs: Sequence[str]) -> None:
		super().__init__(f"Slice file {path} is not contained in any of the root dirs", path=path)
		self.root_dirs = list(root_dirs)

	def notes(self) -> list[str]:
		return [f"root dir: {root}" for root in self.root_dirs]


class InvalidExtensionError(SliceLoadError):
	"""A resolved relative path does not end with the Slice extension."""

	phase = "resolve"
	code = "E-EXTENSION"

	def __init__(self, path: str, relative_path: str) -> None:
		super().__init__(f"Invalid slice file extension: {relative_path}", path=path)
		self.relative_path = relative_path


class SliceNotFoundError(SliceLoadError, FileNotFoundError):
	"""A logical name could not be read from any root directory."""

	code = "E-NOT-FOUND"

	def __init__(self, logical_name: str, *, included_from: str | None = None) -> None:
		SliceLoadError.__init__(self, f"Failed to load slice file: {logical_name}.ice", logical_name=logical_name)
		self.included_from = included_from

	def __str__(self) -> str:
		return self.message

	def notes(self) -> list[str]:
		if self.included_from is None:
			return []
		return [f"included from {self.included_from}"]


class SliceParseError(SliceLoadError):
	"""The parser rejected a file; keeps the file identity next to the parser message."""

	phase = "parse"
	code = "E-PARSE"

	def __init__(
		self,
		logical_name: str,
		path: str,
		detail: str,
		*,
		line: int | None = None,
		column: int | None = None,
	) -> None:
		super().__init__(
			f"{logical_name}.ice\n{detail}",
			logical_name=logical_name,
			path=path,
			line=line,
			column=column,
		)
		self.detail = detail

	def to_diagnostic(self) -> Diagnostic:
		diag = super().to_diagnostic()
		diag.message = self.detail
		diag.notes = [f"while parsing {self.logical_name}"]
		return diag


__all__ = [
	"InvalidExtensionError",
	"NotInAnyRootDirError",
	"SliceLoadError",
	"SliceNotFoundError",
	"SliceParseError",
]
