# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
from __future__ import annotations

import argparse
import asyncio
import json
import sys
from pathlib import Path

from slicejson import __version__
from slicejson.builtin import builtin_slice_dir
from slicejson.core.diagnostics import Diagnostic
from slicejson.core.log import configure_logging
from slicejson.core.span import Span
from slicejson.loader import SliceLoadError

from .compile import CompileOptions, compile_slices


DEFAULT_OUT_DIR_NAME = "compiled-slices"


def _build_parser() -> argparse.ArgumentParser:
	p = argparse.ArgumentParser(
		prog="slicejson",
		description="Slice language to AST JSON compiler",
	)
	p.add_argument("files", nargs="+", help="Slice files or glob patterns (`**` allowed)")
	p.add_argument(
		"--root-dir",
		dest="root_dirs",
		action="extend",
		nargs="+",
		required=True,
		help=(
			"Root dirs (repeatable). Output files mirror the source layout relative to these dirs; "
			"includes are also resolved in them, in the given order"
		),
	)
	p.add_argument(
		"-e",
		"--exclude",
		dest="excludes",
		action="extend",
		nargs="+",
		default=[],
		help="File paths or globs to exclude",
	)
	p.add_argument(
		"-o",
		"--out-dir",
		type=Path,
		default=None,
		help=f"Directory where to put generated files (default: ./{DEFAULT_OUT_DIR_NAME})",
	)
	p.add_argument(
		"--no-builtin",
		dest="builtin",
		action="store_false",
		help="Do not append the built-in Ice slice directory to the root dirs",
	)
	p.add_argument(
		"--json",
		action="store_true",
		help="Emit diagnostics as JSON (phase/message/severity/file/line/column)",
	)
	p.add_argument("-v", "--verbose", action="count", default=0, help="More logging (-vv for debug)")
	p.add_argument("-q", "--quiet", action="store_true", help="Only log errors")
	p.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
	return p


def _report(diagnostics: list[Diagnostic], *, as_json: bool, exit_code: int) -> None:
	if as_json:
		print(json.dumps({"exit_code": exit_code, "diagnostics": [d.to_json() for d in diagnostics]}))
		return
	for diag in diagnostics:
		print(diag.format_human(), file=sys.stderr)


def main(argv: list[str] | None = None) -> int:
	"""
	Compile Slice files and their includes to JSON.

	Exit codes: 0 on success, 1 when resolving, loading, parsing or writing
	fails (diagnostics on stderr, or on stdout with --json), 2 on usage errors.
	"""
	p = _build_parser()
	args = p.parse_args(argv)
	configure_logging(-1 if args.quiet else args.verbose)

	opts = CompileOptions(
		inputs=list(args.files),
		root_dirs=list(args.root_dirs),
		out_dir=args.out_dir if args.out_dir is not None else Path.cwd() / DEFAULT_OUT_DIR_NAME,
		excludes=list(args.excludes),
		builtin_dir=builtin_slice_dir() if args.builtin else None,
	)

	try:
		written = asyncio.run(compile_slices(opts))
	except SliceLoadError as err:
		_report([err.to_diagnostic()], as_json=args.json, exit_code=1)
		return 1
	except OSError as err:
		diag = Diagnostic(
			message=f"failed to write output: {err.strerror or err}",
			phase="emit",
			span=Span(file=err.filename if isinstance(err.filename, str) else None),
		)
		_report([diag], as_json=args.json, exit_code=1)
		return 1

	if args.json:
		print(
			json.dumps(
				{
					"exit_code": 0,
					"diagnostics": [],
					"outputs": {name: str(path) for name, path in written.items()},
				}
			)
		)
	return 0
