# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
from __future__ import annotations

import re
from pathlib import Path
from typing import List, Optional

from lark import Lark, Token, Tree
from lark.exceptions import UnexpectedInput

from .ast import (
	ClassDef,
	ConstDef,
	ConstValue,
	DataMember,
	Definition,
	DictionaryDef,
	Enumerator,
	EnumDef,
	ExceptionDef,
	ForwardDecl,
	InterfaceDef,
	Located,
	ModuleDef,
	Operation,
	Param,
	SequenceDef,
	SliceDocument,
	StructDef,
	TypeRef,
)

_GRAMMAR_PATH = Path(__file__).with_name("grammar.lark")
_GRAMMAR_SRC = _GRAMMAR_PATH.read_text()

SLICE_EXTENSION = ".ice"

_ESCAPE_RE = re.compile(r"\\(u[0-9a-fA-F]{4}|U[0-9a-fA-F]{8}|x[0-9a-fA-F]+|[0-7]{1,3}|.)", re.DOTALL)
_SIMPLE_ESCAPES = {
	"n": "\n",
	"t": "\t",
	"r": "\r",
	"a": "\a",
	"b": "\b",
	"f": "\f",
	"v": "\v",
}


class SliceSyntaxError(ValueError):
	"""
	User-facing error for Slice source that does not parse.

	Raised both for grammar-level failures (wrapping lark's `UnexpectedInput`)
	and for problems found while building the AST. `loc` is a `Located` when the
	position is known.
	"""

	def __init__(self, message: str, *, loc: Located | None = None) -> None:
		super().__init__(message)
		self.loc = loc

	@property
	def line(self) -> int | None:
		return self.loc.line if self.loc is not None else None

	@property
	def column(self) -> int | None:
		return self.loc.column if self.loc is not None else None


_PARSER = Lark(
	_GRAMMAR_SRC,
	parser="lalr",
	lexer="basic",
	start="start",
	propagate_positions=True,
	maybe_placeholders=False,
)


def parse_slice(source: str) -> SliceDocument:
	"""Parse Slice source text into a `SliceDocument`."""
	try:
		tree = _PARSER.parse(source)
	except UnexpectedInput as err:
		line = getattr(err, "line", None)
		column = getattr(err, "column", None)
		loc = None
		# UnexpectedEOF reports -1 for both.
		if isinstance(line, int) and isinstance(column, int) and line > 0:
			loc = Located(line=line, column=column)
		# lark messages repeat the whole expected-token set; the first line is enough.
		first_line = str(err).strip().splitlines()[0] if str(err).strip() else "syntax error"
		raise SliceSyntaxError(first_line, loc=loc) from err
	return _build_document(tree)


def _build_document(tree: Tree) -> SliceDocument:
	doc = SliceDocument()
	seen_includes: set[str] = set()
	for child in tree.children:
		if not isinstance(child, Tree):
			continue
		kind = _name(child)
		if kind == "pragma_once":
			doc.pragma_once = True
		elif kind == "include":
			name = _build_include(child)
			# Repeated includes of the same file are a no-op after the first.
			if name not in seen_includes:
				seen_includes.add(name)
				doc.includes.append(name)
		elif kind == "file_metadata":
			doc.file_metadata.extend(_strings(child))
		elif kind == "module_def":
			doc.modules.append(_build_module(child))
		else:
			raise SliceSyntaxError(f"unexpected top-level node {kind}", loc=_loc(child))
	return doc


def _build_include(tree: Tree) -> str:
	"""
	Turn an `#include <A/B.ice>` line into the logical name `A/B`.

	Both `<...>` and `"..."` forms are accepted; the `.ice` suffix is required.
	"""
	tok = tree.children[0]
	text = tok.value
	start = min(i for i in (text.find("<"), text.find('"')) if i >= 0)
	target = text[start + 1 : -1].strip()
	if not target.endswith(SLICE_EXTENSION) or len(target) == len(SLICE_EXTENSION):
		raise SliceSyntaxError(f"included file must have the {SLICE_EXTENSION} extension: {target!r}", loc=_loc_from_token(tok))
	return target[: -len(SLICE_EXTENSION)].replace("\\", "/")


def _build_module(tree: Tree) -> ModuleDef:
	name_node = _child(tree, "scoped_name")
	module = ModuleDef(name=_scoped_name(name_node), loc=_loc(tree), metadata=_metadata_of(tree))
	for child in tree.children:
		if not isinstance(child, Tree) or _name(child) in ("metadata", "scoped_name"):
			continue
		module.definitions.append(_build_definition(child))
	return module


def _build_definition(tree: Tree) -> Definition:
	kind = _name(tree)
	builder = _DEFINITION_BUILDERS.get(kind)
	if builder is None:
		raise SliceSyntaxError(f"unexpected definition {kind}", loc=_loc(tree))
	return builder(tree)


def _build_interface(tree: Tree) -> InterfaceDef:
	bases_node = _child(tree, "interface_bases")
	return InterfaceDef(
		name=_ident(tree),
		loc=_loc(tree),
		bases=[_scoped_name(n) for n in _children(bases_node, "scoped_name")] if bases_node is not None else [],
		operations=[_build_operation(n) for n in _children(tree, "operation")],
		local=_has_token(tree, "LOCAL"),
		metadata=_metadata_of(tree),
	)


def _build_forward(tree: Tree) -> ForwardDecl:
	return ForwardDecl(
		decl_kind="interface" if _name(tree) == "interface_fwd" else "class",
		name=_ident(tree),
		loc=_loc(tree),
		local=_has_token(tree, "LOCAL"),
		metadata=_metadata_of(tree),
	)


def _build_class(tree: Tree) -> ClassDef:
	compact_node = _child(tree, "compact_id")
	base_node = _child(tree, "class_base")
	implements_node = _child(tree, "class_implements")
	return ClassDef(
		name=_ident(tree),
		loc=_loc(tree),
		base=_scoped_name(_child(base_node, "scoped_name")) if base_node is not None else None,
		implements=[_scoped_name(n) for n in _children(implements_node, "scoped_name")] if implements_node is not None else [],
		compact_id=_int_token(compact_node.children[0]) if compact_node is not None else None,
		members=[_build_data_member(n) for n in _children(tree, "data_member")],
		operations=[_build_operation(n) for n in _children(tree, "operation")],
		local=_has_token(tree, "LOCAL"),
		metadata=_metadata_of(tree),
	)


def _build_exception(tree: Tree) -> ExceptionDef:
	base_node = _child(tree, "exception_base")
	return ExceptionDef(
		name=_ident(tree),
		loc=_loc(tree),
		base=_scoped_name(_child(base_node, "scoped_name")) if base_node is not None else None,
		members=[_build_data_member(n) for n in _children(tree, "data_member")],
		local=_has_token(tree, "LOCAL"),
		metadata=_metadata_of(tree),
	)


def _build_struct(tree: Tree) -> StructDef:
	members = [_build_data_member(n) for n in _children(tree, "data_member")]
	if not members:
		raise SliceSyntaxError(f"struct {_ident(tree)} must have at least one member", loc=_loc(tree))
	return StructDef(
		name=_ident(tree),
		loc=_loc(tree),
		members=members,
		local=_has_token(tree, "LOCAL"),
		metadata=_metadata_of(tree),
	)


def _build_enum(tree: Tree) -> EnumDef:
	enumerators: List[Enumerator] = []
	for node in _children(tree, "enumerator"):
		name_tok = next(c for c in node.children if isinstance(c, Token) and c.type == "IDENT")
		value_tok = next((c for c in node.children if isinstance(c, Token) and c.type == "INT"), None)
		enumerators.append(
			Enumerator(
				name=name_tok.value,
				loc=_loc(node),
				value=_int_token(value_tok) if value_tok is not None else None,
			)
		)
	if not enumerators:
		raise SliceSyntaxError(f"enum {_ident(tree)} must have at least one enumerator", loc=_loc(tree))
	return EnumDef(
		name=_ident(tree),
		loc=_loc(tree),
		enumerators=enumerators,
		local=_has_token(tree, "LOCAL"),
		metadata=_metadata_of(tree),
	)


def _build_sequence(tree: Tree) -> SequenceDef:
	return SequenceDef(
		name=_ident(tree),
		element_type=_build_type(_child(tree, "type")),
		loc=_loc(tree),
		element_metadata=_type_metadata_of(tree),
		local=_has_token(tree, "LOCAL"),
		metadata=_metadata_of(tree),
	)


def _build_dictionary(tree: Tree) -> DictionaryDef:
	key_node = _child(tree, "dict_key")
	value_node = _child(tree, "dict_value")
	return DictionaryDef(
		name=_ident(tree),
		key_type=_build_type(_child(key_node, "type")),
		value_type=_build_type(_child(value_node, "type")),
		loc=_loc(tree),
		key_metadata=_type_metadata_of(key_node),
		value_metadata=_type_metadata_of(value_node),
		local=_has_token(tree, "LOCAL"),
		metadata=_metadata_of(tree),
	)


def _build_const(tree: Tree) -> ConstDef:
	value_node = next(c for c in tree.children if isinstance(c, Tree) and _name(c).endswith("_value"))
	return ConstDef(
		name=_ident(tree),
		type=_build_type(_child(tree, "type")),
		value=_build_const_value(value_node),
		loc=_loc(tree),
		type_metadata=_type_metadata_of(tree),
		metadata=_metadata_of(tree),
	)


def _build_data_member(tree: Tree) -> DataMember:
	member_type = _child(tree, "member_type")
	value_node = next((c for c in tree.children if isinstance(c, Tree) and _name(c).endswith("_value")), None)
	return DataMember(
		name=_ident(tree),
		type=_build_type(_child(member_type, "type")),
		loc=_loc(tree),
		tag=_optional_tag(member_type),
		default=_build_const_value(value_node) if value_node is not None else None,
		metadata=_metadata_of(tree),
	)


def _build_operation(tree: Tree) -> Operation:
	member_type = _child(tree, "member_type")
	throws_node = _child(tree, "throws_clause")
	params = [_build_param(n) for n in _children(tree, "param")]
	seen: set[str] = set()
	for param in params:
		if param.name in seen:
			raise SliceSyntaxError(f"duplicate parameter {param.name!r} in operation {_ident(tree)}", loc=param.loc)
		seen.add(param.name)
	return Operation(
		name=_ident(tree),
		return_type=_build_type(_child(member_type, "type")),
		loc=_loc(tree),
		params=params,
		throws=[_scoped_name(n) for n in _children(throws_node, "scoped_name")] if throws_node is not None else [],
		return_tag=_optional_tag(member_type),
		idempotent=_has_token(tree, "IDEMPOTENT"),
		metadata=_metadata_of(tree),
	)


def _build_param(tree: Tree) -> Param:
	member_type = _child(tree, "member_type")
	return Param(
		name=_ident(tree),
		type=_build_type(_child(member_type, "type")),
		loc=_loc(tree),
		out=_has_token(tree, "OUT"),
		tag=_optional_tag(member_type),
		metadata=_metadata_of(tree),
	)


def _build_type(tree: Tree) -> TypeRef:
	return TypeRef(
		name=_scoped_name(_child(tree, "scoped_name")),
		optional=_has_token(tree, "QMARK"),
		proxy=_has_token(tree, "STAR"),
	)


def _build_const_value(tree: Tree) -> ConstValue:
	kind = _name(tree)
	if kind == "name_value":
		return ConstValue(value_kind="name", value=_scoped_name(_child(tree, "scoped_name")))
	tok = tree.children[0]
	if kind == "int_value":
		return ConstValue(value_kind="int", value=_int_token(tok))
	if kind == "float_value":
		return ConstValue(value_kind="float", value=float(tok.value.rstrip("fF")))
	if kind == "string_value":
		return ConstValue(value_kind="string", value=_decode_string_token(tok))
	if kind == "true_value":
		return ConstValue(value_kind="bool", value=True)
	if kind == "false_value":
		return ConstValue(value_kind="bool", value=False)
	raise SliceSyntaxError(f"unexpected constant value {kind}", loc=_loc(tree))


def _optional_tag(member_type: Tree) -> Optional[int]:
	tag_node = _child(member_type, "optional_tag")
	if tag_node is None:
		return None
	tag = _int_token(tag_node.children[0])
	if tag < 0:
		raise SliceSyntaxError(f"optional tag must not be negative: {tag}", loc=_loc(tag_node))
	return tag


def _type_metadata_of(tree: Tree | None) -> List[str]:
	node = _child(tree, "type_metadata")
	return _strings(node) if node is not None else []


def _decode_string_token(tok: Token) -> str:
	"""
	Decode a STRING token in one pass over its escapes.

	`\\uXXXX`, `\\UXXXXXXXX`, `\\x..` and octal escapes name code points; the
	C escapes (`\\n`, `\\t`, ...) map to their control characters and any other
	escaped character stands for itself. Literal non-ASCII text is kept as is.
	"""

	def _replace(match: re.Match[str]) -> str:
		esc = match.group(1)
		if esc[0] in "uUx":
			return chr(int(esc[1:], 16))
		if esc[0] in "01234567":
			return chr(int(esc, 8))
		return _SIMPLE_ESCAPES.get(esc, esc)

	try:
		return _ESCAPE_RE.sub(_replace, tok.value[1:-1])
	except (ValueError, OverflowError) as err:
		raise SliceSyntaxError(f"invalid string literal {tok.value}", loc=_loc_from_token(tok)) from err


def _int_token(tok: Token) -> int:
	return int(tok.value, 0) if tok.value.lstrip("+-").lower().startswith("0x") else int(tok.value, 10)


def _strings(tree: Tree) -> List[str]:
	return [_decode_string_token(c) for c in tree.children if isinstance(c, Token) and c.type == "STRING"]


def _metadata_of(tree: Tree | None) -> List[str]:
	"""Metadata written in front of a definition (the first child), if any."""
	if tree is None or not tree.children:
		return []
	first = tree.children[0]
	if isinstance(first, Tree) and _name(first) == "metadata":
		return _strings(first)
	return []


def _scoped_name(tree: Tree) -> str:
	return "".join(tok.value for tok in tree.children if isinstance(tok, Token))


def _ident(tree: Tree) -> str:
	tok = next((c for c in tree.children if isinstance(c, Token) and c.type == "IDENT"), None)
	if tok is None:
		raise SliceSyntaxError(f"{_name(tree)} missing identifier", loc=_loc(tree))
	return tok.value


def _has_token(tree: Tree, token_type: str) -> bool:
	return any(isinstance(c, Token) and c.type == token_type for c in tree.children)


def _child(tree: Tree | None, name: str) -> Optional[Tree]:
	if tree is None:
		return None
	return next((c for c in tree.children if isinstance(c, Tree) and _name(c) == name), None)


def _children(tree: Tree | None, name: str) -> List[Tree]:
	if tree is None:
		return []
	return [c for c in tree.children if isinstance(c, Tree) and _name(c) == name]


def _loc(tree: Tree) -> Located:
	meta = tree.meta
	return Located(line=getattr(meta, "line", 0), column=getattr(meta, "column", 0))


def _loc_from_token(token: Token) -> Located:
	return Located(line=token.line, column=token.column)


def _name(node: Tree | Token) -> str:
	if isinstance(node, Tree):
		data = node.data
		if isinstance(data, Token):
			return data.value
		return data
	if isinstance(node, Token):
		return node.type
	return str(node)


_DEFINITION_BUILDERS = {
	"module_def": _build_module,
	"interface_def": _build_interface,
	"interface_fwd": _build_forward,
	"class_def": _build_class,
	"class_fwd": _build_forward,
	"exception_def": _build_exception,
	"struct_def": _build_struct,
	"enum_def": _build_enum,
	"sequence_def": _build_sequence,
	"dictionary_def": _build_dictionary,
	"const_def": _build_const,
}


__all__ = ["SLICE_EXTENSION", "SliceSyntaxError", "parse_slice"]
