# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Slice AST.

Nodes are plain dataclasses. Every definition node has a class-level `KIND`
tag used by `to_dict()` so emitted JSON is self-describing.
"""

from __future__ import annotations

from dataclasses import dataclass, field, fields, is_dataclass
from typing import Any, ClassVar, List, Optional, Union


@dataclass(frozen=True)
class Located:
	line: int
	column: int


@dataclass
class TypeRef:
	KIND: ClassVar[str] = "type"
	name: str
	optional: bool = False
	proxy: bool = False


@dataclass
class ConstValue:
	KIND: ClassVar[str] = "value"
	# "int" | "float" | "string" | "bool" | "name"
	value_kind: str
	value: Union[int, float, str, bool]


@dataclass
class DataMember:
	KIND: ClassVar[str] = "dataMember"
	name: str
	type: TypeRef
	loc: Located
	tag: Optional[int] = None
	default: Optional[ConstValue] = None
	metadata: List[str] = field(default_factory=list)


@dataclass
class Param:
	KIND: ClassVar[str] = "param"
	name: str
	type: TypeRef
	loc: Located
	out: bool = False
	tag: Optional[int] = None
	metadata: List[str] = field(default_factory=list)


@dataclass
class Operation:
	KIND: ClassVar[str] = "operation"
	name: str
	return_type: TypeRef
	loc: Located
	params: List[Param] = field(default_factory=list)
	throws: List[str] = field(default_factory=list)
	return_tag: Optional[int] = None
	idempotent: bool = False
	metadata: List[str] = field(default_factory=list)


@dataclass
class InterfaceDef:
	KIND: ClassVar[str] = "interface"
	name: str
	loc: Located
	bases: List[str] = field(default_factory=list)
	operations: List[Operation] = field(default_factory=list)
	local: bool = False
	metadata: List[str] = field(default_factory=list)


@dataclass
class ClassDef:
	KIND: ClassVar[str] = "class"
	name: str
	loc: Located
	base: Optional[str] = None
	implements: List[str] = field(default_factory=list)
	compact_id: Optional[int] = None
	members: List[DataMember] = field(default_factory=list)
	operations: List[Operation] = field(default_factory=list)
	local: bool = False
	metadata: List[str] = field(default_factory=list)


@dataclass
class ForwardDecl:
	KIND: ClassVar[str] = "forward"
	# "class" | "interface"
	decl_kind: str
	name: str
	loc: Located
	local: bool = False
	metadata: List[str] = field(default_factory=list)


@dataclass
class ExceptionDef:
	KIND: ClassVar[str] = "exception"
	name: str
	loc: Located
	base: Optional[str] = None
	members: List[DataMember] = field(default_factory=list)
	local: bool = False
	metadata: List[str] = field(default_factory=list)


@dataclass
class StructDef:
	KIND: ClassVar[str] = "struct"
	name: str
	loc: Located
	members: List[DataMember] = field(default_factory=list)
	local: bool = False
	metadata: List[str] = field(default_factory=list)


@dataclass
class Enumerator:
	KIND: ClassVar[str] = "enumerator"
	name: str
	loc: Located
	value: Optional[int] = None


@dataclass
class EnumDef:
	KIND: ClassVar[str] = "enum"
	name: str
	loc: Located
	enumerators: List[Enumerator] = field(default_factory=list)
	local: bool = False
	metadata: List[str] = field(default_factory=list)


@dataclass
class SequenceDef:
	KIND: ClassVar[str] = "sequence"
	name: str
	element_type: TypeRef
	loc: Located
	element_metadata: List[str] = field(default_factory=list)
	local: bool = False
	metadata: List[str] = field(default_factory=list)


@dataclass
class DictionaryDef:
	KIND: ClassVar[str] = "dictionary"
	name: str
	key_type: TypeRef
	value_type: TypeRef
	loc: Located
	key_metadata: List[str] = field(default_factory=list)
	value_metadata: List[str] = field(default_factory=list)
	local: bool = False
	metadata: List[str] = field(default_factory=list)


@dataclass
class ConstDef:
	KIND: ClassVar[str] = "const"
	name: str
	type: TypeRef
	value: ConstValue
	loc: Located
	type_metadata: List[str] = field(default_factory=list)
	metadata: List[str] = field(default_factory=list)


Definition = Union[
	"ModuleDef",
	InterfaceDef,
	ClassDef,
	ForwardDecl,
	ExceptionDef,
	StructDef,
	EnumDef,
	SequenceDef,
	DictionaryDef,
	ConstDef,
]


@dataclass
class ModuleDef:
	KIND: ClassVar[str] = "module"
	name: str
	loc: Located
	definitions: List[Definition] = field(default_factory=list)
	metadata: List[str] = field(default_factory=list)


@dataclass
class SliceDocument:
	"""
	Parsed contents of one `.ice` file.

	`includes` holds logical names (the include path without `.ice`) in source
	order; the loader follows them to build the include closure.
	"""

	includes: List[str] = field(default_factory=list)
	pragma_once: bool = False
	file_metadata: List[str] = field(default_factory=list)
	modules: List[ModuleDef] = field(default_factory=list)

	def to_dict(self) -> dict[str, Any]:
		return {
			"pragmaOnce": self.pragma_once,
			"includes": list(self.includes),
			"fileMetadata": list(self.file_metadata),
			"modules": [node_to_json(m) for m in self.modules],
		}


def _camel(name: str) -> str:
	head, *rest = name.split("_")
	return head + "".join(part.capitalize() for part in rest)


def node_to_json(node: Any) -> Any:
	"""
	Project an AST node (or a list/scalar inside one) onto JSON-ready values.

	Field names become camelCase keys; dataclass nodes gain a leading `"kind"`.
	"""
	if isinstance(node, Located):
		return {"line": node.line, "column": node.column}
	if is_dataclass(node) and not isinstance(node, type):
		out: dict[str, Any] = {}
		kind = getattr(type(node), "KIND", None)
		if kind is not None:
			out["kind"] = kind
		for f in fields(node):
			out[_camel(f.name)] = node_to_json(getattr(node, f.name))
		return out
	if isinstance(node, (list, tuple)):
		return [node_to_json(item) for item in node]
	return node


__all__ = [
	"ClassDef",
	"ConstDef",
	"ConstValue",
	"DataMember",
	"Definition",
	"DictionaryDef",
	"Enumerator",
	"EnumDef",
	"ExceptionDef",
	"ForwardDecl",
	"InterfaceDef",
	"Located",
	"ModuleDef",
	"Operation",
	"Param",
	"SequenceDef",
	"SliceDocument",
	"StructDef",
	"TypeRef",
	"node_to_json",
]
