from __future__ import annotations

from pathlib import PurePosixPath
from typing import Dict, Iterator, List, Optional

import tree_sitter_rust as ts_rust
from tree_sitter import Language, Node, Parser

from .errors import ExtractionError
from .family import ModuleExtractor
from .model import Extraction, FileInfo, Item, ItemKind, Module, ModuleKind, Visibility


RUST_LANGUAGE = Language(ts_rust.language())

ITEM_KINDS: Dict[str, ItemKind] = {
	"function_item": ItemKind.FUNCTION,
	"struct_item": ItemKind.STRUCT,
	"enum_item": ItemKind.ENUM,
	"trait_item": ItemKind.TRAIT,
	"const_item": ItemKind.CONST,
	"static_item": ItemKind.STATIC,
	"type_item": ItemKind.TYPE_ALIAS,
	"macro_definition": ItemKind.MACRO,
}

# Path leaves that name a single segment inside a use tree.
_SEGMENT_TYPES = {"identifier", "crate", "self", "super", "metavariable"}


def _text(node: Node) -> str:
	return node.text.decode("utf-8")


def convert_visibility(node: Node) -> Visibility:
	modifier = next((c for c in node.children if c.type == "visibility_modifier"), None)
	if modifier is None:
		return Visibility.PRIVATE
	text = "".join(_text(modifier).split())
	if text == "pub":
		return Visibility.PUBLIC
	if "(" not in text:
		# Legacy `crate fn` shorthand.
		return Visibility.CRATE if text == "crate" else Visibility.PRIVATE
	scope = text[text.index("(") + 1 : text.rindex(")")]
	if scope.startswith("in") and scope not in ("crate", "super", "self"):
		scope = scope[2:]
	if scope == "crate":
		return Visibility.CRATE
	if scope == "super":
		return Visibility.SUPER
	return Visibility.PRIVATE


def _item_from_node(node: Node) -> Optional[Item]:
	kind = ITEM_KINDS.get(node.type)
	if kind is None:
		return None
	name = node.child_by_field_name("name")
	if name is None:
		return None
	if kind is ItemKind.MACRO:
		visibility = Visibility.PUBLIC
	else:
		visibility = convert_visibility(node)
	return Item(name=_text(name), kind=kind, visibility=visibility)


def _iter_use_declarations(root: Node) -> Iterator[Node]:
	stack = [root]
	while stack:
		node = stack.pop()
		if node.type == "use_declaration":
			yield node
			continue
		stack.extend(reversed(node.children))


def expand_use_tree(node: Node, targets: List[str]) -> None:
	"""Append the import targets named by one use tree, nested segments first.

	`a::b::C` yields C, b, a; `a::{b, c as d}` yields b, c, a; a glob adds
	nothing for the `*` itself but keeps the segments leading up to it.
	"""
	kind = node.type
	if kind in _SEGMENT_TYPES:
		targets.append(_text(node))
	elif kind == "scoped_identifier":
		name = node.child_by_field_name("name")
		if name is not None:
			targets.append(_text(name))
		path = node.child_by_field_name("path")
		if path is not None:
			expand_use_tree(path, targets)
	elif kind == "use_as_clause":
		path = node.child_by_field_name("path")
		if path is not None:
			expand_use_tree(path, targets)
	elif kind == "use_wildcard":
		for child in node.named_children:
			expand_use_tree(child, targets)
	elif kind == "scoped_use_list":
		members = node.child_by_field_name("list")
		if members is not None:
			expand_use_tree(members, targets)
		path = node.child_by_field_name("path")
		if path is not None:
			expand_use_tree(path, targets)
	elif kind == "use_list":
		for child in node.named_children:
			expand_use_tree(child, targets)


def _first_error_line(root: Node) -> int:
	stack = [root]
	while stack:
		node = stack.pop()
		if node.type == "ERROR" or node.is_missing:
			return node.start_point[0] + 1
		if node.has_error:
			stack.extend(reversed(node.children))
	return 0


class RustExtractor(ModuleExtractor):
	def __init__(self) -> None:
		self._parser = Parser(RUST_LANGUAGE)

	def extract(self, text: str, source: FileInfo) -> Extraction:
		tree = self._parser.parse(text.encode("utf-8"))
		root = tree.root_node
		if root.has_error:
			raise ExtractionError(source.rel_path, f"syntax error near line {_first_error_line(root)}")

		items: List[Item] = []
		for child in root.named_children:
			item = _item_from_node(child)
			if item is not None:
				items.append(item)

		imports: List[str] = []
		for use in _iter_use_declarations(root):
			argument = use.child_by_field_name("argument")
			if argument is not None:
				expand_use_tree(argument, imports)

		module = Module(
			id=source.module_id,
			name=source.module_name,
			path=source.path,
			kind=self.infer_kind(source.rel_path),
			visibility=Visibility.PUBLIC,
			items=items,
		)
		return Extraction(module=module, imports=imports)

	def infer_kind(self, rel_path: str) -> ModuleKind:
		path = PurePosixPath(rel_path)
		parts = path.parts
		stem = path.stem
		if (parts and parts[0] == "tests") or stem in ("test", "tests") or stem.endswith(("_test", "_tests")):
			return ModuleKind.TEST
		if parts and parts[0] == "examples":
			return ModuleKind.EXAMPLE
		if parts and parts[0] == "benches":
			return ModuleKind.BENCHMARK
		if path.name == "main.rs" or parts[:2] == ("src", "bin"):
			return ModuleKind.BINARY
		if path.name == "lib.rs":
			return ModuleKind.LIBRARY
		return ModuleKind.PLAIN
