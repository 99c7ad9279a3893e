"""Line-oriented Python extraction.

Python sources are not parsed into a tree here. Each trimmed line is matched
against the `def`, `class`, `import` and `from` keywords, which is coarse but
never fails on files that would not compile.
"""

from __future__ import annotations

from pathlib import PurePosixPath
from typing import List, Optional

from .family import ModuleExtractor
from .model import Extraction, FileInfo, Item, ItemKind, Module, ModuleKind, Visibility


def visibility_of(name: str) -> Visibility:
	return Visibility.PRIVATE if name.startswith("_") else Visibility.PUBLIC


def extract_function_name(line: str) -> Optional[str]:
	start = line.find("def ")
	if start < 0:
		return None
	start += len("def ")
	end = line.find("(", start)
	if end < 0:
		return None
	return line[start:end].strip()


def extract_class_name(line: str) -> Optional[str]:
	start = line.find("class ")
	if start < 0:
		return None
	start += len("class ")
	ends = [i for i in (line.find("(", start), line.find(":", start)) if i >= 0]
	end = min(ends) if ends else len(line)
	return line[start:end].strip()


def extract_import(line: str) -> Optional[str]:
	"""Return the raw target of an import line.

	`import a.b` gives `a.b`; `from a.b import c` gives only `a`. Relative
	imports (`from . import x`, `from .foo import x`) give nothing.
	"""
	parts = line.split()
	if len(parts) < 2:
		return None
	target = parts[1].rstrip(",")
	if parts[0] == "from":
		target = target.split(".", 1)[0]
	return target or None


class PythonExtractor(ModuleExtractor):
	def extract(self, text: str, source: FileInfo) -> Extraction:
		items: List[Item] = []
		imports: List[str] = []

		for raw in text.splitlines():
			line = raw.strip()
			if line.startswith(("import ", "from ")):
				target = extract_import(line)
				if target:
					imports.append(target)
			elif line.startswith("def "):
				name = extract_function_name(line)
				if name:
					items.append(Item(name=name, kind=ItemKind.FUNCTION, visibility=visibility_of(name)))
			elif line.startswith("class "):
				name = extract_class_name(line)
				if name:
					items.append(Item(name=name, kind=ItemKind.STRUCT, visibility=visibility_of(name)))

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
		dirs = path.parts[:-1]
		stem = path.stem
		if stem.startswith("test_") or stem.endswith("_test") or "tests" in dirs or "test" in dirs:
			return ModuleKind.TEST
		if "examples" in dirs:
			return ModuleKind.EXAMPLE
		if path.name == "__main__.py":
			return ModuleKind.BINARY
		return ModuleKind.PLAIN
