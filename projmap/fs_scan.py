from __future__ import annotations

import logging
import os
from collections import defaultdict
from pathlib import Path, PurePosixPath
from typing import Dict, Iterable, List, Optional, Tuple

from .deps import read_cargo_dependencies, read_python_dependencies
from .errors import UnrecognizedProjectError
from .family import LanguageFamily
from .model import FileInfo
from .py_scan import PythonExtractor
from .rust_parse import RustExtractor


logger = logging.getLogger(__name__)

# Canonical id separator. Neither "::" nor "." and never part of an identifier.
ID_SEPARATOR = "/"

RUST_MANIFEST = "Cargo.toml"
PYTHON_MARKERS = ("setup.py", "requirements.txt", "pyproject.toml", "__init__.py")


def rust_family(auxiliary_roots: Tuple[str, ...] = ("tests", "examples", "benches")) -> LanguageFamily:
	return LanguageFamily(
		name="rust",
		extension=".rs",
		separator="::",
		index_stem="mod",
		primary_root="src",
		auxiliary_roots=auxiliary_roots,
		extractor=RustExtractor(),
		read_dependencies=read_cargo_dependencies,
	)


def python_family() -> LanguageFamily:
	return LanguageFamily(
		name="python",
		extension=".py",
		separator=".",
		index_stem="__init__",
		primary_root=None,
		auxiliary_roots=(),
		extractor=PythonExtractor(),
		read_dependencies=read_python_dependencies,
	)


def detect_family(root: Path, auxiliary_roots: Optional[Tuple[str, ...]] = None) -> LanguageFamily:
	if (root / RUST_MANIFEST).exists():
		if auxiliary_roots is None:
			return rust_family()
		return rust_family(auxiliary_roots)
	for marker in PYTHON_MARKERS:
		if (root / marker).exists():
			return python_family()
	raise UnrecognizedProjectError(str(root))


def to_module_name(rel_path: str, family: LanguageFamily, root: Optional[str] = None, collapse_index: bool = True) -> str:
	parts = list(PurePosixPath(rel_path).with_suffix("").parts)
	if root is not None and root == family.primary_root and parts and parts[0] == root:
		parts = parts[1:]
	if collapse_index and len(parts) > 1 and parts[-1] == family.index_stem:
		parts = parts[:-1]
	return family.separator.join(parts)


def to_module_id(module_name: str, family: LanguageFamily) -> str:
	return module_name.replace(family.separator, ID_SEPARATOR)


def normalize_target(target: str, family: LanguageFamily) -> str:
	return target.replace(family.separator, ID_SEPARATOR)


def parent_name(module_name: str, family: LanguageFamily) -> Optional[str]:
	parts = module_name.split(family.separator)
	if len(parts) < 2:
		return None
	return family.separator.join(parts[:-1])


def iter_source_files(root: Path, directory: Path, extension: str, exclude_dirs: Iterable[str]) -> List[str]:
	"""Relative posix paths of matching files under directory, sorted, symlinks skipped."""
	excluded = set(exclude_dirs)
	found: List[str] = []
	for dirpath, dirnames, filenames in os.walk(directory, followlinks=False):
		dirnames[:] = [
			d for d in dirnames if d not in excluded and not os.path.islink(os.path.join(dirpath, d))
		]
		for filename in filenames:
			if not filename.endswith(extension):
				continue
			path = os.path.join(dirpath, filename)
			if os.path.islink(path):
				continue
			found.append(Path(os.path.relpath(path, root)).as_posix())
	return sorted(found)


def assign_module_ids(root: Path, rel_paths: Iterable[Tuple[str, Optional[str]]], family: LanguageFamily) -> List[FileInfo]:
	"""Build FileInfo records, keeping ids unique.

	A package index file whose collapsed id matches a sibling module
	(`pkg.py` next to `pkg/__init__.py`) keeps its uncollapsed id instead.
	Any other files that still share an id (`a/b.py` and `a.b.py`;
	`src/tests/foo.rs` and `tests/foo.rs`) leave it to one keeper: a
	primary-root file before an auxiliary one, a stem free of the name
	separator before a dotted one, then the first in walk order. The rest
	are keyed by their relative path, extension included.
	"""
	entries = list(rel_paths)
	roots = dict(entries)
	order = {rel: i for i, (rel, _) in enumerate(entries)}
	names = {rel: to_module_name(rel, family, src_root) for rel, src_root in entries}
	full_names = {rel: to_module_name(rel, family, src_root, collapse_index=False) for rel, src_root in entries}

	shared_by_id: Dict[str, List[str]] = defaultdict(list)
	for rel, _ in entries:
		shared_by_id[to_module_id(names[rel], family)].append(rel)

	candidates: Dict[str, str] = {}
	for rel, _ in entries:
		module_id = to_module_id(names[rel], family)
		if len(shared_by_id[module_id]) > 1 and full_names[rel] != names[rel]:
			module_id = to_module_id(full_names[rel], family)
		candidates[rel] = module_id

	claimed: Dict[str, List[str]] = defaultdict(list)
	for rel, _ in entries:
		claimed[candidates[rel]].append(rel)

	def preference(rel: str) -> Tuple[bool, bool, int]:
		return (
			roots[rel] != family.primary_root,
			family.separator in PurePosixPath(rel).stem,
			order[rel],
		)

	files: List[FileInfo] = []
	for rel, src_root in entries:
		name = names[rel]
		module_id = to_module_id(name, family)
		unique_id = candidates[rel]
		contenders = claimed[unique_id]
		if len(contenders) > 1 and min(contenders, key=preference) != rel:
			unique_id = rel
		if unique_id != module_id:
			logger.warning(
				"Module id %s is shared by %s; using %s for %s",
				module_id,
				", ".join(shared_by_id[module_id]),
				unique_id,
				rel,
			)
		files.append(
			FileInfo(
				path=str(root / rel),
				rel_path=rel,
				root=src_root,
				module_name=name,
				module_id=unique_id,
			)
		)
	return files
