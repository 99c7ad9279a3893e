from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Optional, Tuple

from .config import AnalyzerConfig
from .errors import ExtractionError
from .family import LanguageFamily
from .fs_scan import assign_module_ids, iter_source_files
from .model import Extraction, FileInfo


logger = logging.getLogger(__name__)


def scan_source_files(root: Path, family: LanguageFamily, config: AnalyzerConfig) -> List[FileInfo]:
	"""Enumerate source files root by root: the primary root, then each auxiliary root."""
	if family.primary_root is None:
		roots: List[Optional[str]] = [None]
	else:
		roots = [family.primary_root, *family.auxiliary_roots]

	# Named source roots are walked in full; the exclude list only prunes a whole-tree walk.
	exclude = config.exclude_dirs if family.primary_root is None else ()

	entries: List[Tuple[str, Optional[str]]] = []
	for src_root in roots:
		directory = root if src_root is None else root / src_root
		if not directory.is_dir():
			logger.debug("Skipping missing source root %s", directory)
			continue
		for rel in iter_source_files(root, directory, family.extension, exclude):
			entries.append((rel, src_root))
	return assign_module_ids(root, entries, family)


def read_source(path: str) -> str:
	try:
		with open(path, "r", encoding="utf-8") as fh:
			return fh.read()
	except (OSError, UnicodeDecodeError) as e:
		raise ExtractionError(path, str(e)) from e


def walk_sources(root: Path, family: LanguageFamily, config: Optional[AnalyzerConfig] = None) -> List[Extraction]:
	config = config or AnalyzerConfig()
	files = scan_source_files(root, family, config)
	extractions: List[Extraction] = []
	skipped = 0
	for f in files:
		try:
			text = read_source(f.path)
			extractions.append(family.extractor.extract(text, f))
		except ExtractionError as e:
			skipped += 1
			logger.warning("%s", e)
	logger.info("Extracted %d of %d %s files (%d skipped)", len(extractions), len(files), family.name, skipped)
	return extractions
