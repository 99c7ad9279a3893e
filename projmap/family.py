"""Language family descriptors.

A family bundles everything the pipeline needs to know about one language:
file layout conventions, the module extractor and the dependency reader. The
family is picked once by marker-file detection and passed down, so no other
stage branches on the language.
"""

from __future__ import annotations

import subprocess
from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, List, Optional, Tuple

from .model import Dependency, Extraction, FileInfo, ModuleKind


class ModuleExtractor(ABC):
	"""Turns the text of one source file into a Module and its raw import targets."""

	@abstractmethod
	def extract(self, text: str, source: FileInfo) -> Extraction:
		"""Raise ExtractionError when the file cannot be understood."""

	@abstractmethod
	def infer_kind(self, rel_path: str) -> ModuleKind:
		...


# subprocess.run compatible callable, injectable for tests.
CommandRunner = Callable[..., "subprocess.CompletedProcess[str]"]
DependencyReader = Callable[[Path, Optional[CommandRunner]], List[Dependency]]


@dataclass(frozen=True)
class LanguageFamily:
	name: str
	extension: str
	separator: str
	index_stem: str
	# None means the whole project tree is one root.
	primary_root: Optional[str]
	auxiliary_roots: Tuple[str, ...]
	extractor: ModuleExtractor
	read_dependencies: DependencyReader
