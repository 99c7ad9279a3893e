"""Top-level analysis operations.

`analyze_project` runs the whole batch: family detection, dependency
resolution, source walk, relationship building. `analyze_problems` works on
an already built ProjectStructure and never touches it.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Optional, Sequence, Union

from .config import AnalyzerConfig
from .errors import ProjectNotFoundError
from .family import CommandRunner, LanguageFamily
from .fs_scan import detect_family
from .graph import ModuleGraph, analyze_problems
from .model import Dependency, Extraction, MetricsMap, ProjectStructure
from .relations import build_relationships
from .walker import walk_sources


logger = logging.getLogger(__name__)


class ProjectBuilder:
	"""Collects the results of each pipeline stage; build() may be called once."""

	def __init__(self, root_path: Path, family: LanguageFamily):
		self.root_path = root_path
		self.family = family
		self._dependencies: List[Dependency] = []
		self._extractions: List[Extraction] = []
		self._built = False

	def add_dependencies(self, dependencies: Sequence[Dependency]) -> "ProjectBuilder":
		self._check_open()
		self._dependencies.extend(dependencies)
		return self

	def add_extractions(self, extractions: Sequence[Extraction]) -> "ProjectBuilder":
		self._check_open()
		self._extractions.extend(extractions)
		return self

	def build(self) -> ProjectStructure:
		self._check_open()
		self._built = True
		relationships = build_relationships(self._extractions, self.family)
		return ProjectStructure(
			root_path=str(self.root_path),
			modules=[e.module for e in self._extractions],
			dependencies=list(self._dependencies),
			relationships=relationships,
		)

	def _check_open(self) -> None:
		if self._built:
			raise RuntimeError("ProjectBuilder has already been built")


def analyze_project(
	root: Union[str, Path],
	config: Optional[AnalyzerConfig] = None,
	runner: Optional[CommandRunner] = None,
) -> ProjectStructure:
	config = config or AnalyzerConfig()
	root_path = Path(root)
	if not root_path.exists():
		raise ProjectNotFoundError(str(root_path))

	family = detect_family(root_path, config.rust_auxiliary_roots)
	logger.info("Analyzing %s project at %s", family.name, root_path)

	builder = ProjectBuilder(root_path, family)
	builder.add_dependencies(family.read_dependencies(root_path, runner))
	builder.add_extractions(walk_sources(root_path, family, config))
	structure = builder.build()
	logger.info(
		"Found %d modules, %d dependencies, %d relationships",
		len(structure.modules),
		len(structure.dependencies),
		len(structure.relationships),
	)
	return structure


def calculate_metrics(structure: ProjectStructure) -> MetricsMap:
	return ModuleGraph(structure).calculate_metrics()


__all__ = [
	"ProjectBuilder",
	"analyze_project",
	"analyze_problems",
	"calculate_metrics",
]
