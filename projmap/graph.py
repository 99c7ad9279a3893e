from __future__ import annotations

import logging
from typing import Dict, Iterator, List, Optional, Set

from .config import AnalyzerConfig
from .model import (
    MetricsMap,
    ModuleKind,
    ModuleMetrics,
    ProjectProblems,
    ProjectStructure,
    RelationKind,
)


logger = logging.getLogger(__name__)

ENTRY_KINDS = {ModuleKind.BINARY, ModuleKind.LIBRARY}


def count_lines(path: str) -> int:
    """Physical line count of a file, split on \\n only; 0 when it cannot be read."""
    try:
        with open(path, "r", encoding="utf-8", newline="") as fh:
            text = fh.read()
    except (OSError, UnicodeDecodeError) as e:
        logger.debug("Cannot count lines of %s: %s", path, e)
        return 0
    return text.count("\n") + (1 if text and not text.endswith("\n") else 0)


class ModuleGraph:
    """Read-only view over a ProjectStructure's modules and relationships."""

    def __init__(self, structure: ProjectStructure):
        self.structure = structure
        self.successors: Dict[str, List[str]] = {}
        self.incoming: Dict[str, int] = {}
        self.outgoing: Dict[str, int] = {}
        self.used: Set[str] = set()
        for rel in structure.relationships:
            self.successors.setdefault(rel.from_, []).append(rel.to)
            self.outgoing[rel.from_] = self.outgoing.get(rel.from_, 0) + 1
            self.incoming[rel.to] = self.incoming.get(rel.to, 0) + 1
            if rel.kind == RelationKind.USES:
                self.used.add(rel.to)

    def detect_cycles(self) -> List[List[str]]:
        """Find cycles by depth-first search from every unvisited module.

        Each back-edge to a node on the current path records the path from
        that node to the current one. Overlapping and repeated cycles are kept.
        """
        cycles: List[List[str]] = []
        visited: Set[str] = set()
        for module in self.structure.modules:
            if module.id not in visited:
                self._dfs_cycles(module.id, visited, cycles)
        return cycles

    def _dfs_cycles(self, start: str, visited: Set[str], cycles: List[List[str]]) -> None:
        path: List[str] = [start]
        on_path: Set[str] = {start}
        visited.add(start)
        frames: List[Iterator[str]] = [iter(self.successors.get(start, []))]

        while frames:
            target: Optional[str] = next(frames[-1], None)
            if target is None:
                frames.pop()
                on_path.discard(path.pop())
                continue
            if target not in visited:
                visited.add(target)
                on_path.add(target)
                path.append(target)
                frames.append(iter(self.successors.get(target, [])))
            elif target in on_path:
                cycles.append(path[path.index(target):])

    def calculate_metrics(self) -> MetricsMap:
        metrics: MetricsMap = {}
        for module in self.structure.modules:
            metrics[module.id] = ModuleMetrics(
                lines_of_code=count_lines(module.path),
                incoming_edge_count=self.incoming.get(module.id, 0),
                outgoing_edge_count=self.outgoing.get(module.id, 0),
                complexity_score=len(module.items),
            )
        return metrics

    def find_unused_modules(self) -> List[str]:
        """Names of modules no Uses edge points at, entry points excepted."""
        return [
            m.name
            for m in self.structure.modules
            if m.id not in self.used and m.kind not in ENTRY_KINDS
        ]


def analyze_problems(structure: ProjectStructure, config: Optional[AnalyzerConfig] = None) -> ProjectProblems:
    config = config or AnalyzerConfig()
    graph = ModuleGraph(structure)
    metrics = graph.calculate_metrics()

    large_modules: List[str] = []
    highly_coupled: List[str] = []
    for module in structure.modules:
        metric = metrics[module.id]
        if metric.lines_of_code > config.large_module_lines:
            large_modules.append(f"{module.name} ({metric.lines_of_code} lines)")
        if metric.incoming_edge_count > config.coupled_incoming:
            highly_coupled.append(f"{module.name} ({metric.incoming_edge_count} deps)")

    return ProjectProblems(
        cycles=graph.detect_cycles(),
        unused_modules=graph.find_unused_modules(),
        large_modules=large_modules,
        highly_coupled=highly_coupled,
    )
