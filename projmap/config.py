from __future__ import annotations

from typing import FrozenSet, Tuple

from pydantic import BaseModel, Field


DEFAULT_EXCLUDE_DIRS: FrozenSet[str] = frozenset(
	{".git", "node_modules", "dist", "build", "__pycache__", "target", ".venv", "venv", ".tox"}
)


class AnalyzerConfig(BaseModel):
	# Problem thresholds; a module must exceed them strictly to be reported.
	large_module_lines: int = Field(default=500, ge=0)
	coupled_incoming: int = Field(default=10, ge=0)

	rust_auxiliary_roots: Tuple[str, ...] = ("tests", "examples", "benches")
	exclude_dirs: FrozenSet[str] = DEFAULT_EXCLUDE_DIRS
