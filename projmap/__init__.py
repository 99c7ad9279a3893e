"""projmap: structural maps of Rust and Python projects.

Modules:
- model.py: pydantic records for modules, items, dependencies and relationships.
- fs_scan.py: project detection, source enumeration and module path naming.
- rust_parse.py: tree-sitter extraction of Rust modules.
- py_scan.py: line-scanning extraction of Python modules.
- deps.py: declared third-party dependencies.
- walker.py: per-file extraction over the source roots.
- relations.py: Uses and Declares edges.
- graph.py: cycles, metrics, unused modules and problem reports.
- project.py: the analyze_project / analyze_problems entry points.
"""

from .project import ProjectBuilder, analyze_problems, analyze_project, calculate_metrics

__all__ = [
	"ProjectBuilder",
	"analyze_problems",
	"analyze_project",
	"calculate_metrics",
]
