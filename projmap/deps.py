from __future__ import annotations

import json
import logging
import subprocess
from pathlib import Path
from typing import Dict, List, Optional

from .errors import ManifestResolutionError
from .family import CommandRunner
from .model import Dependency, DependencyKind


logger = logging.getLogger(__name__)

PYTHON_MANIFESTS = ("requirements.txt", "setup.py", "pyproject.toml")

_CARGO_KINDS: Dict[Optional[str], DependencyKind] = {
	None: DependencyKind.NORMAL,
	"normal": DependencyKind.NORMAL,
	"dev": DependencyKind.DEV,
	"build": DependencyKind.BUILD,
}


def read_cargo_dependencies(root: Path, runner: Optional[CommandRunner] = None) -> List[Dependency]:
	"""Resolve the crate graph with `cargo metadata` and list every declared dependency."""
	runner = runner or subprocess.run
	manifest = root / "Cargo.toml"
	cmd = ["cargo", "metadata", "--format-version", "1", "--manifest-path", str(manifest)]
	logger.debug("Running %s", " ".join(cmd))
	try:
		proc = runner(cmd, capture_output=True, text=True, check=False, cwd=str(root))
	except OSError as e:
		raise ManifestResolutionError(f"Failed to execute cargo metadata: {e}") from e
	if proc.returncode != 0:
		detail = (proc.stderr or "").strip() or f"exit status {proc.returncode}"
		raise ManifestResolutionError(f"Failed to execute cargo metadata: {detail}")

	try:
		metadata = json.loads(proc.stdout)
	except json.JSONDecodeError as e:
		raise ManifestResolutionError(f"Invalid cargo metadata output: {e}") from e

	dependencies: List[Dependency] = []
	for package in metadata.get("packages", []):
		for dep in package.get("dependencies", []):
			native = dep.get("kind")
			kind = _CARGO_KINDS.get(native)
			if kind is None:
				logger.debug("Unknown dependency kind %r for %s, treating as normal", native, dep.get("name"))
				kind = DependencyKind.NORMAL
			dependencies.append(Dependency(name=dep["name"], version=dep.get("req", "*"), kind=kind))
	return dependencies


def parse_requirements(text: str) -> List[Dependency]:
	dependencies: List[Dependency] = []
	for raw in text.splitlines():
		line = raw.strip()
		if not line or line.startswith("#"):
			continue
		parts = line.split("==")
		name = parts[0].strip()
		version = parts[1].strip() if len(parts) > 1 else "*"
		dependencies.append(Dependency(name=name, version=version, kind=DependencyKind.NORMAL))
	return dependencies


def read_python_dependencies(root: Path, runner: Optional[CommandRunner] = None) -> List[Dependency]:
	"""Read dependencies from the first Python manifest present.

	Only requirements.txt is parsed. setup.py and pyproject.toml mark a Python
	project but their dependency declarations are not extracted.
	"""
	for name in PYTHON_MANIFESTS:
		path = root / name
		if not path.exists():
			continue
		if name != "requirements.txt":
			logger.debug("Dependencies in %s are not extracted", name)
			return []
		try:
			text = path.read_text(encoding="utf-8")
		except (OSError, UnicodeDecodeError) as e:
			raise ManifestResolutionError(f"Failed to read {path}: {e}") from e
		return parse_requirements(text)
	return []
