from __future__ import annotations


class ProjectMapError(Exception):
	"""Base exception for analysis errors."""


class ProjectNotFoundError(ProjectMapError):
	def __init__(self, path: str):
		super().__init__(f"Project path does not exist: {path}")
		self.path = path


class UnrecognizedProjectError(ProjectMapError):
	def __init__(self, path: str):
		super().__init__(f"Not a valid Rust or Python project: {path}")
		self.path = path


class ManifestResolutionError(ProjectMapError):
	"""Dependency manifest could not be read or resolved. Aborts the analysis."""


class ExtractionError(ProjectMapError):
	"""A single source file could not be extracted. The walker skips the file."""

	def __init__(self, path: str, reason: str):
		super().__init__(f"Failed to parse {path}: {reason}")
		self.path = path
		self.reason = reason
