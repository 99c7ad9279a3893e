from __future__ import annotations

import json
import subprocess
from pathlib import Path
from textwrap import dedent
from typing import Callable, Dict, List

import pytest


def _write(root: Path, rel: str, text: str = "") -> Path:
	path = root / rel
	path.parent.mkdir(parents=True, exist_ok=True)
	path.write_text(dedent(text))
	return path


class FakeCargo:
	"""Stands in for subprocess.run when `cargo metadata` is invoked."""

	def __init__(self, payload: Dict = None, returncode: int = 0, stdout: str = None, stderr: str = ""):
		self.payload = payload if payload is not None else {"packages": []}
		self.returncode = returncode
		self.stdout = stdout
		self.stderr = stderr
		self.calls: List[List[str]] = []

	def __call__(self, cmd, **kwargs):
		self.calls.append(list(cmd))
		stdout = self.stdout if self.stdout is not None else json.dumps(self.payload)
		return subprocess.CompletedProcess(cmd, self.returncode, stdout=stdout, stderr=self.stderr)


@pytest.fixture
def fake_cargo() -> Callable[..., FakeCargo]:
	return FakeCargo


@pytest.fixture
def python_project(tmp_path: Path) -> Path:
	_write(tmp_path, "requirements.txt", """\
		# runtime
		flask==2.0.1

		""")
	_write(tmp_path, "app/__init__.py")
	_write(tmp_path, "app/__main__.py", """\
		from app.core import run

		run()
		""")
	_write(tmp_path, "app/core.py", """\
		import os
		from app import util

		class Runner(object):
			def _start(self):
				pass

		def run():
			return Runner()
		""")
	_write(tmp_path, "app/util.py", """\
		def _helper():
			return 1
		""")
	_write(tmp_path, "tests/test_core.py", """\
		import app.core

		def test_run():
			assert app.core.run()
		""")
	return tmp_path


@pytest.fixture
def rust_project(tmp_path: Path) -> Path:
	_write(tmp_path, "Cargo.toml", """\
		[package]
		name = "demo"
		version = "0.1.0"
		""")
	_write(tmp_path, "src/a.rs", "use b;\n")
	_write(tmp_path, "src/b.rs", "use a;\n")
	return tmp_path


@pytest.fixture
def write() -> Callable[..., Path]:
	return _write
