import os

import pytest

from projmap.errors import UnrecognizedProjectError
from projmap.fs_scan import (
	assign_module_ids,
	detect_family,
	iter_source_files,
	normalize_target,
	python_family,
	rust_family,
	to_module_id,
	to_module_name,
)


@pytest.fixture(scope="module")
def rust():
	return rust_family()


@pytest.fixture(scope="module")
def python():
	return python_family()


def test_rust_module_names(rust):
	assert to_module_name("src/lib.rs", rust, "src") == "lib"
	assert to_module_name("src/graph/schema.rs", rust, "src") == "graph::schema"
	assert to_module_name("src/graph/mod.rs", rust, "src") == "graph"
	assert to_module_name("src/mod.rs", rust, "src") == "mod"
	assert to_module_name("tests/integration.rs", rust, "tests") == "tests::integration"


def test_python_module_names(python):
	assert to_module_name("pkg/sub/__init__.py", python) == "pkg.sub"
	assert to_module_name("pkg/sub/core.py", python) == "pkg.sub.core"
	assert to_module_name("__init__.py", python) == "__init__"
	assert to_module_name("src/pkg/core.py", python) == "src.pkg.core"


def test_ids_and_targets(rust, python):
	assert to_module_id("graph::schema", rust) == "graph/schema"
	assert to_module_id("pkg.sub.core", python) == "pkg/sub/core"
	# distinct names that only an underscore separator would merge
	assert to_module_id("a_b", rust) != to_module_id("a::b", rust)


@pytest.mark.parametrize("target", ["os.path", "flask", "a.b.c", "pkg/core"])
def test_normalize_target_is_idempotent(python, target):
	once = normalize_target(target, python)
	assert normalize_target(once, python) == once


def test_normalize_target_of_module_id_is_noop(rust):
	module_id = to_module_id("graph::schema", rust)
	assert normalize_target(module_id, rust) == module_id


def test_detect_family(tmp_path, write):
	with pytest.raises(UnrecognizedProjectError):
		detect_family(tmp_path)

	write(tmp_path, "requirements.txt", "flask\n")
	assert detect_family(tmp_path).name == "python"

	write(tmp_path, "Cargo.toml", "[package]\nname = 'x'\n")
	assert detect_family(tmp_path).name == "rust"


def test_index_collision_keeps_ids_unique(tmp_path, python):
	files = assign_module_ids(tmp_path, [("pkg.py", None), ("pkg/__init__.py", None), ("pkg/core.py", None)], python)
	assert [(f.module_name, f.module_id) for f in files] == [
		("pkg", "pkg"),
		("pkg", "pkg/__init__"),
		("pkg.core", "pkg/core"),
	]


def test_auxiliary_root_collision_keeps_ids_unique(tmp_path, rust):
	files = assign_module_ids(tmp_path, [("src/tests/foo.rs", "src"), ("tests/foo.rs", "tests")], rust)
	assert [f.module_id for f in files] == ["tests/foo", "tests/foo.rs"]
	assert files[1].path == str(tmp_path / "tests/foo.rs")


def test_iter_source_files_sorted_and_filtered(tmp_path, write):
	write(tmp_path, "b.py")
	write(tmp_path, "a/z.py")
	write(tmp_path, "a/notes.txt")
	write(tmp_path, "__pycache__/cached.py")
	files = iter_source_files(tmp_path, tmp_path, ".py", {"__pycache__"})
	assert files == ["a/z.py", "b.py"]


def test_iter_source_files_skips_symlinks(tmp_path, write):
	target = write(tmp_path / "outside", "real.py")
	write(tmp_path / "proj", "own.py")
	try:
		os.symlink(target, tmp_path / "proj" / "link.py")
		os.symlink(tmp_path / "outside", tmp_path / "proj" / "linked_dir")
	except (OSError, NotImplementedError):
		pytest.skip("symlinks not supported")
	assert iter_source_files(tmp_path / "proj", tmp_path / "proj", ".py", ()) == ["own.py"]


def test_dotted_python_file_yields_to_package_path(tmp_path, python):
	files = assign_module_ids(tmp_path, [("a.b.py", None), ("a/b.py", None)], python)
	assert [(f.module_name, f.module_id) for f in files] == [("a.b", "a.b.py"), ("a.b", "a/b")]


def test_rust_file_named_with_separator_yields_to_nested_path(tmp_path, rust):
	files = assign_module_ids(tmp_path, [("src/a/b.rs", "src"), ("src/a::b.rs", "src")], rust)
	assert [f.module_id for f in files] == ["a/b", "src/a::b.rs"]


def test_shared_id_is_logged(tmp_path, python, caplog):
	with caplog.at_level("WARNING", logger="projmap.fs_scan"):
		assign_module_ids(tmp_path, [("a.b.py", None), ("a/b.py", None)], python)
	assert "using a.b.py for a.b.py" in caplog.text
