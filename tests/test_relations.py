from projmap.fs_scan import python_family, rust_family
from projmap.model import Extraction, Module, ModuleKind, RelationKind
from projmap.relations import build_relationships


def _extraction(module_id, name, imports=()):
	module = Module(id=module_id, name=name, path=f"/proj/{module_id}", kind=ModuleKind.PLAIN)
	return Extraction(module=module, imports=list(imports))


def _edges(relationships):
	return [(r.from_, r.to, r.kind) for r in relationships]


def test_uses_then_declares_in_module_order():
	extractions = [
		_extraction("graph", "graph", ["schema", "std"]),
		_extraction("graph/schema", "graph::schema", ["serde"]),
		_extraction("orphan/child", "orphan::child"),
	]
	assert _edges(build_relationships(extractions, rust_family())) == [
		("graph", "schema", RelationKind.USES),
		("graph", "std", RelationKind.USES),
		("graph/schema", "serde", RelationKind.USES),
		("graph", "graph/schema", RelationKind.DECLARES),
	]


def test_python_targets_are_normalized():
	extractions = [_extraction("app/core", "app.core", ["os.path", "app"])]
	edges = _edges(build_relationships(extractions, python_family()))
	assert edges == [
		("app/core", "os/path", RelationKind.USES),
		("app/core", "app", RelationKind.USES),
	]


def test_declares_uses_parent_id_not_index_alias():
	extractions = [
		_extraction("pkg", "pkg"),
		_extraction("pkg/__init__", "pkg"),
		_extraction("pkg/core", "pkg.core"),
	]
	edges = _edges(build_relationships(extractions, python_family()))
	assert edges == [("pkg", "pkg/core", RelationKind.DECLARES)]
