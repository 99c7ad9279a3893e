from __future__ import annotations

from typing import List, Sequence, Set

from .family import LanguageFamily
from .fs_scan import normalize_target, parent_name, to_module_id
from .model import Extraction, RelationKind, Relationship


def build_uses(extractions: Sequence[Extraction], family: LanguageFamily) -> List[Relationship]:
	edges: List[Relationship] = []
	for extraction in extractions:
		for target in extraction.imports:
			edges.append(
				Relationship(
					from_=extraction.module.id,
					to=normalize_target(target, family),
					kind=RelationKind.USES,
				)
			)
	return edges


def build_declares(extractions: Sequence[Extraction], family: LanguageFamily) -> List[Relationship]:
	known: Set[str] = {e.module.id for e in extractions}
	edges: List[Relationship] = []
	for extraction in extractions:
		module = extraction.module
		parent = parent_name(module.name, family)
		if parent is None:
			continue
		parent_id = to_module_id(parent, family)
		if parent_id in known:
			edges.append(Relationship(from_=parent_id, to=module.id, kind=RelationKind.DECLARES))
	return edges


def build_relationships(extractions: Sequence[Extraction], family: LanguageFamily) -> List[Relationship]:
	"""Uses edges in module order, followed by Declares edges."""
	return build_uses(extractions, family) + build_declares(extractions, family)
