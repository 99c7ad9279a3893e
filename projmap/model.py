from __future__ import annotations

from enum import Enum
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class ModuleKind(str, Enum):
	BINARY = "binary"
	LIBRARY = "library"
	PLAIN = "module"
	TEST = "test"
	EXAMPLE = "example"
	BENCHMARK = "benchmark"


class Visibility(str, Enum):
	PUBLIC = "public"
	PRIVATE = "private"
	CRATE = "crate"
	SUPER = "super"


class ItemKind(str, Enum):
	FUNCTION = "function"
	STRUCT = "struct"
	ENUM = "enum"
	TRAIT = "trait"
	CONST = "const"
	STATIC = "static"
	TYPE_ALIAS = "type"
	MACRO = "macro"


class DependencyKind(str, Enum):
	NORMAL = "normal"
	DEV = "dev"
	BUILD = "build"


class RelationKind(str, Enum):
	USES = "uses"
	DECLARES = "declares"


class FileInfo(BaseModel):
	path: str
	rel_path: str
	root: Optional[str] = None
	module_name: str
	module_id: str


class Item(BaseModel):
	model_config = ConfigDict(frozen=True)

	name: str
	kind: ItemKind
	visibility: Visibility


class Module(BaseModel):
	model_config = ConfigDict(frozen=True)

	id: str
	name: str
	path: str
	kind: ModuleKind
	visibility: Visibility = Visibility.PUBLIC
	items: List[Item] = []


class Extraction(BaseModel):
	model_config = ConfigDict(frozen=True)

	module: Module
	imports: List[str] = []


class Dependency(BaseModel):
	model_config = ConfigDict(frozen=True)

	name: str
	version: str
	kind: DependencyKind = DependencyKind.NORMAL


class Relationship(BaseModel):
	model_config = ConfigDict(frozen=True, populate_by_name=True)

	from_: str = Field(alias="from")
	to: str
	kind: RelationKind


class ProjectStructure(BaseModel):
	model_config = ConfigDict(frozen=True)

	root_path: str
	modules: List[Module] = []
	dependencies: List[Dependency] = []
	relationships: List[Relationship] = []

	def to_json(self, indent: Optional[int] = 2) -> str:
		return self.model_dump_json(by_alias=True, indent=indent)


class ModuleMetrics(BaseModel):
	lines_of_code: int
	incoming_edge_count: int
	outgoing_edge_count: int
	complexity_score: int


class ProjectProblems(BaseModel):
	cycles: List[List[str]] = []
	unused_modules: List[str] = []
	large_modules: List[str] = []
	highly_coupled: List[str] = []


MetricsMap = Dict[str, ModuleMetrics]
