from __future__ import annotations

import argparse
import json
import logging
import os
import sys

import uvicorn

from projmap.config import AnalyzerConfig
from projmap.errors import ProjectMapError
from projmap.model import ProjectStructure
from projmap.project import analyze_problems, analyze_project, calculate_metrics


def _config(args: argparse.Namespace) -> AnalyzerConfig:
	overrides = {}
	if getattr(args, "large_lines", None) is not None:
		overrides["large_module_lines"] = args.large_lines
	if getattr(args, "coupled_incoming", None) is not None:
		overrides["coupled_incoming"] = args.coupled_incoming
	return AnalyzerConfig(**overrides)


def _load_structure(args: argparse.Namespace, config: AnalyzerConfig) -> ProjectStructure:
	if args.structure:
		with open(args.structure, "r", encoding="utf-8") as fh:
			return ProjectStructure.model_validate_json(fh.read())
	if not args.path:
		raise SystemExit("error: a project PATH or --structure FILE is required")
	return analyze_project(os.path.abspath(args.path), config)


def cmd_analyze(args: argparse.Namespace) -> None:
	structure = analyze_project(os.path.abspath(args.path), _config(args))
	print(structure.to_json())


def cmd_problems(args: argparse.Namespace) -> None:
	config = _config(args)
	problems = analyze_problems(_load_structure(args, config), config)
	print(json.dumps(problems.model_dump(mode="json"), indent=2))


def cmd_metrics(args: argparse.Namespace) -> None:
	metrics = calculate_metrics(_load_structure(args, _config(args)))
	print(json.dumps({k: m.model_dump(mode="json") for k, m in metrics.items()}, indent=2))


def cmd_serve(args: argparse.Namespace) -> None:
	uvicorn.run("api:app", host=args.host, port=args.port, reload=args.reload)


def main() -> None:
	parser = argparse.ArgumentParser(prog="projmap")
	parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
	sub = parser.add_subparsers(dest="cmd", required=True)

	pa = sub.add_parser("analyze", help="Analyze a project and print its structure JSON")
	pa.add_argument("path", help="Path to project root")
	pa.set_defaults(func=cmd_analyze)

	for name, func, help_text in (
		("problems", cmd_problems, "Report cycles, unused, large and highly coupled modules"),
		("metrics", cmd_metrics, "Print per-module metrics"),
	):
		pp = sub.add_parser(name, help=help_text)
		pp.add_argument("path", nargs="?", help="Path to project root")
		pp.add_argument("--structure", help="Read a structure JSON produced by 'analyze' instead")
		pp.add_argument("--large-lines", type=int, help="Lines above which a module is large (default 500)")
		pp.add_argument("--coupled-incoming", type=int, help="Incoming edges above which a module is highly coupled (default 10)")
		pp.set_defaults(func=func)

	ps = sub.add_parser("serve", help="Run FastAPI server")
	ps.add_argument("--host", default="127.0.0.1")
	ps.add_argument("--port", type=int, default=8000)
	ps.add_argument("--reload", action="store_true")
	ps.set_defaults(func=cmd_serve)

	args = parser.parse_args()
	level = logging.DEBUG if args.verbose else logging.WARNING
	logging.basicConfig(level=level, format="%(levelname)s: %(message)s")

	try:
		args.func(args)
	except ProjectMapError as e:
		print(f"error: {e}", file=sys.stderr)
		sys.exit(1)


if __name__ == "__main__":
	main()
