# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Command line front end: compile annotated declarations to binding IR.

Without --json every IR node is printed as one JSON line on stdout and
diagnostics go to stderr as `file:line:col: severity: message`. With --json a
single object `{"exit_code", "nodes", "diagnostics"}` is printed.
"""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import Any, Dict, List

from bindc.core.diagnostics import Diagnostic
from bindc.core.span import Span
from bindc.driver import compile_source
from bindc.emit import SourceBuffer
from bindc.ir.encode import node_to_dict
from bindc.registry import InMemoryRecordRegistry


def _diag_to_json(diag: Diagnostic, source: Path) -> dict:
	"""Render a Diagnostic to a structured JSON-friendly dict."""
	return {
		"phase": diag.phase or "bind",
		"code": diag.code,
		"message": diag.message,
		"severity": diag.severity,
		"file": diag.span.file or str(source),
		"line": diag.span.line,
		"column": diag.span.column,
		"notes": list(diag.notes),
	}


def main(argv: list[str] | None = None) -> int:
	"""
	Compile each source file in order against one shared record registry, so a
	record bound in an earlier file can be constructed from a later one.
	"""
	parser = argparse.ArgumentParser(prog="bindc", description="Compile annotated declarations to binding IR")
	parser.add_argument("source", type=Path, nargs="+", help="Path(s) to declaration source file(s)")
	parser.add_argument("--json", action="store_true", help="Emit nodes and diagnostics as one JSON object")
	parser.add_argument(
		"--attr",
		default="bind",
		metavar="NAME",
		help="Name of the directive attribute (default: bind)",
	)
	parser.add_argument("--emit-source", type=Path, metavar="PATH", help="Write the preserved declarations to PATH")
	parser.add_argument(
		"--fail-fast",
		action="store_true",
		help="Stop at the first declaration that fails to compile",
	)
	args = parser.parse_args(argv)

	registry = InMemoryRecordRegistry()
	sink = SourceBuffer()
	nodes: List[Dict[str, Any]] = []
	diagnostics: List[tuple[Diagnostic, Path]] = []

	for source_path in args.source:
		try:
			text = source_path.read_text()
		except OSError as err:
			diag = Diagnostic(
				message=f"cannot read source: {err.strerror or err}",
				code="E-IO",
				phase="io",
				span=Span(file=str(source_path)),
			)
			diagnostics.append((diag, source_path))
			if args.fail_fast:
				break
			continue
		failed = False
		for result in compile_source(text, file=str(source_path), registry=registry, sink=sink, attr_name=args.attr):
			if result.node is not None:
				nodes.append(node_to_dict(result.node))
			for diag in result.diagnostics:
				diagnostics.append((diag, source_path))
			if result.diagnostics and args.fail_fast:
				failed = True
				break
		if failed:
			break

	if args.emit_source is not None:
		args.emit_source.write_text(sink.getvalue())

	exit_code = 1 if diagnostics else 0
	if args.json:
		payload = {
			"exit_code": exit_code,
			"nodes": nodes,
			"diagnostics": [_diag_to_json(d, path) for d, path in diagnostics],
		}
		print(json.dumps(payload))
	else:
		for node in nodes:
			print(json.dumps(node))
		for d, path in diagnostics:
			print(d.render(str(path)), file=sys.stderr)
	return exit_code


__all__ = ["main"]
