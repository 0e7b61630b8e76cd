# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Per-declaration compilation loop.

Each annotated item is compiled on its own: its failure is reported in its
ItemResult and the loop moves on. Nothing is collected across items except
what the registry and the sink record as a side effect.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Iterator, List, Optional

from lark.exceptions import UnexpectedCharacters, UnexpectedInput, UnexpectedToken

from bindc.builder.classify import classify
from bindc.core.diagnostics import BindError, Diagnostic
from bindc.core.span import Span
from bindc.directives.parse import find_directives, has_directive_attr
from bindc.emit import SourceBuffer, SourceSink
from bindc.ir.nodes import IRNode
from bindc.parser.ast import Item, Module
from bindc.parser.parser import parse_module
from bindc.registry import InMemoryRecordRegistry, RecordRegistry


@dataclass
class ItemResult:
	"""Outcome for one annotated declaration (item is None for syntax errors)."""

	item: Optional[Item]
	node: Optional[IRNode] = None
	diagnostics: List[Diagnostic] = field(default_factory=list)

	@property
	def ok(self) -> bool:
		return self.node is not None and not self.diagnostics


def _in_file(diagnostics: List[Diagnostic], file: Optional[str]) -> List[Diagnostic]:
	if file is None:
		return list(diagnostics)
	return [d if d.span.file is not None else replace(d, span=replace(d.span, file=file)) for d in diagnostics]


def compile_module(
	module: Module,
	*,
	registry: RecordRegistry,
	sink: SourceSink,
	attr_name: str = "bind",
) -> Iterator[ItemResult]:
	"""
	Compile every item carrying `#[<attr_name>]`, in source order.

	Items without the attribute are preserved and skipped. Yields one
	ItemResult per annotated item.
	"""
	for item in module.items:
		if not has_directive_attr(item.attrs, attr_name):
			sink.preserve(item)
			continue
		try:
			directives = find_directives(item.attrs, attr_name)
		except BindError as err:
			sink.preserve(item)
			yield ItemResult(item=item, diagnostics=_in_file(err.diagnostics, module.file))
			continue
		try:
			node = classify(item, directives, registry=registry, sink=sink, attr_name=attr_name)
		except BindError as err:
			yield ItemResult(item=item, diagnostics=_in_file(err.diagnostics, module.file))
			continue
		yield ItemResult(item=item, node=node)


def parse_error_diagnostic(err: UnexpectedInput, file: Optional[str] = None) -> Diagnostic:
	"""Convert a lark parse failure into a parser-phase diagnostic."""
	notes: List[str] = []
	if isinstance(err, UnexpectedToken):
		tok = err.token
		message = "unexpected end of input" if tok.type == "$END" else f"unexpected `{tok.value}`"
		if err.expected:
			notes.append("expected one of: " + ", ".join(sorted(err.expected)))
	elif isinstance(err, UnexpectedCharacters):
		message = f"unexpected character `{err.char}`"
	else:
		message = str(err)
	span = Span(file=file, line=getattr(err, "line", None), column=getattr(err, "column", None))
	return Diagnostic(message=message, code="E-PARSE", phase="parser", span=span, notes=notes)


def compile_source(
	source: str,
	*,
	file: Optional[str] = None,
	registry: Optional[RecordRegistry] = None,
	sink: Optional[SourceSink] = None,
	attr_name: str = "bind",
) -> Iterator[ItemResult]:
	"""
	Parse `source` and compile it. A syntax error yields a single result
	with no item and one parser-phase diagnostic.
	"""
	registry = registry if registry is not None else InMemoryRecordRegistry()
	sink = sink if sink is not None else SourceBuffer()
	try:
		module = parse_module(source, file=file)
	except UnexpectedInput as err:
		yield ItemResult(item=None, diagnostics=[parse_error_diagnostic(err, file)])
		return
	yield from compile_module(module, registry=registry, sink=sink, attr_name=attr_name)


__all__ = ["ItemResult", "compile_module", "compile_source", "parse_error_diagnostic"]
