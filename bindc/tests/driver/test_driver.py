# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
from __future__ import annotations

from bindc.driver import compile_module, compile_source
from bindc.emit import SourceBuffer
from bindc.ir.nodes import Callable, Record
from bindc.parser.parser import parse_module
from bindc.registry import InMemoryRecordRegistry


def test_unannotated_items_yield_nothing() -> None:
	sink = SourceBuffer()
	results = list(compile_source("pub fn f() {}\npub struct S;", sink=sink))
	assert results == []
	assert len(sink.chunks) == 2


def test_results_follow_source_order() -> None:
	results = list(compile_source("#[bind]\npub struct S;\n#[bind]\npub fn g() {}"))
	assert [type(r.node) for r in results] == [Record, Callable]
	assert all(r.ok for r in results)


def test_failure_does_not_stop_later_items() -> None:
	source = "#[bind(bogus)]\npub fn a() {}\n#[bind]\npub fn b() {}"
	first, second = compile_source(source, file="lib.rs")
	assert first.node is None and not first.ok
	assert first.diagnostics[0].message == "unknown attribute `bogus`"
	assert first.diagnostics[0].span.file == "lib.rs"
	assert first.diagnostics[0].span.line == 1
	assert second.ok and second.node.name == "b"


def test_syntax_error_yields_one_result() -> None:
	results = list(compile_source("#[bind]\npub fn f( {}\n", file="broken.rs"))
	assert len(results) == 1
	(result,) = results
	assert result.item is None and result.node is None
	(diag,) = result.diagnostics
	assert diag.phase == "parser"
	assert diag.code == "E-PARSE"
	assert diag.message == "unexpected `{`"
	assert diag.notes and diag.notes[0].startswith("expected one of: ")
	assert (diag.span.file, diag.span.line) == ("broken.rs", 2)


def test_unexpected_end_of_input() -> None:
	(result,) = compile_source("pub struct S {")
	assert result.diagnostics[0].message == "unexpected end of input"


def test_unexpected_character() -> None:
	(result,) = compile_source("pub fn f() {}\n§")
	assert result.diagnostics[0].message == "unexpected character `§`"


def test_custom_attribute_name_and_shared_registry() -> None:
	registry = InMemoryRecordRegistry()
	list(compile_source("#[napi]\npub struct Point {}", registry=registry, attr_name="napi"))
	module = parse_module(
		"#[napi]\nimpl Point {\n\t#[napi(constructor)]\n\tpub fn new() -> Self { Point {} }\n}\n#[bind]\npub fn ignored() {}"
	)
	results = list(compile_module(module, registry=registry, sink=SourceBuffer(), attr_name="napi"))
	assert len(results) == 1
	assert results[0].ok
	assert results[0].node.js_name == "Point"
