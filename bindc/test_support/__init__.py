# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Shared helpers for tests that need parsed declarations or built IR.

These keep tests from re-spelling the parse -> directives -> classify steps
and give them a registry/sink pair they can inspect afterwards.
"""

from __future__ import annotations

from typing import List, Optional, Tuple

from bindc.core.diagnostics import BindError, Diagnostic
from bindc.directives.directive_set import DirectiveSet
from bindc.directives.parse import find_directives, parse_directive_list
from bindc.driver import ItemResult, compile_source
from bindc.emit import SourceBuffer
from bindc.ir.nodes import IRNode
from bindc.parser.ast import Item
from bindc.parser.parser import parse_module
from bindc.registry import InMemoryRecordRegistry


def parse_item(source: str) -> Item:
	"""Parse source holding exactly one item."""
	module = parse_module(source)
	assert len(module.items) == 1, f"expected one item, got {len(module.items)}"
	return module.items[0]


def item_with_directives(source: str, attr_name: str = "bind") -> Tuple[Item, DirectiveSet]:
	item = parse_item(source)
	return item, find_directives(item.attrs, attr_name)


def directives(text: str) -> DirectiveSet:
	"""Parse a bare directive list such as `js_name = "x", constructor`."""
	return parse_directive_list(text)


def compile_all(
	source: str,
	*,
	registry: Optional[InMemoryRecordRegistry] = None,
	sink: Optional[SourceBuffer] = None,
) -> List[ItemResult]:
	return list(
		compile_source(
			source,
			file="test.rs",
			registry=registry if registry is not None else InMemoryRecordRegistry(),
			sink=sink if sink is not None else SourceBuffer(),
		)
	)


def compile_one(source: str, *, registry: Optional[InMemoryRecordRegistry] = None) -> IRNode:
	"""Compile source whose single annotated item must succeed; returns its node."""
	results = compile_all(source, registry=registry)
	assert len(results) == 1, f"expected one annotated item, got {len(results)}"
	assert results[0].diagnostics == [], [d.message for d in results[0].diagnostics]
	assert results[0].node is not None
	return results[0].node


def compile_errors(source: str, *, registry: Optional[InMemoryRecordRegistry] = None) -> List[Diagnostic]:
	"""Compile source whose single annotated item must fail; returns its diagnostics."""
	results = compile_all(source, registry=registry)
	assert len(results) == 1, f"expected one annotated item, got {len(results)}"
	assert results[0].node is None
	assert results[0].diagnostics
	return results[0].diagnostics


def messages(err: BindError | List[Diagnostic]) -> List[str]:
	diags = err.diagnostics if isinstance(err, BindError) else err
	return [d.message for d in diags]


def raises_bind_error(fn, *args, **kwargs) -> BindError:
	"""Call `fn` and return the BindError it must raise."""
	import pytest

	with pytest.raises(BindError) as excinfo:
		fn(*args, **kwargs)
	return excinfo.value


__all__ = [
	"parse_item",
	"item_with_directives",
	"directives",
	"compile_all",
	"compile_one",
	"compile_errors",
	"messages",
	"raises_bind_error",
]
