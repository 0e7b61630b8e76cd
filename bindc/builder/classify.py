# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""Declaration dispatch to the matching IR builder."""

from __future__ import annotations

from bindc.core.diagnostics import BindError, raise_if_errors
from bindc.directives.directive_set import DirectiveSet
from bindc.emit import SourceSink
from bindc.ir.nodes import IRNode
from bindc.parser.ast import EnumDecl, FnDecl, ImplDecl, Item, StructDecl
from bindc.registry import RecordRegistry

from .enumeration import build_enumeration
from .function import build_callable
from .impl import build_method_block
from .record import build_record


def classify(
	item: Item,
	directives: DirectiveSet,
	*,
	registry: RecordRegistry,
	sink: SourceSink,
	attr_name: str = "bind",
) -> IRNode:
	"""
	Build the IR node for one annotated declaration.

	The declaration is always handed to `sink`, even when the build fails:
	functions before building, everything else after. Directives left
	unconsumed by a successful build are reported as a failure.
	"""
	if isinstance(item, FnDecl):
		sink.preserve(item)
		node: IRNode = build_callable(item.sig, directives, vis=item.vis, attrs=item.attrs)
	else:
		try:
			if isinstance(item, StructDecl):
				node = build_record(item, directives, registry, attr_name=attr_name)
			elif isinstance(item, ImplDecl):
				node = build_method_block(item, directives, registry, attr_name=attr_name)
			elif isinstance(item, EnumDecl):
				node = build_enumeration(item, directives, attr_name=attr_name)
			else:
				raise BindError.at(
					item.span,
					f"only function, record, enumeration, or method block may carry #[{attr_name}]",
					code="E-ITEM-KIND",
				)
		finally:
			sink.preserve(item)
	raise_if_errors(directives.check_used())
	return node


__all__ = ["classify"]
