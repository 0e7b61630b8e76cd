# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""Method-block builder for impl declarations."""

from __future__ import annotations

from typing import List

from bindc.core.diagnostics import BindError, Diagnostic, raise_if_errors
from bindc.directives.directive_set import DirectiveSet
from bindc.directives.parse import find_directives
from bindc.ir.nodes import Callable, MethodBlock
from bindc.parser.ast import FnDecl, ImplDecl, PathType, strip_parens
from bindc.registry import RecordRegistry

from .function import build_callable


def resolve_target(decl: ImplDecl) -> str:
	"""Identifier of the record an impl block targets (last path segment)."""
	target = strip_parens(decl.self_ty)
	if not isinstance(target, PathType):
		raise BindError.at(
			target.span,
			f"unsupported target type `{target.render()}` for a method block",
			code="E-IMPL-TARGET",
		)
	for seg in target.segments:
		if seg.args is not None:
			raise BindError.at(target.span, "paths with type parameters are not supported yet", code="E-IMPL-TARGET")
	return target.segments[-1].name


def build_method_block(
	decl: ImplDecl,
	directives: DirectiveSet,
	registry: RecordRegistry,
	*,
	attr_name: str = "bind",
) -> MethodBlock:
	"""
	Build a MethodBlock from an impl declaration.

	Methods without a directive attribute are skipped. Shape, visibility and
	registry problems fail immediately; unused method directives are collected
	and reported together at the end.
	"""
	name = resolve_target(decl)
	js_name = name
	items: List[Callable] = []
	unused: List[Diagnostic] = []
	for member in decl.members:
		if not isinstance(member, FnDecl):
			raise BindError.at(
				member.span,
				f"unsupported impl item `{member.kind} {member.name}`; only methods can be bound",
				code="E-IMPL-ITEM",
			)
		method_directives = find_directives(member.attrs, attr_name)
		if not method_directives.exists:
			continue
		if method_directives.flag("constructor") is not None:
			js_name = registry.lookup_and_reconcile(name, method_directives, member.sig.span)
		if not member.vis.is_public:
			raise BindError.at(
				member.sig.span,
				f"method `{member.sig.name}` must be `pub` to be bound",
				code="E-IMPL-VIS",
			)
		items.append(build_callable(member.sig, method_directives, vis=member.vis, attrs=member.attrs, parent=name))
		unused.extend(method_directives.check_used())
	raise_if_errors(unused)
	return MethodBlock(name=name, js_name=js_name, items=tuple(items))


__all__ = ["resolve_target", "build_method_block"]
