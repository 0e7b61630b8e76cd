# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Enumeration builder.

Discriminants follow a running `previous` value that starts at -1: a variant
without a discriminant gets `previous + 1`, an explicit literal sets the value
outright, and either way `previous` becomes the value just assigned.
"""

from __future__ import annotations

from typing import List

from bindc.core.diagnostics import BindError, Diagnostic, error, raise_if_errors
from bindc.directives.directive_set import DirectiveSet
from bindc.directives.parse import find_directives
from bindc.ir.nodes import EnumVariant, Enumeration
from bindc.parser.ast import EnumDecl, Expr, IntLit, Neg, StructShape

from .docs import extract_doc_comments

I32_MAX = 2**31 - 1


def literal_discriminant(expr: Expr) -> int:
	"""
	Value of `N` or `-N` where N is an integer literal whose magnitude fits i32.

	Anything else, including `-2147483648`, raises BindError.
	"""
	sign = 1
	inner = expr
	if isinstance(inner, Neg):
		sign = -1
		inner = inner.operand
	if not isinstance(inner, IntLit):
		raise BindError.at(expr.span, "only signed 32-bit literal discriminants are supported", code="E-ENUM-DISCRIMINANT")
	magnitude = inner.value
	if magnitude > I32_MAX:
		raise BindError.at(
			inner.span,
			f"discriminant `{expr.render()}` does not fit a signed 32-bit integer",
			code="E-ENUM-DISCRIMINANT",
		)
	return sign * magnitude


def build_enumeration(decl: EnumDecl, directives: DirectiveSet, *, attr_name: str = "bind") -> Enumeration:
	if not decl.vis.is_public:
		raise BindError.at(decl.span, f"enumeration `{decl.name}` must be `pub` to be bound", code="E-ENUM-VIS")
	if not decl.variants:
		raise BindError.at(decl.span, f"cannot bind empty enumeration `{decl.name}`", code="E-ENUM-EMPTY")

	js_name = directives.string_value("js_name")
	errors: List[Diagnostic] = []
	if js_name == "":
		errors.append(error(decl.span, f"external name of `{decl.name}` must not be empty", code="E-ENUM-NAME"))
	variants: List[EnumVariant] = []
	previous = -1
	for variant in decl.variants:
		if variant.shape is not StructShape.UNIT:
			raise BindError.at(
				variant.span,
				f"variant `{variant.name}` carries data; only unit variants are supported",
				code="E-ENUM-SHAPE",
			)
		if variant.discriminant is not None:
			value = literal_discriminant(variant.discriminant)
		else:
			value = previous + 1
			if value > I32_MAX:
				raise BindError.at(
					variant.span,
					f"implicit discriminant of `{variant.name}` overflows a signed 32-bit integer",
					code="E-ENUM-DISCRIMINANT",
				)
		previous = value
		variant_directives = find_directives(variant.attrs, attr_name)
		variant_js_name = variant_directives.string_value("js_name")
		if variant_js_name == "":
			errors.append(
				error(variant.span, f"external name of variant `{variant.name}` must not be empty", code="E-ENUM-NAME")
			)
		variants.append(
			EnumVariant(
				name=variant.name,
				js_name=variant_js_name if variant_js_name is not None else variant.name,
				val=value,
				comments=tuple(extract_doc_comments(variant.attrs)),
			)
		)
		errors.extend(variant_directives.check_used())

	namespace = directives.string_list("namespace")
	raise_if_errors(errors)
	return Enumeration(
		name=decl.name,
		js_name=js_name if js_name is not None else decl.name,
		variants=tuple(variants),
		namespace=tuple(namespace) if namespace is not None else None,
		comments=tuple(extract_doc_comments(decl.attrs)),
	)


__all__ = ["I32_MAX", "literal_discriminant", "build_enumeration"]
