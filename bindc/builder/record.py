# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""Record builder for struct declarations."""

from __future__ import annotations

from typing import List, Optional

from bindc.core.casing import Case, convert, to_pascal_case
from bindc.core.diagnostics import BindError, Diagnostic, error, raise_if_errors
from bindc.directives.directive_set import DirectiveSet
from bindc.directives.parse import find_directives
from bindc.ir.nodes import Record, RecordField
from bindc.parser.ast import Field, StructDecl
from bindc.registry import RecordRegistry

from .docs import extract_doc_comments
from .function import resolve_case


def _build_field(index: int, field: Field, directives: DirectiveSet, case: Optional[Case]) -> RecordField:
	explicit = directives.string_value("js_name")
	if field.name is None:
		js_name = explicit if explicit is not None else str(index)
	elif explicit is not None:
		js_name = explicit
	else:
		js_name = convert(field.name, case) if case is not None else field.name
	ignored = directives.flag("skip") is not None
	readonly = directives.flag("readonly") is not None
	return RecordField(
		member=field.name if field.name is not None else index,
		js_name=js_name,
		ty=field.ty,
		getter=not ignored,
		setter=not (ignored or readonly),
		ts_type=directives.string_value("type"),
		default=directives.expr("default"),
		comments=tuple(extract_doc_comments(field.attrs)),
	)


def build_record(
	decl: StructDecl,
	directives: DirectiveSet,
	registry: RecordRegistry,
	*,
	attr_name: str = "bind",
) -> Record:
	"""
	Build a Record from a struct and register it.

	Only `pub` fields are exposed; private fields' attributes are never read.
	Field directive errors are collected across all fields before failing.
	"""
	errors: List[Diagnostic] = []
	js_name = directives.string_value("js_name")
	if js_name is None:
		js_name = to_pascal_case(decl.name)
	if not js_name:
		errors.append(error(decl.span, f"external name of `{decl.name}` must not be empty", code="E-REC-NAME"))
	case = resolve_case(directives, errors) if directives.ident("case") is not None else None

	fields: List[RecordField] = []
	is_tuple = False
	for index, field in enumerate(decl.fields):
		if not field.vis.is_public:
			continue
		if field.name is None:
			is_tuple = True
		try:
			field_directives = find_directives(field.attrs, attr_name)
		except BindError as err:
			errors.extend(err.diagnostics)
			continue
		built = _build_field(index, field, field_directives, case)
		if not built.js_name:
			label = field.name if field.name is not None else index
			errors.append(error(field.span, f"external name of field `{label}` must not be empty", code="E-REC-NAME"))
		fields.append(built)
		errors.extend(field_directives.check_used())

	extends = directives.path("extends")
	namespace = directives.string_list("namespace")
	record = Record(
		name=decl.name,
		js_name=js_name,
		vis=decl.vis,
		fields=tuple(fields),
		is_tuple=is_tuple,
		gen_default_ctor=directives.flag("constructor") is not None,
		object=directives.flag("object") is not None,
		namespace=tuple(namespace) if namespace is not None else None,
		extends=extends.segments if extends is not None else None,
		comments=tuple(extract_doc_comments(decl.attrs)),
	)
	raise_if_errors(errors)
	registry.register(decl.name, js_name, directives)
	return record


__all__ = ["build_record"]
