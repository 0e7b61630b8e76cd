# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Callable builder for free functions and methods.

Parameter problems, generics problems and naming problems are collected into
one list and raised together once the whole signature has been examined.
"""

from __future__ import annotations

from dataclasses import replace
from typing import List, Optional, Sequence, Tuple

from bindc.core.casing import Case, convert, trim_prefix
from bindc.core.diagnostics import Diagnostic, error, raise_if_errors
from bindc.core.span import Span
from bindc.directives.directive_set import DirectiveSet
from bindc.ir.nodes import Callable, CallbackArg, FnArg, FnKind, FnSelf, PlainArg
from bindc.parser.ast import (
	AngleArgs,
	ArrayType,
	Attribute,
	Bound,
	DynTraitType,
	ImplTraitType,
	Lifetime,
	ParenArgs,
	ParenType,
	PathSegment,
	PathType,
	Receiver,
	RefType,
	Signature,
	SliceType,
	TraitBound,
	TupleType,
	TypeExpr,
	Visibility,
)

from .docs import extract_doc_comments
from .generics import CallbackShape, scan_callback_bounds

SELF_TYPE = "Self"


# ---- Self substitution ---------------------------------------------------------


def replace_self(ty: TypeExpr, parent: Optional[str]) -> TypeExpr:
	"""
	Replace every single-segment `Self` path inside `ty` with `parent`.

	Qualified paths such as `Self::Item` are left alone. Without a parent the
	type is returned unchanged.
	"""
	if parent is None:
		return ty
	if isinstance(ty, PathType):
		if len(ty.segments) == 1 and ty.segments[0].name == SELF_TYPE and ty.segments[0].args is None:
			return PathType(segments=(PathSegment(name=parent, span=ty.span),), span=ty.span)
		return replace(ty, segments=tuple(_replace_in_segment(s, parent) for s in ty.segments))
	if isinstance(ty, RefType):
		return replace(ty, inner=replace_self(ty.inner, parent))
	if isinstance(ty, TupleType):
		return replace(ty, elems=tuple(replace_self(e, parent) for e in ty.elems))
	if isinstance(ty, ParenType):
		return replace(ty, inner=replace_self(ty.inner, parent))
	if isinstance(ty, (SliceType, ArrayType)):
		return replace(ty, elem=replace_self(ty.elem, parent))
	if isinstance(ty, (ImplTraitType, DynTraitType)):
		return replace(ty, bounds=tuple(_replace_in_bound(b, parent) for b in ty.bounds))
	return ty


def _replace_in_segment(seg: PathSegment, parent: str) -> PathSegment:
	if isinstance(seg.args, AngleArgs):
		args = tuple(a if isinstance(a, Lifetime) else replace_self(a, parent) for a in seg.args.args)
		return replace(seg, args=AngleArgs(args=args))
	if isinstance(seg.args, ParenArgs):
		return replace(
			seg,
			args=replace(
				seg.args,
				inputs=tuple(replace_self(t, parent) for t in seg.args.inputs),
				output=replace_self(seg.args.output, parent) if seg.args.output is not None else None,
			),
		)
	return seg


def _replace_in_bound(bound: Bound, parent: str) -> Bound:
	if isinstance(bound, TraitBound):
		path = replace_self(bound.path, parent)
		assert isinstance(path, PathType)
		return replace(bound, path=path)
	return bound


# ---- callbacks -------------------------------------------------------------------


def extract_callback_types(shape: CallbackShape, span: Span) -> Tuple[Tuple[TypeExpr, ...], Optional[TypeExpr]]:
	"""
	Argument types and success type of a callable-trait bound.

	Raises BindError when the bound uses angle brackets or its return clause
	is not a single-segment `Result<...>`.
	"""
	diags = _callback_errors(shape, span)
	raise_if_errors(diags)
	if not isinstance(shape, ParenArgs):
		return (), None
	return shape.inputs, _callback_success_type(shape.output)


def _callback_errors(shape: CallbackShape, span: Span) -> List[Diagnostic]:
	if shape is None:
		return []
	if isinstance(shape, AngleArgs):
		return [error(span, "use parentheses for callable-trait bounds: `Fn(A) -> Result<R>`", code="E-FN-CALLBACK")]
	ret = shape.output
	if ret is None:
		return [
			error(
				shape.span,
				"the return type of a callback can only be `Result`; try `Result<()>`",
				code="E-FN-CALLBACK",
			)
		]
	if not isinstance(ret, PathType) or len(ret.segments) != 1 or ret.segments[0].name != "Result":
		return [error(ret.span, f"the return type of a callback can only be `Result`, found `{ret.render()}`", code="E-FN-CALLBACK")]
	seg = ret.segments[0]
	if not isinstance(seg.args, AngleArgs) or not seg.args.args:
		return [error(seg.span, "`Result` in a callback return type needs a success type argument", code="E-FN-CALLBACK")]
	ok = seg.args.args[0]
	if isinstance(ok, Lifetime):
		return [error(ok.span, f"unsupported generic argument `{ok.name}` in callback return type", code="E-FN-CALLBACK")]
	return []


def _callback_success_type(ret: Optional[TypeExpr]) -> Optional[TypeExpr]:
	assert isinstance(ret, PathType) and isinstance(ret.segments[0].args, AngleArgs)
	ok = ret.segments[0].args.args[0]
	if isinstance(ok, TupleType) and ok.is_unit:
		return None
	return ok


# ---- naming ----------------------------------------------------------------------


def resolve_case(directives: DirectiveSet, errors: List[Diagnostic]) -> Case:
	"""The `case` directive's conversion, defaulting to camel case."""
	found = directives.ident("case")
	if found is None:
		return Case.CAMEL
	case = Case.from_name(found.ident)
	if case is None:
		names = ", ".join(c.value for c in Case)
		errors.append(error(found.ident_span, f"unknown case `{found.ident}`; expected one of {names}", code="E-DIR-CASE"))
		return Case.CAMEL
	return case


def _external_name(name: str, directives: DirectiveSet, case: Case) -> str:
	getter = directives.optional_ident("getter")
	if getter is not None:
		return getter.ident or convert(trim_prefix(name, "get_"), case)
	setter = directives.optional_ident("setter")
	if setter is not None:
		return setter.ident or convert(trim_prefix(name, "set_"), case)
	explicit = directives.string_value("js_name")
	if explicit is not None:
		return explicit
	return convert(name, case)


def fn_kind(directives: DirectiveSet) -> FnKind:
	# Fixed precedence; a declaration carrying several role directives gets the
	# first, and the others still count as consumed.
	constructor = directives.flag("constructor") is not None
	getter = directives.optional_ident("getter") is not None
	setter = directives.optional_ident("setter") is not None
	if constructor:
		return FnKind.CONSTRUCTOR
	if getter:
		return FnKind.GETTER
	if setter:
		return FnKind.SETTER
	return FnKind.NORMAL


# ---- builder ---------------------------------------------------------------------


def build_callable(
	sig: Signature,
	directives: DirectiveSet,
	*,
	vis: Visibility,
	attrs: Sequence[Attribute] = (),
	parent: Optional[str] = None,
) -> Callable:
	"""
	Build a Callable from a signature and its directives.

	`parent` is the owning record's identifier for methods; receivers are only
	accepted when it is given. Raises BindError carrying every problem found.
	"""
	callbacks, errors = scan_callback_bounds(sig.generics)

	fn_self: Optional[FnSelf] = None
	seen_receiver = False
	args: List[FnArg] = []
	for param in sig.params:
		if isinstance(param, Receiver):
			if parent is None:
				errors.append(error(param.span, "arguments cannot be `self` outside a method block", code="E-FN-RECEIVER"))
			elif seen_receiver:
				errors.append(error(param.span, "only one receiver is allowed", code="E-FN-RECEIVER"))
			elif not param.reference:
				errors.append(
					error(
						param.span,
						"native methods can't move values out; use a reference (`&self` or `&mut self`)",
						code="E-FN-RECEIVER",
					)
				)
			else:
				fn_self = FnSelf.MUT_REF if param.mutable else FnSelf.REF
			seen_receiver = True
			continue
		key = param.ty.render()
		if key in callbacks:
			shape = callbacks[key]
			problems = _callback_errors(shape, param.ty.span)
			if problems:
				errors.extend(problems)
				continue
			cb_args, cb_ret = extract_callback_types(shape, param.ty.span)
			args.append(CallbackArg(name=param.name, args=cb_args, ret=cb_ret))
			continue
		args.append(PlainArg(name=param.name, ty=replace_self(param.ty, parent)))

	ret = replace_self(sig.ret, parent) if sig.ret is not None else None

	case = resolve_case(directives, errors)
	js_name = _external_name(sig.name, directives, case)
	if not js_name:
		errors.append(error(sig.span, f"external name of `{sig.name}` must not be empty", code="E-FN-NAME"))
	kind = fn_kind(directives)

	namespace = directives.string_list("namespace") if parent is None else None
	strict = directives.flag("strict") is not None
	catch_unwind = directives.flag("catch_unwind") is not None
	ts_args_type = directives.string_value("ts_args_type")
	ts_return_type = directives.string_value("ts_return_type")

	raise_if_errors(errors)
	return Callable(
		name=sig.name,
		js_name=js_name,
		args=tuple(args),
		ret=ret,
		is_async=sig.is_async,
		vis=vis,
		kind=kind,
		fn_self=fn_self,
		parent=parent,
		strict=strict,
		catch_unwind=catch_unwind,
		namespace=tuple(namespace) if namespace is not None else None,
		ts_args_type=ts_args_type,
		ts_return_type=ts_return_type,
		comments=tuple(extract_doc_comments(attrs)),
	)


__all__ = ["replace_self", "extract_callback_types", "resolve_case", "fn_kind", "build_callable"]
