# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Callable-trait bound scan.

Runs before parameter classification: every type parameter or `where`
predicate bounded by `Fn`, `FnMut` or `FnOnce` maps the bounded type's
canonical spelling to that bound's argument shape. A parameter whose type
renders to one of those spellings is a callback.
"""

from __future__ import annotations

from typing import Dict, List, Optional, Tuple, Union

from bindc.core.diagnostics import Diagnostic, error
from bindc.parser.ast import (
	AngleArgs,
	Bound,
	ConstParam,
	Generics,
	Lifetime,
	LifetimeParam,
	LifetimePredicate,
	ParenArgs,
	TraitBound,
	TypeParam,
)

CALLABLE_TRAITS = frozenset({"Fn", "FnMut", "FnOnce"})
STATIC_LIFETIME = "'static"

# None stands for a bare `Fn` bound (no arguments, no return).
CallbackShape = Optional[Union[AngleArgs, ParenArgs]]


def _scan_bounds(key: str, bounds: Tuple[Bound, ...], found: Dict[str, CallbackShape], errors: List[Diagnostic]) -> None:
	for bound in bounds:
		if isinstance(bound, Lifetime):
			if bound.name != STATIC_LIFETIME:
				errors.append(
					error(bound.span, "only the unbounded lifetime is supported here; use 'static", code="E-FN-LIFETIME")
				)
			continue
		if not isinstance(bound, TraitBound):
			continue
		for seg in bound.path.segments:
			if seg.name in CALLABLE_TRAITS:
				found[key] = seg.args


def scan_callback_bounds(generics: Generics) -> Tuple[Dict[str, CallbackShape], List[Diagnostic]]:
	"""Return the callback map plus every generics error found along the way."""
	found: Dict[str, CallbackShape] = {}
	errors: List[Diagnostic] = []
	for pred in generics.where:
		if isinstance(pred, LifetimePredicate):
			errors.append(error(pred.span, "unsupported where-clause predicate", code="E-FN-GENERICS"))
			continue
		_scan_bounds(pred.bounded.render(), pred.bounds, found, errors)
	for param in generics.params:
		if isinstance(param, TypeParam):
			_scan_bounds(param.name, param.bounds, found, errors)
		elif isinstance(param, (LifetimeParam, ConstParam)):
			kind = "lifetime" if isinstance(param, LifetimeParam) else "const"
			errors.append(
				error(param.span, f"unsupported {kind} generic parameter `{param.name}` on a bound function", code="E-FN-GENERICS")
			)
	return found, errors


__all__ = ["CALLABLE_TRAITS", "CallbackShape", "scan_callback_bounds"]
