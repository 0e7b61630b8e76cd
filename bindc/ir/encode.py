# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""JSON-friendly encoding of IR nodes for the CLI."""

from __future__ import annotations

from dataclasses import fields, is_dataclass
from enum import Enum
from typing import Any, Dict

from bindc.parser.ast import Expr, TypeExpr, Visibility

from .nodes import CallbackArg, Callable, Enumeration, IRNode, MethodBlock, PlainArg, Record

# (tag key, tag value) written ahead of the dataclass fields.
_TAGS = {
	Callable: ("node", "callable"),
	Record: ("node", "record"),
	MethodBlock: ("node", "method_block"),
	Enumeration: ("node", "enumeration"),
	PlainArg: ("arg", "plain"),
	CallbackArg: ("arg", "callback"),
}


def _encode(value: Any) -> Any:
	if isinstance(value, (TypeExpr, Expr)):
		return value.render()
	if isinstance(value, Visibility):
		return value.render() or "inherited"
	if isinstance(value, Enum):
		return value.value
	if isinstance(value, tuple):
		return [_encode(v) for v in value]
	if is_dataclass(value) and not isinstance(value, type):
		out: Dict[str, Any] = {}
		tag = _TAGS.get(type(value))
		if tag is not None:
			out[tag[0]] = tag[1]
		for f in fields(value):
			out[f.name] = _encode(getattr(value, f.name))
		return out
	return value


def node_to_dict(node: IRNode) -> Dict[str, Any]:
	"""Encode an IR node as plain dicts/lists; types and expressions become source text."""
	return _encode(node)


__all__ = ["node_to_dict"]
