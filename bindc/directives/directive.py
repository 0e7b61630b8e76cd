# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Parsed directive values.

One class per payload shape. Every directive keeps the span of its name token;
payload spans are kept where diagnostics need to point inside the payload.
Spans are excluded from equality so reparsing compares structurally.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, Tuple

from bindc.core.span import Span
from bindc.parser.ast import Expr


@dataclass(frozen=True)
class Directive:
	name: str
	span: Span = field(default_factory=Span, compare=False)


@dataclass(frozen=True)
class Flag(Directive):
	pass


@dataclass(frozen=True)
class IdentDirective(Directive):
	ident: str = ""
	ident_span: Span = field(default_factory=Span, compare=False)


@dataclass(frozen=True)
class OptionalIdentDirective(Directive):
	ident: Optional[str] = None
	ident_span: Span = field(default_factory=Span, compare=False)


@dataclass(frozen=True)
class PathDirective(Directive):
	segments: Tuple[str, ...] = ()

	@property
	def text(self) -> str:
		return "::".join(self.segments)


@dataclass(frozen=True)
class ExprDirective(Directive):
	expr: Optional[Expr] = None


@dataclass(frozen=True)
class StringDirective(Directive):
	value: str = ""
	value_span: Span = field(default_factory=Span, compare=False)


@dataclass(frozen=True)
class StringListDirective(Directive):
	values: Tuple[str, ...] = ()
	value_spans: Tuple[Span, ...] = field(default=(), compare=False)


__all__ = [
	"Directive",
	"Flag",
	"IdentDirective",
	"OptionalIdentDirective",
	"PathDirective",
	"ExprDirective",
	"StringDirective",
	"StringListDirective",
]
