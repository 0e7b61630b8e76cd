# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Directive set with consumption tracking.

Lookups are by logical name. Scalar accessors return the last matching entry
and mark every match consumed; the string-list accessor folds all matches in
order. Anything left unconsumed after a build is reported by `check_used`.
"""

from __future__ import annotations

from typing import Iterator, List, Optional, Set, Tuple, TypeVar

from bindc.core.diagnostics import Diagnostic, error
from bindc.core.span import Span
from bindc.parser.ast import Expr

from .directive import (
	Directive,
	ExprDirective,
	Flag,
	IdentDirective,
	OptionalIdentDirective,
	PathDirective,
	StringDirective,
	StringListDirective,
)

_D = TypeVar("_D", bound=Directive)


class DirectiveSet:
	def __init__(self, directives: Optional[List[Directive]] = None, *, exists: bool = False) -> None:
		self._directives: List[Directive] = list(directives or [])
		self._used: Set[int] = set()
		# Whether a directive attribute was attached at all (even an empty one).
		self.exists = exists or bool(self._directives)

	def __iter__(self) -> Iterator[Directive]:
		return iter(self._directives)

	def __len__(self) -> int:
		return len(self._directives)

	def __eq__(self, other: object) -> bool:
		if not isinstance(other, DirectiveSet):
			return NotImplemented
		return self.exists == other.exists and self._directives == other._directives

	def __repr__(self) -> str:
		return f"DirectiveSet({self._directives!r}, exists={self.exists})"

	def _matches(self, name: str, kind: type[_D]) -> List[Tuple[int, _D]]:
		found = [(i, d) for i, d in enumerate(self._directives) if d.name == name and isinstance(d, kind)]
		self._used.update(i for i, _ in found)
		return found  # type: ignore[return-value]

	def _last(self, name: str, kind: type[_D]) -> Optional[_D]:
		found = self._matches(name, kind)
		return found[-1][1] if found else None

	# ---- typed accessors -------------------------------------------------------

	def flag(self, name: str) -> Optional[Span]:
		"""Span of the flag when present, else None."""
		found = self._last(name, Flag)
		return found.span if found is not None else None

	def ident(self, name: str) -> Optional[IdentDirective]:
		return self._last(name, IdentDirective)

	def optional_ident(self, name: str) -> Optional[OptionalIdentDirective]:
		return self._last(name, OptionalIdentDirective)

	def path(self, name: str) -> Optional[PathDirective]:
		return self._last(name, PathDirective)

	def expr(self, name: str) -> Optional[Expr]:
		found = self._last(name, ExprDirective)
		return found.expr if found is not None else None

	def string(self, name: str) -> Optional[StringDirective]:
		return self._last(name, StringDirective)

	def string_value(self, name: str) -> Optional[str]:
		found = self.string(name)
		return found.value if found is not None else None

	def string_list(self, name: str) -> Optional[List[str]]:
		found = self._matches(name, StringListDirective)
		if not found:
			return None
		values: List[str] = []
		for _, d in found:
			values.extend(d.values)
		return values

	# ---- consumption -----------------------------------------------------------

	def unused(self) -> List[Directive]:
		return [d for i, d in enumerate(self._directives) if i not in self._used]

	def check_used(self) -> List[Diagnostic]:
		"""One diagnostic per directive that no lookup has touched."""
		return [
			error(d.span, f"unused directive `{d.name}`", code="E-DIR-UNUSED", phase="directive")
			for d in self.unused()
		]


__all__ = ["DirectiveSet"]
