# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Lightweight source span representation used by diagnostics.

A Span carries best-effort file/line/column info for a token or a parse tree
node. Spans are attached to directives, AST nodes and diagnostics so every
error can point back at the declaration text that caused it.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional


@dataclass(frozen=True)
class Span:
	"""Represents a source span (best-effort file/line/column plus raw parser loc)."""

	file: Optional[str] = None
	line: Optional[int] = None
	column: Optional[int] = None
	end_line: Optional[int] = None
	end_column: Optional[int] = None

	@classmethod
	def from_loc(cls, loc: Any, *, file: Optional[str] = None) -> "Span":
		"""
		Construct a Span from a lark Token or a tree `meta` object.

		If `loc` is already a Span, it is returned unchanged. Tree metas for
		empty rules carry no position; those map to the unknown Span().
		"""
		if loc is None:
			return cls(file=file)
		if isinstance(loc, cls):
			return loc
		if getattr(loc, "empty", False):
			return cls(file=file)
		return cls(
			file=file or getattr(loc, "file", None),
			line=getattr(loc, "line", None),
			column=getattr(loc, "column", None),
			end_line=getattr(loc, "end_line", None),
			end_column=getattr(loc, "end_column", None),
		)

	def to(self, other: "Span") -> "Span":
		"""Span covering `self` up to the end of `other`."""
		if self.line is None:
			return other
		if other.line is None:
			return self
		return Span(
			file=self.file or other.file,
			line=self.line,
			column=self.column,
			end_line=other.end_line,
			end_column=other.end_column,
		)

	def render(self) -> str:
		line = self.line if self.line is not None else "?"
		column = self.column if self.column is not None else "?"
		return f"{line}:{column}"


__all__ = ["Span"]
