# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Common diagnostic structure for the directive parser and IR builders.

Builders never stop at the first problem they can recover from: they append
diagnostics to a plain list and call `raise_if_errors` once the loop or scan is
done, so every independent error in one declaration surfaces together. The
raised `BindError` is the per-declaration failure value handed to the driver.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, Optional

from .span import Span


@dataclass
class Diagnostic:
	"""Represents a compiler diagnostic (error/warning/etc.)."""

	message: str
	code: str | None = None
	# Pipeline phase that produced the diagnostic: "parser" for host syntax
	# errors, "directive" for the directive grammar, "bind" for IR building.
	phase: str | None = None
	severity: str = "error"
	span: Span = field(default_factory=Span)  # Source location (Span() denotes unknown).
	notes: list[str] = field(default_factory=list)

	def __post_init__(self) -> None:
		if self.span is None:  # type: ignore[unreachable]
			self.span = Span()

	def render(self, fallback_file: Optional[str] = None) -> str:
		file = self.span.file or fallback_file or "<input>"
		text = f"{file}:{self.span.render()}: {self.severity}: {self.message}"
		for note in self.notes:
			text += f"\n  note: {note}"
		return text


class BindError(Exception):
	"""One or more diagnostics that abort compilation of a single declaration."""

	def __init__(self, diagnostics: Iterable[Diagnostic]) -> None:
		self.diagnostics = list(diagnostics)
		super().__init__("; ".join(d.message for d in self.diagnostics))

	@classmethod
	def at(
		cls,
		span: Span,
		message: str,
		*,
		code: str | None = None,
		phase: str = "bind",
		notes: list[str] | None = None,
	) -> "BindError":
		return cls([error(span, message, code=code, phase=phase, notes=notes)])


def error(
	span: Span,
	message: str,
	*,
	code: str | None = None,
	phase: str = "bind",
	notes: list[str] | None = None,
) -> Diagnostic:
	"""Build an error diagnostic pinned to `span`."""
	return Diagnostic(message=message, code=code, phase=phase, span=span, notes=list(notes or []))


def raise_if_errors(diagnostics: list[Diagnostic]) -> None:
	"""Merge accumulated diagnostics into one failure; no-op when empty."""
	if diagnostics:
		raise BindError(diagnostics)


__all__ = ["Diagnostic", "BindError", "error", "raise_if_errors"]
