# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Record registry.

Records are registered when their declaration builds successfully; method
blocks consult the registry when they declare a constructor, so a record must
appear before the method block that constructs it.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Optional, Protocol

from bindc.core.diagnostics import BindError
from bindc.core.span import Span
from bindc.directives.directive_set import DirectiveSet


class RecordRegistry(Protocol):
	def register(self, internal_name: str, external_name: str, directives: DirectiveSet) -> None:
		...

	def lookup_and_reconcile(self, internal_name: str, directives: DirectiveSet, span: Span) -> str:
		...


@dataclass
class RegisteredRecord:
	name: str
	js_name: str
	# Set once a method block supplies a constructor; a record gets at most one.
	has_constructor: bool = False


class InMemoryRecordRegistry:
	"""Process-local registry keyed by the record's internal name."""

	def __init__(self) -> None:
		self._records: Dict[str, RegisteredRecord] = {}

	def register(self, internal_name: str, external_name: str, directives: DirectiveSet) -> None:
		self._records[internal_name] = RegisteredRecord(name=internal_name, js_name=external_name)

	def get(self, internal_name: str) -> Optional[RegisteredRecord]:
		return self._records.get(internal_name)

	def lookup_and_reconcile(self, internal_name: str, directives: DirectiveSet, span: Span) -> str:
		"""
		Return the registered external name for a record whose constructor is
		being bound. A `js_name` on the constructor must agree with it, and a
		record accepts only one constructor.
		"""
		record = self._records.get(internal_name)
		if record is None:
			raise BindError.at(
				span,
				f"record `{internal_name}` is not registered; bind the record before its constructor",
				code="E-IMPL-UNREGISTERED",
			)
		js_name = directives.string("js_name")
		if js_name is not None and js_name.value != record.js_name:
			raise BindError.at(
				js_name.value_span if js_name.value_span.line is not None else span,
				f"`js_name` of a constructor must match its record: expected `{record.js_name}`, found `{js_name.value}`",
				code="E-IMPL-JS-NAME",
			)
		if record.has_constructor:
			raise BindError.at(
				span,
				f"record `{internal_name}` already has a constructor",
				code="E-IMPL-CTOR",
			)
		record.has_constructor = True
		return record.js_name


__all__ = ["RecordRegistry", "RegisteredRecord", "InMemoryRecordRegistry"]
