# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""Documentation lines from `doc` attributes (`///` comments arrive as these)."""

from __future__ import annotations

from typing import Iterable, List

from bindc.parser.ast import Attribute
from bindc.parser.literals import try_unescape


def extract_doc_comments(attrs: Iterable[Attribute]) -> List[str]:
	"""
	Unescaped string literals of every attribute with a `doc` path segment.

	Both `#[doc = "..."]` and `#[doc("...")]` spellings are read. A literal with
	a malformed escape is dropped on its own.
	"""
	lines: List[str] = []
	for attr in attrs:
		if "doc" not in attr.path:
			continue
		literals = [attr.value] if attr.value is not None else list(attr.tokens)
		for tok in literals:
			if tok.type != "STRING":
				continue
			text = try_unescape(tok.value)
			if text is not None:
				lines.append(text)
	return lines


__all__ = ["extract_doc_comments"]
