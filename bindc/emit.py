# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""Source re-emission: every declaration the driver sees is preserved unchanged."""

from __future__ import annotations

from typing import List, Protocol

from bindc.parser.ast import Item


class SourceSink(Protocol):
	def preserve(self, declaration: Item) -> None:
		...


class SourceBuffer:
	"""Collects the exact source text of preserved declarations, in order."""

	def __init__(self) -> None:
		self.chunks: List[str] = []

	def preserve(self, declaration: Item) -> None:
		self.chunks.append(declaration.text)

	def getvalue(self) -> str:
		return "\n\n".join(self.chunks) + ("\n" if self.chunks else "")


__all__ = ["SourceSink", "SourceBuffer"]
