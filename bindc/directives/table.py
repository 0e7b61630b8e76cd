# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""Closed table of recognised directives and the payload shape each one takes."""

from __future__ import annotations

from enum import Enum
from typing import Dict, Optional


class Shape(Enum):
	FLAG = "flag"
	IDENT = "ident"
	OPTIONAL_IDENT = "optional_ident"
	PATH = "path"
	EXPR = "expr"
	STRING = "string"
	STRING_LIST = "string_list"


# Entries that collide with reserved words carry the raw prefix; the parser
# strips it when matching, so `type` and `r#type` both select the entry.
DIRECTIVE_SHAPES: Dict[str, Shape] = {
	"js_name": Shape.STRING,
	"constructor": Shape.FLAG,
	"getter": Shape.OPTIONAL_IDENT,
	"setter": Shape.OPTIONAL_IDENT,
	"readonly": Shape.FLAG,
	"skip": Shape.FLAG,
	"strict": Shape.FLAG,
	"catch_unwind": Shape.FLAG,
	"object": Shape.FLAG,
	"case": Shape.IDENT,
	"extends": Shape.PATH,
	"default": Shape.EXPR,
	"namespace": Shape.STRING_LIST,
	"ts_args_type": Shape.STRING,
	"ts_return_type": Shape.STRING,
	"r#type": Shape.STRING,
}


def logical_name(entry: str) -> str:
	"""Table key without the raw-identifier prefix."""
	return entry[2:] if entry.startswith("r#") else entry


def lookup(name: str) -> Optional[tuple[str, Shape]]:
	"""Find the entry matching a spelled name (`type` or `r#type`)."""
	wanted = logical_name(name)
	for entry, shape in DIRECTIVE_SHAPES.items():
		if logical_name(entry) == wanted:
			return logical_name(entry), shape
	return None


__all__ = ["Shape", "DIRECTIVE_SHAPES", "logical_name", "lookup"]
