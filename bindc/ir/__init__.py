"""
bindc.ir: immutable binding descriptors produced by the builders.

Modules:
  - nodes: Callable, Record, MethodBlock, Enumeration and their parts
  - encode: JSON-friendly encoding for the CLI
"""

from .nodes import (
	CallbackArg,
	Callable,
	EnumVariant,
	Enumeration,
	FnKind,
	FnSelf,
	IRNode,
	MethodBlock,
	PlainArg,
	Record,
	RecordField,
)

__all__ = [
	"CallbackArg",
	"Callable",
	"EnumVariant",
	"Enumeration",
	"FnKind",
	"FnSelf",
	"IRNode",
	"MethodBlock",
	"PlainArg",
	"Record",
	"RecordField",
]
