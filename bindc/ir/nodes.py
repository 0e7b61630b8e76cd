# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Binding IR.

Four closed node kinds, each built once from one declaration and never
mutated: Callable, Record, MethodBlock and Enumeration. Types and expressions
are carried as parser AST values; the backend renders or inspects them.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple, Union

from bindc.parser.ast import Expr, TypeExpr, Visibility


class FnKind(Enum):
	NORMAL = "normal"
	GETTER = "getter"
	SETTER = "setter"
	CONSTRUCTOR = "constructor"


class FnSelf(Enum):
	"""How a method borrows its receiver."""

	REF = "ref"
	MUT_REF = "mut_ref"


@dataclass(frozen=True)
class PlainArg:
	name: str
	ty: TypeExpr


@dataclass(frozen=True)
class CallbackArg:
	"""A parameter bound by `Fn(A, ..) -> Result<R>`; `ret` is None for unit."""

	name: str
	args: Tuple[TypeExpr, ...]
	ret: Optional[TypeExpr] = None


FnArg = Union[PlainArg, CallbackArg]


@dataclass(frozen=True)
class Callable:
	name: str
	js_name: str
	args: Tuple[FnArg, ...]
	ret: Optional[TypeExpr]
	is_async: bool
	vis: Visibility
	kind: FnKind = FnKind.NORMAL
	# Receiver mode; only ever set together with `parent`.
	fn_self: Optional[FnSelf] = None
	parent: Optional[str] = None
	strict: bool = False
	catch_unwind: bool = False
	namespace: Optional[Tuple[str, ...]] = None
	ts_args_type: Optional[str] = None
	ts_return_type: Optional[str] = None
	comments: Tuple[str, ...] = ()


@dataclass(frozen=True)
class RecordField:
	# Field name, or zero-based position for tuple records.
	member: Union[str, int]
	js_name: str
	ty: TypeExpr
	getter: bool
	setter: bool
	ts_type: Optional[str] = None
	default: Optional[Expr] = None
	comments: Tuple[str, ...] = ()


@dataclass(frozen=True)
class Record:
	name: str
	js_name: str
	vis: Visibility
	fields: Tuple[RecordField, ...]
	is_tuple: bool
	gen_default_ctor: bool
	object: bool = False
	namespace: Optional[Tuple[str, ...]] = None
	extends: Optional[Tuple[str, ...]] = None
	comments: Tuple[str, ...] = ()


@dataclass(frozen=True)
class MethodBlock:
	name: str
	js_name: str
	items: Tuple[Callable, ...]


@dataclass(frozen=True)
class EnumVariant:
	name: str
	js_name: str
	val: int
	comments: Tuple[str, ...] = ()


@dataclass(frozen=True)
class Enumeration:
	name: str
	js_name: str
	variants: Tuple[EnumVariant, ...]
	namespace: Optional[Tuple[str, ...]] = None
	comments: Tuple[str, ...] = ()


IRNode = Union[Callable, Record, MethodBlock, Enumeration]


__all__ = [
	"FnKind",
	"FnSelf",
	"PlainArg",
	"CallbackArg",
	"FnArg",
	"Callable",
	"RecordField",
	"Record",
	"MethodBlock",
	"EnumVariant",
	"Enumeration",
	"IRNode",
]
