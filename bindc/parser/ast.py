# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Host declaration AST.

Only the parts of a declaration that matter to binding are modelled: item
shapes, visibility, attributes (kept as raw lark tokens so the directive parser
can re-read them), generics, signatures and types. Every type and expression
renders to a canonical spelling; the function builder matches callback
parameters against generic bounds by that spelling.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import List, Optional, Tuple, Union

from lark import Token

from bindc.core.span import Span


# ---- types -----------------------------------------------------------------


@dataclass(frozen=True)
class Lifetime:
	name: str
	span: Span = field(default_factory=Span, compare=False)

	def render(self) -> str:
		return self.name


@dataclass(frozen=True)
class AngleArgs:
	args: Tuple[Union["TypeExpr", Lifetime], ...]

	def render(self) -> str:
		return "<" + ", ".join(a.render() for a in self.args) + ">"


@dataclass(frozen=True)
class ParenArgs:
	"""Callable-trait sugar arguments: `Fn(A, B) -> R`."""

	inputs: Tuple["TypeExpr", ...]
	output: Optional["TypeExpr"] = None
	span: Span = field(default_factory=Span, compare=False)

	def render(self) -> str:
		text = "(" + ", ".join(t.render() for t in self.inputs) + ")"
		if self.output is not None:
			text += " -> " + self.output.render()
		return text


@dataclass(frozen=True)
class PathSegment:
	name: str
	args: Optional[Union[AngleArgs, ParenArgs]] = None
	span: Span = field(default_factory=Span, compare=False)

	def render(self) -> str:
		return self.name + (self.args.render() if self.args is not None else "")


class TypeExpr:
	span: Span

	def render(self) -> str:
		raise NotImplementedError


@dataclass(frozen=True)
class PathType(TypeExpr):
	segments: Tuple[PathSegment, ...]
	span: Span = field(default_factory=Span, compare=False)

	def render(self) -> str:
		return "::".join(s.render() for s in self.segments)


@dataclass(frozen=True)
class RefType(TypeExpr):
	inner: TypeExpr
	mutable: bool = False
	lifetime: Optional[Lifetime] = None
	span: Span = field(default_factory=Span, compare=False)

	def render(self) -> str:
		text = "&"
		if self.lifetime is not None:
			text += self.lifetime.render() + " "
		if self.mutable:
			text += "mut "
		return text + self.inner.render()


@dataclass(frozen=True)
class TupleType(TypeExpr):
	elems: Tuple[TypeExpr, ...] = ()
	span: Span = field(default_factory=Span, compare=False)

	def render(self) -> str:
		if len(self.elems) == 1:
			return "(" + self.elems[0].render() + ",)"
		return "(" + ", ".join(e.render() for e in self.elems) + ")"

	@property
	def is_unit(self) -> bool:
		return not self.elems


@dataclass(frozen=True)
class ParenType(TypeExpr):
	inner: TypeExpr
	span: Span = field(default_factory=Span, compare=False)

	def render(self) -> str:
		return "(" + self.inner.render() + ")"


@dataclass(frozen=True)
class SliceType(TypeExpr):
	elem: TypeExpr
	span: Span = field(default_factory=Span, compare=False)

	def render(self) -> str:
		return "[" + self.elem.render() + "]"


@dataclass(frozen=True)
class ArrayType(TypeExpr):
	elem: TypeExpr
	length: "Expr"
	span: Span = field(default_factory=Span, compare=False)

	def render(self) -> str:
		return "[" + self.elem.render() + "; " + self.length.render() + "]"


@dataclass(frozen=True)
class TraitBound:
	path: PathType
	maybe: bool = False  # `?Sized`
	span: Span = field(default_factory=Span, compare=False)

	def render(self) -> str:
		return ("?" if self.maybe else "") + self.path.render()


Bound = Union[TraitBound, Lifetime]


@dataclass(frozen=True)
class ImplTraitType(TypeExpr):
	bounds: Tuple[Bound, ...]
	span: Span = field(default_factory=Span, compare=False)

	def render(self) -> str:
		return "impl " + " + ".join(b.render() for b in self.bounds)


@dataclass(frozen=True)
class DynTraitType(TypeExpr):
	bounds: Tuple[Bound, ...]
	span: Span = field(default_factory=Span, compare=False)

	def render(self) -> str:
		return "dyn " + " + ".join(b.render() for b in self.bounds)


def strip_parens(ty: TypeExpr) -> TypeExpr:
	"""Look through redundant parentheses around a type."""
	while isinstance(ty, ParenType):
		ty = ty.inner
	return ty


# ---- expressions -------------------------------------------------------------


class Expr:
	span: Span

	def render(self) -> str:
		raise NotImplementedError


@dataclass(frozen=True)
class IntLit(Expr):
	text: str  # source spelling, including any suffix
	span: Span = field(default_factory=Span, compare=False)

	def render(self) -> str:
		return self.text

	@property
	def digits(self) -> str:
		"""The literal without `_` separators and type suffix."""
		text = self.text.replace("_", "")
		for suffix in ("size", "128", "64", "32", "16", "8"):
			for sign in ("i", "u"):
				if text.endswith(sign + suffix):
					return text[: -len(sign + suffix)]
		return text

	@property
	def value(self) -> int:
		digits = self.digits
		if digits[:2] in ("0x", "0o", "0b"):
			return int(digits, 0)
		return int(digits, 10)


@dataclass(frozen=True)
class StrLit(Expr):
	raw: str  # quoted source spelling
	value: str
	span: Span = field(default_factory=Span, compare=False)

	def render(self) -> str:
		return self.raw


@dataclass(frozen=True)
class BoolLit(Expr):
	value: bool
	span: Span = field(default_factory=Span, compare=False)

	def render(self) -> str:
		return "true" if self.value else "false"


@dataclass(frozen=True)
class PathExpr(Expr):
	segments: Tuple[str, ...]
	span: Span = field(default_factory=Span, compare=False)

	def render(self) -> str:
		return "::".join(self.segments)


@dataclass(frozen=True)
class Neg(Expr):
	operand: Expr
	span: Span = field(default_factory=Span, compare=False)

	def render(self) -> str:
		return "-" + self.operand.render()


@dataclass(frozen=True)
class Binary(Expr):
	op: str
	left: Expr
	right: Expr
	span: Span = field(default_factory=Span, compare=False)

	def render(self) -> str:
		return f"{self.left.render()} {self.op} {self.right.render()}"


@dataclass(frozen=True)
class ParenExpr(Expr):
	inner: Expr
	span: Span = field(default_factory=Span, compare=False)

	def render(self) -> str:
		return "(" + self.inner.render() + ")"


@dataclass(frozen=True)
class ArrayLit(Expr):
	elems: Tuple[Expr, ...]
	span: Span = field(default_factory=Span, compare=False)

	def render(self) -> str:
		return "[" + ", ".join(e.render() for e in self.elems) + "]"


@dataclass(frozen=True)
class CallExpr(Expr):
	func: Expr
	args: Tuple[Expr, ...]
	span: Span = field(default_factory=Span, compare=False)

	def render(self) -> str:
		return self.func.render() + "(" + ", ".join(a.render() for a in self.args) + ")"


# ---- attributes, visibility, generics ----------------------------------------


@dataclass(frozen=True)
class Attribute:
	"""
	An outer attribute. `tokens` holds the raw tokens inside `#[path(...)]`
	(without the outer parentheses); `value` holds the literal of
	`#[path = literal]`. `///` comments arrive as `#[doc = "..."]`.
	"""

	path: Tuple[str, ...]
	span: Span
	tokens: Tuple[Token, ...] = ()
	has_args: bool = False
	value: Optional[Token] = None

	@property
	def name(self) -> str:
		return "::".join(self.path)


class VisKind(Enum):
	INHERITED = auto()
	PUBLIC = auto()
	RESTRICTED = auto()


@dataclass(frozen=True)
class Visibility:
	kind: VisKind = VisKind.INHERITED
	scope: Optional[str] = None  # crate / super / self / in <path>
	span: Span = field(default_factory=Span, compare=False)

	@property
	def is_public(self) -> bool:
		return self.kind is VisKind.PUBLIC

	def render(self) -> str:
		if self.kind is VisKind.PUBLIC:
			return "pub"
		if self.kind is VisKind.RESTRICTED:
			return f"pub({self.scope})"
		return ""


@dataclass(frozen=True)
class TypeParam:
	name: str
	bounds: Tuple[Bound, ...] = ()
	default: Optional[TypeExpr] = None
	span: Span = field(default_factory=Span, compare=False)


@dataclass(frozen=True)
class LifetimeParam:
	name: str
	bounds: Tuple[Lifetime, ...] = ()
	span: Span = field(default_factory=Span, compare=False)


@dataclass(frozen=True)
class ConstParam:
	name: str
	ty: TypeExpr
	span: Span = field(default_factory=Span, compare=False)


GenericParam = Union[TypeParam, LifetimeParam, ConstParam]


@dataclass(frozen=True)
class TypePredicate:
	bounded: TypeExpr
	bounds: Tuple[Bound, ...]
	span: Span = field(default_factory=Span, compare=False)


@dataclass(frozen=True)
class LifetimePredicate:
	lifetime: Lifetime
	bounds: Tuple[Lifetime, ...]
	span: Span = field(default_factory=Span, compare=False)


WherePredicate = Union[TypePredicate, LifetimePredicate]


@dataclass(frozen=True)
class Generics:
	params: Tuple[GenericParam, ...] = ()
	where: Tuple[WherePredicate, ...] = ()


# ---- signatures and items ----------------------------------------------------


@dataclass(frozen=True)
class Receiver:
	reference: bool
	mutable: bool
	lifetime: Optional[Lifetime] = None
	# Declared type for the `self: T` spelling.
	ty: Optional[TypeExpr] = None
	span: Span = field(default_factory=Span, compare=False)


@dataclass(frozen=True)
class TypedParam:
	name: str
	ty: TypeExpr
	mutable: bool = False
	span: Span = field(default_factory=Span, compare=False)


FnParam = Union[Receiver, TypedParam]


@dataclass(frozen=True)
class Signature:
	name: str
	params: Tuple[FnParam, ...] = ()
	ret: Optional[TypeExpr] = None
	generics: Generics = field(default_factory=Generics)
	is_async: bool = False
	is_const: bool = False
	is_unsafe: bool = False
	span: Span = field(default_factory=Span, compare=False)


@dataclass
class Item:
	"""Base for declarations; `text` is the exact source slice of the item."""

	attrs: List[Attribute]
	vis: Visibility
	span: Span
	text: str


@dataclass
class FnDecl(Item):
	sig: Signature = field(default_factory=lambda: Signature(name=""))
	has_body: bool = True


@dataclass
class Field:
	attrs: List[Attribute]
	vis: Visibility
	name: Optional[str]  # None for positional fields
	ty: TypeExpr
	span: Span


class StructShape(Enum):
	NAMED = auto()
	TUPLE = auto()
	UNIT = auto()


@dataclass
class StructDecl(Item):
	name: str = ""
	generics: Generics = field(default_factory=Generics)
	fields: List[Field] = field(default_factory=list)
	shape: StructShape = StructShape.NAMED


@dataclass
class Variant:
	attrs: List[Attribute]
	name: str
	span: Span
	shape: StructShape = StructShape.UNIT
	fields: List[Field] = field(default_factory=list)
	discriminant: Optional[Expr] = None


@dataclass
class EnumDecl(Item):
	name: str = ""
	generics: Generics = field(default_factory=Generics)
	variants: List[Variant] = field(default_factory=list)


@dataclass
class OtherMember:
	"""Non-method member of an impl block (associated const or type)."""

	attrs: List[Attribute]
	vis: Visibility
	kind: str
	name: str
	span: Span


ImplMember = Union[FnDecl, OtherMember]


@dataclass
class ImplDecl(Item):
	self_ty: TypeExpr = field(default_factory=lambda: TupleType())
	trait: Optional[PathType] = None
	generics: Generics = field(default_factory=Generics)
	members: List[ImplMember] = field(default_factory=list)


@dataclass
class OtherItem(Item):
	"""trait / mod / const / static / type / use items."""

	kind: str = ""
	name: Optional[str] = None


@dataclass
class Module:
	items: List[Item]
	source: str
	file: Optional[str] = None


__all__ = [
	"Lifetime",
	"AngleArgs",
	"ParenArgs",
	"PathSegment",
	"TypeExpr",
	"PathType",
	"RefType",
	"TupleType",
	"ParenType",
	"SliceType",
	"ArrayType",
	"TraitBound",
	"Bound",
	"ImplTraitType",
	"DynTraitType",
	"strip_parens",
	"Expr",
	"IntLit",
	"StrLit",
	"BoolLit",
	"PathExpr",
	"Neg",
	"Binary",
	"ParenExpr",
	"ArrayLit",
	"CallExpr",
	"Attribute",
	"VisKind",
	"Visibility",
	"TypeParam",
	"LifetimeParam",
	"ConstParam",
	"GenericParam",
	"TypePredicate",
	"LifetimePredicate",
	"WherePredicate",
	"Generics",
	"Receiver",
	"TypedParam",
	"FnParam",
	"Signature",
	"Item",
	"FnDecl",
	"Field",
	"StructShape",
	"StructDecl",
	"Variant",
	"EnumDecl",
	"OtherMember",
	"ImplMember",
	"ImplDecl",
	"OtherItem",
	"Module",
]
