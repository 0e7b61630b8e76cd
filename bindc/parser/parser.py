# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
lark front end for host declarations.

The grammar only describes signatures and data shapes. `OpaqueBlockFolder`
collapses function, trait and inline module bodies (and `use` trees) into
single tokens before the parser sees them, so their contents are never
tokenised against the grammar.
"""

from __future__ import annotations

from pathlib import Path
from typing import Iterable, Iterator, List, Optional, Sequence

from lark import Lark, Token, Tree

from bindc.core.span import Span

from . import literals
from .ast import (
	AngleArgs,
	ArrayLit,
	ArrayType,
	Attribute,
	Binary,
	BoolLit,
	Bound,
	CallExpr,
	ConstParam,
	DynTraitType,
	EnumDecl,
	Expr,
	Field,
	FnDecl,
	FnParam,
	GenericParam,
	Generics,
	ImplDecl,
	ImplMember,
	ImplTraitType,
	IntLit,
	Item,
	Lifetime,
	LifetimeParam,
	LifetimePredicate,
	Module,
	Neg,
	OtherItem,
	OtherMember,
	ParenArgs,
	ParenExpr,
	ParenType,
	PathExpr,
	PathSegment,
	PathType,
	Receiver,
	RefType,
	Signature,
	SliceType,
	StrLit,
	StructDecl,
	StructShape,
	TraitBound,
	TupleType,
	TypedParam,
	TypeExpr,
	TypeParam,
	TypePredicate,
	Variant,
	VisKind,
	Visibility,
	WherePredicate,
	strip_parens,
)

_GRAMMAR_PATH = Path(__file__).with_name("grammar.lark")
_GRAMMAR_SRC = _GRAMMAR_PATH.read_text()

_TYPE_RULES = frozenset(
	{"type_path", "ref_type", "tuple_type", "paren_type", "slice_type", "array_type", "impl_type", "dyn_type"}
)
_EXPR_RULES = frozenset(
	{"int_lit", "str_lit", "bool_lit", "expr_path", "add", "sub", "mul", "div", "neg", "call", "paren", "array"}
)
_ATTR_RULES = frozenset({"attribute", "doc_comment"})
_BINARY_OPS = {"add": "+", "sub": "-", "mul": "*", "div": "/"}


class OpaqueBlockFolder:
	"""
	Post-lexer that folds opaque regions into single tokens.

	After `fn`, `trait` or `mod` the next `{ ... }` (balanced) becomes one BODY
	token; a `;` cancels the pending fold (bodiless declarations). After `use`
	everything up to the terminating `;` becomes one USE_TREE token. An
	unbalanced region is passed through untouched so the parser reports it.
	"""

	# Terminals the grammar never references but bodies may contain; lark would
	# drop them from the lexer otherwise.
	always_accept = ("STRAY", "CHAR_LIT")

	_BODY_OWNERS = frozenset({"FN", "TRAIT", "MOD"})

	def process(self, stream: Iterable[Token]) -> Iterator[Token]:
		pending_body = False
		# Nesting of ( and [ since the owner keyword; `[u8; 4]` is not a terminator.
		depth = 0
		it = iter(stream)
		for token in it:
			ttype = token.type
			if ttype in self._BODY_OWNERS:
				pending_body = True
				depth = 0
				yield token
				continue
			if ttype in ("LPAR", "LSQB"):
				depth += 1
			elif ttype in ("RPAR", "RSQB") and depth:
				depth -= 1
			elif ttype == "SEMI" and depth == 0:
				pending_body = False
				yield token
				continue
			if ttype == "LBRACE" and pending_body and depth == 0:
				pending_body = False
				yield from self._fold_block(token, it)
				continue
			if ttype == "USE":
				yield token
				yield from self._fold_use_tree(it)
				continue
			yield token

	def _fold_block(self, opener: Token, it: Iterator[Token]) -> Iterator[Token]:
		collected = [opener]
		depth = 1
		for token in it:
			collected.append(token)
			if token.type == "LBRACE":
				depth += 1
			elif token.type == "RBRACE":
				depth -= 1
				if depth == 0:
					yield _merge("BODY", collected)
					return
		yield from collected

	def _fold_use_tree(self, it: Iterator[Token]) -> Iterator[Token]:
		collected: List[Token] = []
		for token in it:
			if token.type == "SEMI":
				if collected:
					yield _merge("USE_TREE", collected)
				yield token
				return
			collected.append(token)
		yield from collected


def _merge(ttype: str, tokens: Sequence[Token]) -> Token:
	first, last = tokens[0], tokens[-1]
	return Token(
		ttype,
		" ".join(t.value for t in tokens),
		start_pos=first.start_pos,
		line=first.line,
		column=first.column,
		end_line=last.end_line,
		end_column=last.end_column,
		end_pos=last.end_pos,
	)


_PARSER = Lark(
	_GRAMMAR_SRC,
	parser="lalr",
	lexer="basic",
	start=["module", "directive_list", "expr"],
	propagate_positions=True,
	maybe_placeholders=False,
	postlex=OpaqueBlockFolder(),
)


def parse_module(source: str, *, file: Optional[str] = None) -> Module:
	"""
	Parse a whole source file into a Module.

	Syntax errors propagate as lark `UnexpectedInput`; the driver turns them
	into parser-phase diagnostics.
	"""
	tree = _PARSER.parse(source, start="module")
	items = [_build_item(child, source) for child in tree.children if isinstance(child, Tree)]
	return Module(items=items, source=source, file=file)


def parse_directive_text(text: str) -> List[Token]:
	"""Tokenise a bare directive list (`js_name = "x", constructor`)."""
	tree = _PARSER.parse(text, start="directive_list")
	return list(tree.scan_values(lambda v: isinstance(v, Token)))


def parse_expr_tokens(tokens: Sequence[Token]) -> Expr:
	"""
	Parse an expression from tokens already lexed as part of an attribute.

	`tokens` must be non-empty. Raises lark `UnexpectedInput` subclasses on
	malformed input.
	"""
	if not tokens:
		raise ValueError("empty expression")
	interactive = _PARSER.parse_interactive(start="expr")
	for token in tokens:
		interactive.feed_token(token)
	tree = interactive.feed_eof(tokens[-1])
	return _build_expr(tree)


# ---- items -------------------------------------------------------------------


def _build_item(tree: Tree, source: str) -> Item:
	attrs = _build_attrs(tree)
	vis = _build_vis(_child_tree(tree, "vis"))
	decl = tree.children[-1]
	span = _span(tree)
	text = source[tree.meta.start_pos : tree.meta.end_pos]
	kind = _name(decl)
	if kind == "fn_decl":
		return FnDecl(attrs=attrs, vis=vis, span=span, text=text, sig=_build_signature(decl), has_body=_has_body(decl))
	if kind == "struct_decl":
		return _build_struct(decl, attrs, vis, span, text)
	if kind == "enum_decl":
		return _build_enum(decl, attrs, vis, span, text)
	if kind == "impl_decl":
		return _build_impl(decl, attrs, vis, span, text)
	name_tok = _first_token(decl, "NAME")
	return OtherItem(
		attrs=attrs,
		vis=vis,
		span=span,
		text=text,
		kind=_OTHER_KINDS[kind],
		name=name_tok.value if name_tok is not None else None,
	)


_OTHER_KINDS = {
	"trait_decl": "trait",
	"mod_decl": "mod",
	"const_decl": "const",
	"static_decl": "static",
	"type_alias": "type",
	"use_decl": "use",
}


def _build_attrs(tree: Tree) -> List[Attribute]:
	attrs: List[Attribute] = []
	for child in tree.children:
		if not isinstance(child, Tree) or _name(child) not in _ATTR_RULES:
			continue
		if _name(child) == "doc_comment":
			attrs.append(_desugar_doc_comment(child.children[0]))
			continue
		path_node = _child_tree(child, "attr_path")
		path = tuple(_ident(tok) for tok in path_node.children if isinstance(tok, Token))
		args = _child_tree(child, "attr_args")
		value = _child_tree(child, "attr_value")
		attrs.append(
			Attribute(
				path=path,
				span=_span(child),
				tokens=tuple(args.scan_values(lambda v: isinstance(v, Token))) if args is not None else (),
				has_args=args is not None,
				value=value.children[0] if value is not None else None,
			)
		)
	return attrs


def _desugar_doc_comment(token: Token) -> Attribute:
	text = token.value[3:]
	literal = Token.new_borrow_pos("STRING", literals.escape(text), token)
	return Attribute(path=("doc",), span=Span.from_loc(token), value=literal)


def _build_vis(tree: Optional[Tree]) -> Visibility:
	if tree is None:
		return Visibility()
	scope_node = _child_tree(tree, "vis_scope")
	if scope_node is None:
		return Visibility(kind=VisKind.PUBLIC, span=_span(tree))
	scope = " ".join(_ident(tok) for tok in scope_node.children if isinstance(tok, Token))
	if scope.startswith("in "):
		scope = "in " + scope[3:].replace(" ", "::")
	return Visibility(kind=VisKind.RESTRICTED, scope=scope, span=_span(tree))


def _has_body(tree: Tree) -> bool:
	return _first_token(tree, "BODY") is not None


def _build_signature(tree: Tree) -> Signature:
	name_tok = _first_token(tree, "NAME")
	params_node = _child_tree(tree, "fn_params")
	params: List[FnParam] = []
	if params_node is not None:
		params = [_build_fn_param(p) for p in params_node.children if isinstance(p, Tree)]
	ret_node = _child_tree(tree, "ret_type")
	return Signature(
		name=name_tok.value,
		params=tuple(params),
		ret=_build_type(_type_child(ret_node)) if ret_node is not None else None,
		generics=_build_generics(_child_tree(tree, "generics"), _child_tree(tree, "where_clause")),
		is_async=_first_token(tree, "ASYNC") is not None,
		is_const=_first_token(tree, "CONST") is not None,
		is_unsafe=_first_token(tree, "UNSAFE") is not None,
		span=Span.from_loc(name_tok),
	)


def _build_fn_param(tree: Tree) -> FnParam:
	kind = _name(tree)
	mutable = _first_token(tree, "MUT") is not None
	if kind == "value_receiver":
		return Receiver(reference=False, mutable=mutable, span=_span(tree))
	if kind == "typed_receiver":
		ty = _build_type(_type_child(tree))
		inner = strip_parens(ty)
		if isinstance(inner, RefType):
			return Receiver(reference=True, mutable=inner.mutable, lifetime=inner.lifetime, ty=ty, span=_span(tree))
		return Receiver(reference=False, mutable=mutable, ty=ty, span=_span(tree))
	if kind == "ref_receiver":
		lt = _first_token(tree, "LIFETIME")
		return Receiver(
			reference=True,
			mutable=mutable,
			lifetime=Lifetime(lt.value, Span.from_loc(lt)) if lt is not None else None,
			span=_span(tree),
		)
	name_tok = _first_token(tree, "NAME")
	return TypedParam(name=name_tok.value, ty=_build_type(_type_child(tree)), mutable=mutable, span=_span(tree))


def _build_struct(tree: Tree, attrs: List[Attribute], vis: Visibility, span: Span, text: str) -> StructDecl:
	name_tok = _first_token(tree, "NAME")
	shape, fields = _build_fields(tree)
	return StructDecl(
		attrs=attrs,
		vis=vis,
		span=span,
		text=text,
		name=name_tok.value,
		generics=_build_generics(_child_tree(tree, "generics"), _child_tree(tree, "where_clause")),
		fields=fields,
		shape=shape,
	)


def _build_fields(tree: Tree) -> tuple[StructShape, List[Field]]:
	named = _child_tree(tree, "named_fields")
	if named is not None:
		return StructShape.NAMED, [_build_field(f) for f in named.children if isinstance(f, Tree)]
	positional = _child_tree(tree, "tuple_fields")
	if positional is not None:
		return StructShape.TUPLE, [_build_field(f) for f in positional.children if isinstance(f, Tree)]
	return StructShape.UNIT, []


def _build_field(tree: Tree) -> Field:
	name_tok = _first_token(tree, "NAME")
	return Field(
		attrs=_build_attrs(tree),
		vis=_build_vis(_child_tree(tree, "vis")),
		name=name_tok.value if name_tok is not None else None,
		ty=_build_type(_type_child(tree)),
		span=_span(tree),
	)


def _build_enum(tree: Tree, attrs: List[Attribute], vis: Visibility, span: Span, text: str) -> EnumDecl:
	name_tok = _first_token(tree, "NAME")
	variants: List[Variant] = []
	for node in tree.children:
		if not isinstance(node, Tree) or _name(node) != "variant":
			continue
		shape, fields = _build_fields(node)
		disc = _child_tree(node, "discriminant")
		variants.append(
			Variant(
				attrs=_build_attrs(node),
				name=_first_token(node, "NAME").value,
				span=_span(node),
				shape=shape,
				fields=fields,
				discriminant=_build_expr(_expr_child(disc)) if disc is not None else None,
			)
		)
	return EnumDecl(
		attrs=attrs,
		vis=vis,
		span=span,
		text=text,
		name=name_tok.value,
		generics=_build_generics(_child_tree(tree, "generics"), _child_tree(tree, "where_clause")),
		variants=variants,
	)


def _build_impl(tree: Tree, attrs: List[Attribute], vis: Visibility, span: Span, text: str) -> ImplDecl:
	trait_node = _child_tree(tree, "impl_trait")
	members: List[ImplMember] = []
	for node in tree.children:
		if isinstance(node, Tree) and _name(node) == "impl_member":
			members.append(_build_impl_member(node))
	return ImplDecl(
		attrs=attrs,
		vis=vis,
		span=span,
		text=text,
		self_ty=_build_type(_type_child(tree)),
		trait=_build_type_path(_child_tree(trait_node, "type_path")) if trait_node is not None else None,
		generics=_build_generics(_child_tree(tree, "generics"), _child_tree(tree, "where_clause")),
		members=members,
	)


def _build_impl_member(tree: Tree) -> ImplMember:
	attrs = _build_attrs(tree)
	vis = _build_vis(_child_tree(tree, "vis"))
	decl = tree.children[-1]
	if _name(decl) == "fn_decl":
		return FnDecl(attrs=attrs, vis=vis, span=_span(tree), text="", sig=_build_signature(decl), has_body=_has_body(decl))
	kind = "const" if _name(decl) == "const_decl" else "type"
	return OtherMember(attrs=attrs, vis=vis, kind=kind, name=_first_token(decl, "NAME").value, span=_span(tree))


# ---- generics ----------------------------------------------------------------


def _build_generics(params_node: Optional[Tree], where_node: Optional[Tree]) -> Generics:
	params: List[GenericParam] = []
	if params_node is not None:
		for node in params_node.children:
			if isinstance(node, Tree):
				params.append(_build_generic_param(node))
	preds: List[WherePredicate] = []
	if where_node is not None:
		for node in where_node.children:
			if not isinstance(node, Tree):
				continue
			if _name(node) == "lifetime_pred":
				lts = [c for c in node.scan_values(lambda v: isinstance(v, Token) and v.type == "LIFETIME")]
				preds.append(
					LifetimePredicate(
						lifetime=Lifetime(lts[0].value, Span.from_loc(lts[0])),
						bounds=tuple(Lifetime(t.value, Span.from_loc(t)) for t in lts[1:]),
						span=_span(node),
					)
				)
			else:
				preds.append(
					TypePredicate(
						bounded=_build_type(_type_child(node)),
						bounds=_build_bounds(_child_tree(node, "bounds")),
						span=_span(node),
					)
				)
	return Generics(params=tuple(params), where=tuple(preds))


def _build_generic_param(tree: Tree) -> GenericParam:
	kind = _name(tree)
	if kind == "lifetime_param":
		lts = list(tree.scan_values(lambda v: isinstance(v, Token) and v.type == "LIFETIME"))
		return LifetimeParam(
			name=lts[0].value,
			bounds=tuple(Lifetime(t.value, Span.from_loc(t)) for t in lts[1:]),
			span=_span(tree),
		)
	name_tok = _first_token(tree, "NAME")
	if kind == "const_param":
		return ConstParam(name=name_tok.value, ty=_build_type(_type_child(tree)), span=_span(tree))
	default = _type_child(tree, required=False)
	return TypeParam(
		name=name_tok.value,
		bounds=_build_bounds(_child_tree(tree, "bounds")),
		default=_build_type(default) if default is not None else None,
		span=_span(tree),
	)


def _build_bounds(tree: Optional[Tree]) -> tuple[Bound, ...]:
	if tree is None:
		return ()
	bounds: List[Bound] = []
	for node in tree.children:
		if not isinstance(node, Tree):
			continue
		if _name(node) == "lifetime_bound":
			tok = node.children[0]
			bounds.append(Lifetime(tok.value, Span.from_loc(tok)))
		else:
			bounds.append(
				TraitBound(
					path=_build_type_path(_child_tree(node, "type_path")),
					maybe=_first_token(node, "QMARK") is not None,
					span=_span(node),
				)
			)
	return tuple(bounds)


# ---- types -------------------------------------------------------------------


def _build_type(tree: Tree) -> TypeExpr:
	kind = _name(tree)
	span = _span(tree)
	if kind == "type_path":
		return _build_type_path(tree)
	if kind == "ref_type":
		lt = _first_token(tree, "LIFETIME")
		return RefType(
			inner=_build_type(_type_child(tree)),
			mutable=_first_token(tree, "MUT") is not None,
			lifetime=Lifetime(lt.value, Span.from_loc(lt)) if lt is not None else None,
			span=span,
		)
	if kind == "tuple_type":
		elems = [_build_type(c) for c in tree.children if isinstance(c, Tree)]
		return TupleType(elems=tuple(elems), span=span)
	if kind == "paren_type":
		return ParenType(inner=_build_type(_type_child(tree)), span=span)
	if kind == "slice_type":
		return SliceType(elem=_build_type(_type_child(tree)), span=span)
	if kind == "array_type":
		return ArrayType(elem=_build_type(_type_child(tree)), length=_build_expr(_expr_child(tree)), span=span)
	if kind == "impl_type":
		return ImplTraitType(bounds=_build_bounds(_child_tree(tree, "bounds")), span=span)
	if kind == "dyn_type":
		return DynTraitType(bounds=_build_bounds(_child_tree(tree, "bounds")), span=span)
	raise ValueError(f"unexpected type node {kind}")


def _build_type_path(tree: Tree) -> PathType:
	segments: List[PathSegment] = []
	for seg in tree.children:
		if not isinstance(seg, Tree):
			continue
		ident_tok = next(c for c in seg.children if isinstance(c, Token))
		args_node = next((c for c in seg.children if isinstance(c, Tree)), None)
		args = None
		if args_node is not None and _name(args_node) == "angle_args":
			args = AngleArgs(
				args=tuple(
					Lifetime(c.value, Span.from_loc(c)) if isinstance(c, Token) else _build_type(c)
					for c in args_node.children
				)
			)
		elif args_node is not None:
			ret_node = _child_tree(args_node, "ret_type")
			args = ParenArgs(
				inputs=tuple(_build_type(c) for c in args_node.children if isinstance(c, Tree) and _name(c) in _TYPE_RULES),
				output=_build_type(_type_child(ret_node)) if ret_node is not None else None,
				span=_span(args_node),
			)
		segments.append(PathSegment(name=_ident(ident_tok), args=args, span=_span(seg)))
	return PathType(segments=tuple(segments), span=_span(tree))


# ---- expressions -------------------------------------------------------------


def _build_expr(tree: Tree) -> Expr:
	kind = _name(tree)
	span = _span(tree)
	if kind == "int_lit":
		return IntLit(text=tree.children[0].value, span=span)
	if kind == "str_lit":
		raw = tree.children[0].value
		value = literals.try_unescape(raw)
		return StrLit(raw=raw, value=value if value is not None else raw[1:-1], span=span)
	if kind == "bool_lit":
		return BoolLit(value=tree.children[0].type == "TRUE", span=span)
	if kind == "expr_path":
		return PathExpr(segments=tuple(_ident(t) for t in tree.children if isinstance(t, Token)), span=span)
	if kind in _BINARY_OPS:
		left, right = [c for c in tree.children if isinstance(c, Tree)]
		return Binary(op=_BINARY_OPS[kind], left=_build_expr(left), right=_build_expr(right), span=span)
	if kind == "neg":
		return Neg(operand=_build_expr(_expr_child(tree)), span=span)
	if kind == "paren":
		return ParenExpr(inner=_build_expr(_expr_child(tree)), span=span)
	if kind == "array":
		return ArrayLit(elems=tuple(_build_expr(c) for c in tree.children if isinstance(c, Tree)), span=span)
	if kind == "call":
		func, *args = [c for c in tree.children if isinstance(c, Tree)]
		return CallExpr(func=_build_expr(func), args=tuple(_build_expr(a) for a in args), span=span)
	raise ValueError(f"unexpected expression node {kind}")


# ---- helpers -----------------------------------------------------------------


def _span(tree: Tree) -> Span:
	return Span.from_loc(tree.meta)


def _name(node: Tree | Token) -> str:
	if isinstance(node, Tree):
		data = node.data
		if isinstance(data, Token):
			return data.value
		return data
	if isinstance(node, Token):
		return node.type
	return str(node)


def _ident(token: Token) -> str:
	if token.type == "RAW_NAME":
		return token.value[2:]
	return token.value


def _child_tree(tree: Optional[Tree], name: str) -> Optional[Tree]:
	if tree is None:
		return None
	return next((c for c in tree.children if isinstance(c, Tree) and _name(c) == name), None)


def _first_token(tree: Tree, ttype: str) -> Optional[Token]:
	return next((c for c in tree.children if isinstance(c, Token) and c.type == ttype), None)


def _type_child(tree: Tree, *, required: bool = True) -> Optional[Tree]:
	node = next((c for c in tree.children if isinstance(c, Tree) and _name(c) in _TYPE_RULES), None)
	if node is None and required:
		raise ValueError(f"{_name(tree)} is missing its type")
	return node


def _expr_child(tree: Tree) -> Tree:
	node = next((c for c in tree.children if isinstance(c, Tree) and _name(c) in _EXPR_RULES), None)
	if node is None:
		raise ValueError(f"{_name(tree)} is missing its expression")
	return node


__all__ = ["OpaqueBlockFolder", "parse_module", "parse_directive_text", "parse_expr_tokens"]
