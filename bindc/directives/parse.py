# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Directive list parser.

Works directly on the lark tokens captured inside `#[bind(...)]`. The list is
comma separated; each entry is a name from the directive table followed by the
payload its shape dictates. Expression payloads are handed to the grammar's
`expr` start rule; everything else is read by a small cursor.
"""

from __future__ import annotations

from typing import Iterable, List, Optional, Sequence

from lark import Token
from lark.exceptions import UnexpectedInput

from bindc.core.diagnostics import BindError
from bindc.core.span import Span
from bindc.parser import literals
from bindc.parser.ast import Attribute, Expr
from bindc.parser.parser import parse_directive_text, parse_expr_tokens

from .directive import (
	Directive,
	ExprDirective,
	Flag,
	IdentDirective,
	OptionalIdentDirective,
	PathDirective,
	StringDirective,
	StringListDirective,
)
from .directive_set import DirectiveSet
from .table import Shape, lookup

_KEYWORDS = frozenset(
	{
		"PUB", "CRATE", "SUPER", "SELF", "FN", "ASYNC", "CONST", "UNSAFE", "STRUCT", "ENUM", "IMPL",
		"FOR", "WHERE", "MUT", "USE", "TRAIT", "MOD", "STATIC", "TYPE", "IN", "TRUE", "FALSE", "DYN",
	}
)
_OPENERS = {"LPAR": "RPAR", "LSQB": "RSQB", "LBRACE": "RBRACE"}


def _is_ident(tok: Optional[Token]) -> bool:
	return tok is not None and (tok.type in ("NAME", "RAW_NAME") or tok.type in _KEYWORDS)


def _ident_text(tok: Token) -> str:
	return tok.value[2:] if tok.type == "RAW_NAME" else tok.value


def _fail(tok: Optional[Token], fallback: Span, message: str, code: str = "E-DIR-SYNTAX") -> BindError:
	span = Span.from_loc(tok) if tok is not None else fallback
	return BindError.at(span, message, code=code, phase="directive")


class _Cursor:
	def __init__(self, tokens: Sequence[Token], end: Span) -> None:
		self.tokens = list(tokens)
		self.pos = 0
		# Where to point when the input runs out.
		self.end = end

	def peek(self) -> Optional[Token]:
		return self.tokens[self.pos] if self.pos < len(self.tokens) else None

	def at(self, ttype: str) -> bool:
		tok = self.peek()
		return tok is not None and tok.type == ttype

	def advance(self) -> Token:
		tok = self.tokens[self.pos]
		self.pos += 1
		return tok

	def expect(self, ttype: str, what: str) -> Token:
		tok = self.peek()
		if tok is None or tok.type != ttype:
			raise _fail(tok, self.end, f"expected {what}")
		return self.advance()

	def expect_ident(self, what: str = "identifier") -> Token:
		tok = self.peek()
		if not _is_ident(tok):
			raise _fail(tok, self.end, f"expected {what}")
		return self.advance()

	@property
	def done(self) -> bool:
		return self.pos >= len(self.tokens)


def parse_directives(tokens: Sequence[Token], *, end: Span = Span()) -> DirectiveSet:
	"""
	Parse the tokens of one directive list into a DirectiveSet.

	Raises BindError (phase "directive") at the first token that fits no
	recognised shape. `end` locates errors that run past the last token.
	"""
	cur = _Cursor(tokens, end)
	directives: List[Directive] = []
	while not cur.done:
		directives.append(_parse_entry(cur))
		if cur.done:
			break
		tok = cur.peek()
		if tok.type != "COMMA":
			raise _fail(tok, end, f"unexpected `{tok.value}` in directive list; expected `,`")
		cur.advance()
	return DirectiveSet(directives, exists=True)


def parse_directive_list(text: str) -> DirectiveSet:
	"""Parse a directive list given as source text (`js_name = "x", constructor`)."""
	try:
		tokens = parse_directive_text(text)
	except UnexpectedInput as err:
		span = Span(line=getattr(err, "line", None), column=getattr(err, "column", None))
		raise BindError.at(span, f"malformed directive list: {err}", code="E-DIR-SYNTAX", phase="directive") from err
	return parse_directives(tokens)


def _parse_entry(cur: _Cursor) -> Directive:
	name_tok = cur.expect_ident("directive name")
	span = Span.from_loc(name_tok)
	spelled = _ident_text(name_tok)
	entry = lookup(spelled)
	if entry is None:
		raise BindError.at(span, f"unknown attribute `{spelled}`", code="E-DIR-UNKNOWN", phase="directive")
	name, shape = entry

	if shape is Shape.FLAG:
		return Flag(name=name, span=span)
	if shape is Shape.OPTIONAL_IDENT:
		if not cur.at("EQUAL"):
			return OptionalIdentDirective(name=name, span=span)
		cur.advance()
		ident = cur.expect_ident()
		return OptionalIdentDirective(name=name, span=span, ident=_ident_text(ident), ident_span=Span.from_loc(ident))

	cur.expect("EQUAL", f"`=` after `{name}`")
	if shape is Shape.IDENT:
		ident = cur.expect_ident()
		return IdentDirective(name=name, span=span, ident=_ident_text(ident), ident_span=Span.from_loc(ident))
	if shape is Shape.PATH:
		segments = [_ident_text(cur.expect_ident("path"))]
		while cur.at("PATH_SEP"):
			cur.advance()
			segments.append(_ident_text(cur.expect_ident("path segment")))
		return PathDirective(name=name, span=span, segments=tuple(segments))
	if shape is Shape.EXPR:
		return ExprDirective(name=name, span=span, expr=_parse_expr(cur))
	if shape is Shape.STRING:
		value, value_span = _parse_string_or_ident(cur)
		return StringDirective(name=name, span=span, value=value, value_span=value_span)
	values, spans = _parse_string_list(cur)
	return StringListDirective(name=name, span=span, values=tuple(values), value_spans=tuple(spans))


def _decode(tok: Token) -> str:
	value = literals.try_unescape(tok.value)
	if value is None:
		raise _fail(tok, Span(), "invalid escape in string literal")
	return value


def _parse_string_or_ident(cur: _Cursor) -> tuple[str, Span]:
	if cur.at("STRING"):
		tok = cur.advance()
		return _decode(tok), Span.from_loc(tok)
	ident = cur.expect_ident("string literal or identifier")
	return _ident_text(ident), Span.from_loc(ident)


def _parse_string_list(cur: _Cursor) -> tuple[List[str], List[Span]]:
	if not cur.at("LSQB"):
		ident = cur.expect_ident("string list or identifier")
		return [_ident_text(ident)], [Span.from_loc(ident)]
	open_tok = cur.advance()
	values: List[str] = []
	spans: List[Span] = []
	while not cur.at("RSQB"):
		tok = cur.peek()
		if tok is None:
			raise _fail(open_tok, cur.end, "unclosed `[` in string list")
		if tok.type != "STRING":
			raise _fail(tok, cur.end, "expected string literals")
		cur.advance()
		values.append(_decode(tok))
		spans.append(Span.from_loc(tok))
		if cur.at("COMMA"):
			cur.advance()
		elif not cur.at("RSQB"):
			raise _fail(cur.peek(), cur.end, "expected string literals")
	cur.advance()
	return values, spans


def _parse_expr(cur: _Cursor) -> Expr:
	start = cur.pos
	depth: List[str] = []
	while not cur.done:
		tok = cur.peek()
		if not depth and tok.type == "COMMA":
			break
		if tok.type in _OPENERS:
			depth.append(_OPENERS[tok.type])
		elif depth and tok.type == depth[-1]:
			depth.pop()
		cur.advance()
	run = cur.tokens[start : cur.pos]
	if not run:
		raise _fail(cur.peek(), cur.end, "expected expression")
	try:
		return parse_expr_tokens(run)
	except UnexpectedInput as err:
		bad = getattr(err, "token", None)
		raise _fail(bad if isinstance(bad, Token) and bad.type != "$END" else run[0], cur.end, "expected expression") from err


# ---- attribute lookup ----------------------------------------------------------


def find_directives(attrs: Iterable[Attribute], attr_name: str = "bind") -> DirectiveSet:
	"""
	Collect and parse every `#[<attr_name>(...)]` on a declaration.

	Multiple attributes merge into one set in source order. Without any such
	attribute the result is empty with `exists` False.
	"""
	directives: List[Directive] = []
	exists = False
	for attr in attrs:
		if attr.path != (attr_name,):
			continue
		exists = True
		if attr.value is not None:
			raise BindError.at(
				attr.span,
				f"`#[{attr_name} = ...]` is not a directive list; use `#[{attr_name}(...)]`",
				code="E-DIR-SYNTAX",
				phase="directive",
			)
		end = Span(line=attr.span.end_line, column=attr.span.end_column)
		directives.extend(parse_directives(attr.tokens, end=end))
	return DirectiveSet(directives, exists=exists)


def has_directive_attr(attrs: Iterable[Attribute], attr_name: str = "bind") -> bool:
	return any(attr.path == (attr_name,) for attr in attrs)


__all__ = ["parse_directives", "parse_directive_list", "find_directives", "has_directive_attr"]
