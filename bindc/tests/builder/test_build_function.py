# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
from __future__ import annotations

import pytest

from bindc.builder.function import build_callable, replace_self
from bindc.ir.nodes import Callable, CallbackArg, FnKind, FnSelf, PlainArg
from bindc.parser.ast import FnDecl
from bindc.test_support import (
	compile_errors,
	compile_one,
	directives,
	item_with_directives,
	messages,
	parse_item,
	raises_bind_error,
)


def _callable(source: str) -> Callable:
	node = compile_one(source)
	assert isinstance(node, Callable)
	return node


def test_plain_function() -> None:
	fn = _callable("#[bind]\npub fn add_numbers(a: u32, mut b: u32) -> u32 { a + b }")
	assert fn.name == "add_numbers"
	assert fn.js_name == "addNumbers"
	assert [(a.name, a.ty.render()) for a in fn.args] == [("a", "u32"), ("b", "u32")]
	assert all(isinstance(a, PlainArg) for a in fn.args)
	assert fn.ret.render() == "u32"
	assert fn.kind is FnKind.NORMAL
	assert fn.parent is None and fn.fn_self is None
	assert fn.vis.is_public
	assert not fn.is_async


def test_async_without_return() -> None:
	fn = _callable("#[bind]\npub async fn refresh() {}")
	assert fn.is_async
	assert fn.ret is None


def test_explicit_name_and_case() -> None:
	assert _callable('#[bind(js_name = "sum")]\npub fn add() {}').js_name == "sum"
	assert _callable("#[bind(case = pascal)]\npub fn do_work() {}").js_name == "DoWork"
	assert _callable("#[bind(case = kebab)]\npub fn do_work() {}").js_name == "do-work"


def test_unknown_case() -> None:
	diags = compile_errors("#[bind(case = wavy)]\npub fn f() {}")
	assert messages(diags) == ["unknown case `wavy`; expected one of camel, pascal, snake, kebab, screaming_snake"]
	assert diags[0].code == "E-DIR-CASE"


def test_empty_external_name() -> None:
	diags = compile_errors('#[bind(js_name = "")]\npub fn f() {}')
	assert messages(diags) == ["external name of `f` must not be empty"]


def test_options_are_carried() -> None:
	fn = _callable(
		"/// Fetches a row.\n"
		"///\n"
		'#[bind(strict, catch_unwind, namespace = ["db", "rows"], ts_args_type = "id: number", ts_return_type = "Row")]\n'
		"pub fn fetch(id: u32) {}"
	)
	assert fn.strict and fn.catch_unwind
	assert fn.namespace == ("db", "rows")
	assert fn.ts_args_type == "id: number"
	assert fn.ts_return_type == "Row"
	assert fn.comments == (" Fetches a row.", "")


# ---- callbacks -------------------------------------------------------------------


def test_callback_from_type_parameter() -> None:
	fn = _callable("#[bind]\npub fn each<T: Fn(u32, String) -> Result<i32>>(items: Vec<u32>, cb: T) {}")
	plain, cb = fn.args
	assert isinstance(plain, PlainArg)
	assert isinstance(cb, CallbackArg)
	assert cb.name == "cb"
	assert [t.render() for t in cb.args] == ["u32", "String"]
	assert cb.ret.render() == "i32"


def test_callback_from_where_clause_with_unit_result() -> None:
	fn = _callable("#[bind]\npub fn on_done<F>(cb: F) where F: FnMut() -> Result<()> + 'static {}")
	(cb,) = fn.args
	assert isinstance(cb, CallbackArg)
	assert cb.args == ()
	assert cb.ret is None


@pytest.mark.parametrize(
	"bound, message",
	[
		("Fn(u32)", "the return type of a callback can only be `Result`; try `Result<()>`"),
		("Fn(u32) -> Option<i32>", "the return type of a callback can only be `Result`, found `Option<i32>`"),
		("Fn(u32) -> Result", "`Result` in a callback return type needs a success type argument"),
		("Fn<u32>", "use parentheses for callable-trait bounds: `Fn(A) -> Result<R>`"),
	],
)
def test_malformed_callback_bounds(bound: str, message: str) -> None:
	diags = compile_errors(f"#[bind]\npub fn f<T: {bound}>(cb: T) {{}}")
	assert messages(diags) == [message]
	assert diags[0].code == "E-FN-CALLBACK"


@pytest.mark.parametrize(
	"ret, expected",
	[
		("Result<i32, Error>", "i32"),
		("Result<Vec<u8>, _>", "Vec<u8>"),
		("Result<(), _>", None),
	],
)
def test_callback_result_with_error_type(ret: str, expected: str | None) -> None:
	fn = _callable(f"#[bind]\npub fn f<T: Fn(u32) -> {ret}>(cb: T) {{}}")
	(cb,) = fn.args
	assert isinstance(cb, CallbackArg)
	assert (cb.ret.render() if cb.ret is not None else None) == expected


def test_generic_parameter_without_callable_bound_is_plain() -> None:
	fn = _callable("#[bind]\npub fn f<T: Clone>(x: T) {}")
	assert isinstance(fn.args[0], PlainArg)
	assert fn.args[0].ty.render() == "T"


# ---- generics and receivers ------------------------------------------------------


def test_generics_errors_accumulate_with_receiver_errors() -> None:
	diags = compile_errors("#[bind]\npub fn f<'a, const N: usize>(&self, x: &'a str) {}")
	assert messages(diags) == [
		"unsupported lifetime generic parameter `'a` on a bound function",
		"unsupported const generic parameter `N` on a bound function",
		"arguments cannot be `self` outside a method block",
	]
	assert [d.code for d in diags] == ["E-FN-GENERICS", "E-FN-GENERICS", "E-FN-RECEIVER"]


def test_non_static_lifetime_bound() -> None:
	diags = compile_errors("#[bind]\npub fn f<T: Fn() -> Result<()> + 'a>(cb: T) {}")
	assert messages(diags) == ["only the unbounded lifetime is supported here; use 'static"]


def test_lifetime_where_predicate() -> None:
	diags = compile_errors("#[bind]\npub fn f() where 'a: 'static {}")
	assert messages(diags) == ["unsupported where-clause predicate"]


def test_receivers_inside_a_method_block() -> None:
	item = parse_item("pub fn f(&mut self, other: &Self) -> Vec<Self> {}")
	assert isinstance(item, FnDecl)
	fn = build_callable(item.sig, directives(""), vis=item.vis, parent="Counter")
	assert fn.fn_self is FnSelf.MUT_REF
	assert fn.parent == "Counter"
	assert fn.args[0].ty.render() == "&Counter"
	assert fn.ret.render() == "Vec<Counter>"


@pytest.mark.parametrize(
	"params, message",
	[
		("self", "native methods can't move values out; use a reference (`&self` or `&mut self`)"),
		("&self, &mut self", "only one receiver is allowed"),
		("self: Box<Self>", "native methods can't move values out; use a reference (`&self` or `&mut self`)"),
		("mut self: Self", "native methods can't move values out; use a reference (`&self` or `&mut self`)"),
	],
)
def test_receiver_errors(params: str, message: str) -> None:
	item = parse_item(f"pub fn f({params}) {{}}")
	err = raises_bind_error(build_callable, item.sig, directives(""), vis=item.vis, parent="Counter")
	assert messages(err) == [message]


def test_replace_self_leaves_qualified_paths() -> None:
	item = parse_item("fn f(a: Self::Item, b: (Self, [Self; 2]), c: Box<dyn Fn(Self) -> Self>) {}")
	rendered = [replace_self(p.ty, "Point").render() for p in item.sig.params]
	assert rendered == ["Self::Item", "(Point, [Point; 2])", "Box<dyn Fn(Point) -> Point>"]
	assert replace_self(item.sig.params[1].ty, None).render() == "(Self, [Self; 2])"


# ---- roles and naming ------------------------------------------------------------


@pytest.mark.parametrize(
	"directive, name, kind, js_name",
	[
		("getter", "get_count", FnKind.GETTER, "count"),
		("getter", "get_maxSize", FnKind.GETTER, "maxSize"),
		("getter = total", "get_count", FnKind.GETTER, "total"),
		("setter", "set_value", FnKind.SETTER, "value"),
		("setter = assign", "set_value", FnKind.SETTER, "assign"),
		("constructor", "create", FnKind.CONSTRUCTOR, "create"),
	],
)
def test_roles(directive: str, name: str, kind: FnKind, js_name: str) -> None:
	fn = _callable(f"#[bind({directive})]\npub fn {name}() {{}}")
	assert fn.kind is kind
	assert fn.js_name == js_name


@pytest.mark.parametrize(
	"directive, kind",
	[
		("setter, getter", FnKind.GETTER),
		("getter, constructor", FnKind.CONSTRUCTOR),
		("setter, constructor, getter", FnKind.CONSTRUCTOR),
	],
)
def test_role_precedence_consumes_every_role(directive: str, kind: FnKind) -> None:
	assert _callable(f"#[bind({directive})]\npub fn get_x() {{}}").kind is kind


def test_getter_ignores_js_name() -> None:
	diags = compile_errors('#[bind(getter, js_name = "y")]\npub fn get_x() {}')
	assert messages(diags) == ["unused directive `js_name`"]


def test_directives_are_read_from_the_declaration() -> None:
	item, ds = item_with_directives('#[bind(js_name = "z")]\npub fn f() {}')
	fn = build_callable(item.sig, ds, vis=item.vis, attrs=item.attrs)
	assert fn.js_name == "z"
	assert ds.check_used() == []


@pytest.mark.parametrize(
	"params, mode",
	[
		("self: &Self", FnSelf.REF),
		("self: &'a mut Self", FnSelf.MUT_REF),
	],
)
def test_typed_reference_receivers(params: str, mode: FnSelf) -> None:
	item = parse_item(f"pub fn f({params}) {{}}")
	fn = build_callable(item.sig, directives(""), vis=item.vis, parent="Counter")
	assert fn.fn_self is mode
	assert fn.args == ()
