# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
from __future__ import annotations

from bindc.ir.nodes import Record
from bindc.registry import InMemoryRecordRegistry
from bindc.test_support import compile_errors, compile_one, messages

PROFILE = '''
/// A user profile.
#[bind]
pub struct user_profile {
	/// Login name.
	pub login: String,
	#[bind(readonly)]
	pub created_at: u64,
	#[bind(skip)]
	pub cache: Vec<u8>,
	#[bind(js_name = "lvl", type = "number", default = 1)]
	pub level: u32,
	secret: String,
	#[bind(bogus)]
	hidden: u8,
}
'''


def _record(source: str, registry: InMemoryRecordRegistry | None = None) -> Record:
	node = compile_one(source, registry=registry)
	assert isinstance(node, Record)
	return node


def test_named_record() -> None:
	rec = _record(PROFILE)
	assert rec.name == "user_profile"
	assert rec.js_name == "UserProfile"
	assert not rec.is_tuple
	assert not rec.gen_default_ctor
	assert rec.comments == (" A user profile.",)
	assert [f.member for f in rec.fields] == ["login", "created_at", "cache", "level"]

	login, created, cache, level = rec.fields
	assert (login.js_name, login.getter, login.setter) == ("login", True, True)
	assert login.comments == (" Login name.",)
	assert login.ty.render() == "String"
	assert (created.js_name, created.getter, created.setter) == ("created_at", True, False)
	assert (cache.getter, cache.setter) == (False, False)
	assert level.js_name == "lvl"
	assert level.ts_type == "number"
	assert level.default.render() == "1"


def test_record_case_applies_to_fields() -> None:
	rec = _record('#[bind(case = camel, js_name = "Cfg")]\npub struct config {\n\tpub max_size: u32,\n}')
	assert rec.js_name == "Cfg"
	assert rec.fields[0].js_name == "maxSize"


def test_tuple_record() -> None:
	rec = _record("#[bind(constructor)]\npub struct Pair(pub u32, u32, #[bind(js_name = \"second\")] pub String);")
	assert rec.is_tuple
	assert rec.gen_default_ctor
	assert [(f.member, f.js_name) for f in rec.fields] == [(0, "0"), (2, "second")]


def test_tuple_flag_needs_a_public_positional_field() -> None:
	rec = _record("#[bind]\npub struct Handle(u64);")
	assert not rec.is_tuple
	assert rec.fields == ()


def test_object_extends_namespace() -> None:
	rec = _record('#[bind(object, extends = shapes::Shape, namespace = ["geo"])]\npub struct Circle;')
	assert rec.object
	assert rec.extends == ("shapes", "Shape")
	assert rec.namespace == ("geo",)


def test_record_is_registered() -> None:
	registry = InMemoryRecordRegistry()
	_record('#[bind(js_name = "Acct")]\npub struct Account {}', registry)
	entry = registry.get("Account")
	assert entry is not None
	assert entry.js_name == "Acct"
	assert not entry.has_constructor


def test_field_errors_accumulate_and_block_registration() -> None:
	registry = InMemoryRecordRegistry()
	diags = compile_errors(
		"#[bind]\npub struct S {\n\t#[bind(constructor)]\n\tpub a: u8,\n\t#[bind(nope)]\n\tpub b: u8,\n}",
		registry=registry,
	)
	assert messages(diags) == ["unused directive `constructor`", "unknown attribute `nope`"]
	assert [d.span.line for d in diags] == [3, 5]
	assert registry.get("S") is None


def test_skip_wins_over_readonly_in_either_order() -> None:
	rec = _record("#[bind]\npub struct S {\n\t#[bind(readonly, skip)]\n\tpub a: u8,\n\t#[bind(skip, readonly)]\n\tpub b: u8,\n}")
	assert [(f.getter, f.setter) for f in rec.fields] == [(False, False), (False, False)]


def test_empty_external_names_are_rejected() -> None:
	registry = InMemoryRecordRegistry()
	diags = compile_errors(
		'#[bind(js_name = "")]\npub struct S {\n\t#[bind(js_name = "")]\n\tpub a: u8,\n}',
		registry=registry,
	)
	assert messages(diags) == ["external name of `S` must not be empty", "external name of field `a` must not be empty"]
	assert {d.code for d in diags} == {"E-REC-NAME"}
	assert {d.phase for d in diags} == {"bind"}
	assert registry.get("S") is None


def test_empty_positional_field_name_is_rejected() -> None:
	diags = compile_errors('#[bind]\npub struct T(#[bind(js_name = "")] pub u8);')
	assert messages(diags) == ["external name of field `0` must not be empty"]
