# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
from __future__ import annotations

import pytest

from bindc.builder.enumeration import I32_MAX, literal_discriminant
from bindc.ir.nodes import Enumeration
from bindc.parser.parser import parse_directive_text, parse_expr_tokens
from bindc.test_support import compile_errors, compile_one, messages, raises_bind_error


def _values(body: str) -> list[int]:
	node = compile_one(f"#[bind]\npub enum E {{ {body} }}")
	assert isinstance(node, Enumeration)
	return [v.val for v in node.variants]


@pytest.mark.parametrize(
	"body, expected",
	[
		("A, B, C", [0, 1, 2]),
		("A, B = 5, C", [0, 5, 6]),
		("A = -2, B", [-2, -1]),
		("A = 3, B = 1, C", [3, 1, 2]),
		("A = 0x10, B = 1_000u32", [16, 1000]),
		("A = 2147483647", [I32_MAX]),
		("A = -2147483647", [-I32_MAX]),
	],
)
def test_discriminants(body: str, expected: list[int]) -> None:
	assert _values(body) == expected


def test_names_and_docs() -> None:
	node = compile_one(
		'/// Traffic light.\n#[bind(js_name = "Light", namespace = ["ui"])]\npub enum Signal {\n'
		'\t/// Stop.\n\tRed,\n\t#[bind(js_name = "GO")]\n\tGreen,\n}'
	)
	assert isinstance(node, Enumeration)
	assert (node.name, node.js_name) == ("Signal", "Light")
	assert node.namespace == ("ui",)
	assert node.comments == (" Traffic light.",)
	assert [(v.name, v.js_name) for v in node.variants] == [("Red", "Red"), ("Green", "GO")]
	assert node.variants[0].comments == (" Stop.",)


def test_default_external_name_is_the_identifier() -> None:
	node = compile_one("#[bind]\npub enum http_status { Ok }")
	assert node.js_name == "http_status"


@pytest.mark.parametrize(
	"source, message",
	[
		("#[bind]\nenum E { A }", "enumeration `E` must be `pub` to be bound"),
		("#[bind]\npub enum E {}", "cannot bind empty enumeration `E`"),
		("#[bind]\npub enum E { A, B(u8) }", "variant `B` carries data; only unit variants are supported"),
		("#[bind]\npub enum E { A { x: u8 } }", "variant `A` carries data; only unit variants are supported"),
		("#[bind]\npub enum E { A = 1 + 1 }", "only signed 32-bit literal discriminants are supported"),
		("#[bind]\npub enum E { A = -2147483648 }", "discriminant `-2147483648` does not fit a signed 32-bit integer"),
		("#[bind]\npub enum E { A = 4294967295 }", "discriminant `4294967295` does not fit a signed 32-bit integer"),
		("#[bind]\npub enum E { A = 2147483647, B }", "implicit discriminant of `B` overflows a signed 32-bit integer"),
		("#[bind]\npub enum E { #[bind(skip)] A }", "unused directive `skip`"),
	],
)
def test_rejected_enumerations(source: str, message: str) -> None:
	assert messages(compile_errors(source)) == [message]


def test_literal_discriminant_directly() -> None:
	expr = parse_expr_tokens(parse_directive_text("-0b11"))
	assert literal_discriminant(expr) == -3
	err = raises_bind_error(literal_discriminant, parse_expr_tokens(parse_directive_text("X")))
	assert err.diagnostics[0].code == "E-ENUM-DISCRIMINANT"


def test_empty_external_names_are_rejected() -> None:
	diags = compile_errors('#[bind(js_name = "")]\npub enum E {\n\t#[bind(js_name = "")]\n\tA,\n\tB,\n}')
	assert messages(diags) == ["external name of `E` must not be empty", "external name of variant `A` must not be empty"]
	assert {d.code for d in diags} == {"E-ENUM-NAME"}
	assert diags[1].span.line == 3
