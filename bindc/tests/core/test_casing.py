# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
from __future__ import annotations

import pytest

from bindc.core.casing import Case, convert, split_words, to_pascal_case, trim_prefix


def test_split_words_handles_acronyms_and_separators() -> None:
	assert split_words("HTTPServer") == ["HTTP", "Server"]
	assert split_words("max_size") == ["max", "size"]
	assert split_words("maxSize") == ["max", "Size"]
	assert split_words("kebab-case name") == ["kebab", "case", "name"]


@pytest.mark.parametrize(
	"name,expected",
	[
		("count", "count"),
		("get_value", "getValue"),
		("maxSize", "maxSize"),
		("HTTPServer", "httpServer"),
		("with_2_parts", "with2Parts"),
	],
)
def test_camel_case(name: str, expected: str) -> None:
	assert convert(name, Case.CAMEL) == expected


def test_to_pascal_case() -> None:
	assert to_pascal_case("animal_kind") == "AnimalKind"
	assert to_pascal_case("Animal") == "Animal"


def test_convert_other_cases() -> None:
	assert convert("maxSize", Case.SNAKE) == "max_size"
	assert convert("maxSize", Case.KEBAB) == "max-size"
	assert convert("maxSize", Case.SCREAMING_SNAKE) == "MAX_SIZE"


def test_case_from_name() -> None:
	assert Case.from_name("pascal") is Case.PASCAL
	assert Case.from_name("title") is None


def test_trim_prefix_strips_repeats() -> None:
	assert trim_prefix("get_count", "get_") == "count"
	assert trim_prefix("get_get_x", "get_") == "x"
	assert trim_prefix("value", "get_") == "value"
