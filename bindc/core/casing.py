# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""Identifier casing conversion for external (runtime-facing) names."""

from __future__ import annotations

import re
from enum import Enum
from typing import List, Optional

_SEPARATORS = re.compile(r"[_\-\s]+")
# Acronym run followed by a capitalised word, a (possibly capitalised) word, or
# a trailing acronym: "HTTPServer" -> HTTP, Server; "maxSize" -> max, Size.
_WORD = re.compile(r"[A-Z]+(?=[A-Z][a-z0-9])|[A-Z]?[a-z0-9]+|[A-Z]+")


class Case(Enum):
	CAMEL = "camel"
	PASCAL = "pascal"
	SNAKE = "snake"
	KEBAB = "kebab"
	SCREAMING_SNAKE = "screaming_snake"

	@classmethod
	def from_name(cls, name: str) -> Optional["Case"]:
		for case in cls:
			if case.value == name:
				return case
		return None


def split_words(name: str) -> List[str]:
	words: List[str] = []
	for chunk in _SEPARATORS.split(name):
		if chunk:
			words.extend(_WORD.findall(chunk))
	return words


def _capitalize(word: str) -> str:
	return word[:1].upper() + word[1:].lower()


def convert(name: str, case: Case) -> str:
	words = split_words(name)
	if not words:
		return name
	if case is Case.CAMEL:
		return words[0].lower() + "".join(_capitalize(w) for w in words[1:])
	if case is Case.PASCAL:
		return "".join(_capitalize(w) for w in words)
	if case is Case.SNAKE:
		return "_".join(w.lower() for w in words)
	if case is Case.KEBAB:
		return "-".join(w.lower() for w in words)
	return "_".join(w.upper() for w in words)


def to_pascal_case(name: str) -> str:
	return convert(name, Case.PASCAL)


def trim_prefix(name: str, prefix: str) -> str:
	"""Strip every leading repetition of `prefix` (`get_get_x` -> `x`)."""
	while prefix and name.startswith(prefix):
		name = name[len(prefix):]
	return name


__all__ = ["Case", "split_words", "convert", "to_pascal_case", "trim_prefix"]
