# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""String literal escaping for doc comments and directive strings."""

from __future__ import annotations

from typing import Optional

_SIMPLE_ESCAPES = {
	"t": "\t",
	"r": "\r",
	"n": "\n",
	"\\": "\\",
	"'": "'",
	'"': '"',
}
_HEX_DIGITS = frozenset("0123456789abcdefABCDEF")


def try_unescape(quoted: str) -> Optional[str]:
	"""
	Decode a quoted literal in its source spelling.

	The leading character (the opening quote) is dropped and one trailing quote
	is stripped if present. Supported escapes are `\\t \\r \\n \\\\ \\' \\"` and
	`\\u{HEX}` with one to six hex digits. Returns None when an escape is
	malformed or names an invalid code point.
	"""
	body = quoted[1:]
	if body.endswith(('"', "'")):
		body = body[:-1]
	out: list[str] = []
	i = 0
	while i < len(body):
		ch = body[i]
		if ch != "\\":
			out.append(ch)
			i += 1
			continue
		if i + 1 >= len(body):
			return None
		esc = body[i + 1]
		if esc in _SIMPLE_ESCAPES:
			out.append(_SIMPLE_ESCAPES[esc])
			i += 2
			continue
		if esc != "u" or i + 2 >= len(body) or body[i + 2] != "{":
			return None
		close = body.find("}", i + 3)
		if close == -1:
			return None
		digits = body[i + 3 : close]
		if not 1 <= len(digits) <= 6 or any(d not in _HEX_DIGITS for d in digits):
			return None
		code = int(digits, 16)
		if code > 0x10FFFF or 0xD800 <= code <= 0xDFFF:
			return None
		out.append(chr(code))
		i = close + 1
	return "".join(out)


def escape(text: str) -> str:
	"""Quote `text` as a double-quoted literal that `try_unescape` reverses."""
	out = ['"']
	for ch in text:
		if ch == "\\":
			out.append("\\\\")
		elif ch == '"':
			out.append('\\"')
		elif ch == "\n":
			out.append("\\n")
		elif ch == "\r":
			out.append("\\r")
		elif ch == "\t":
			out.append("\\t")
		else:
			out.append(ch)
	out.append('"')
	return "".join(out)


__all__ = ["try_unescape", "escape"]
