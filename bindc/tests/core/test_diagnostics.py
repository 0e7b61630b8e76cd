# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
from __future__ import annotations

import pytest

from bindc.core.diagnostics import BindError, Diagnostic, error, raise_if_errors
from bindc.core.span import Span


def test_raise_if_errors_is_noop_when_empty() -> None:
	raise_if_errors([])


def test_raise_if_errors_merges_all_messages() -> None:
	diags = [error(Span(line=1, column=2), "first"), error(Span(line=3, column=4), "second")]
	with pytest.raises(BindError) as excinfo:
		raise_if_errors(diags)
	assert [d.message for d in excinfo.value.diagnostics] == ["first", "second"]
	assert str(excinfo.value) == "first; second"


def test_render_uses_fallback_file_and_unknown_position() -> None:
	diag = Diagnostic(message="boom")
	assert diag.render("a.rs") == "a.rs:?:?: error: boom"
	pinned = error(Span(file="b.rs", line=2, column=5), "bad", notes=["hint"])
	assert pinned.render("a.rs") == "b.rs:2:5: error: bad\n  note: hint"


def test_span_to_covers_both_ends() -> None:
	start = Span(line=1, column=1, end_line=1, end_column=3)
	end = Span(line=4, column=2, end_line=4, end_column=9)
	joined = start.to(end)
	assert (joined.line, joined.column, joined.end_line, joined.end_column) == (1, 1, 4, 9)
	assert Span().to(end) is end
