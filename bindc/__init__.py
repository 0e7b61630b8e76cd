# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
bindc: binding-descriptor compiler front end.

Reads declarations annotated with `#[bind(...)]` and compiles each into an
immutable IR node. The CLI entrypoint is `bindc.bindc:main`; the library entry
points are `bindc.driver.compile_module` and `bindc.driver.compile_source`.
"""

__all__ = []
