"""
bindc.directives: the directive language attached to bound declarations.

Modules:
  - table: directive names and payload shapes
  - directive: parsed directive values
  - directive_set: lookup and consumption tracking
  - parse: token-level directive parser and attribute lookup
"""

from .directive_set import DirectiveSet
from .parse import find_directives, has_directive_attr, parse_directive_list, parse_directives

__all__ = ["DirectiveSet", "find_directives", "has_directive_attr", "parse_directive_list", "parse_directives"]
