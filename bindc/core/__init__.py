"""
bindc.core: shared spans, diagnostics and naming helpers used across stages.

Modules:
  - span: source locations attached to tokens, AST nodes and diagnostics
  - diagnostics: Diagnostic record, BindError and accumulation helpers
  - casing: camel/pascal/snake conversion for external names
"""

__all__ = [
    "span",
    "diagnostics",
    "casing",
]
