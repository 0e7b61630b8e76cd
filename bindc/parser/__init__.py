"""
bindc.parser: lark grammar, post-lexer and AST for host declarations.

Modules:
  - grammar.lark: LALR grammar (signatures and data shapes only)
  - parser: post-lexer, lark setup and tree-to-AST builders
  - ast: declaration, type and expression dataclasses
  - literals: string literal escaping/unescaping
"""

from .parser import parse_directive_text, parse_expr_tokens, parse_module

__all__ = ["parse_module", "parse_directive_text", "parse_expr_tokens"]
