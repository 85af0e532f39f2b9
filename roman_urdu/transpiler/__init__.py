"""Transpiler: rewrites Roman Urdu source into JavaScript source text.

Token-based, not AST-based: indentation, comments and anything that is not a
mapped whole word pass through unchanged.
"""
