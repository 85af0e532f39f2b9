"""Mapper: the Roman Urdu → JavaScript token table.

- vocabulary.py: built-in default entries (ordered)
- engine.py: MappingTable, Rule and the word-boundary rule compiler
"""
