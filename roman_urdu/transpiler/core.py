from __future__ import annotations
from typing import Iterable

from roman_urdu.mapper.engine import MappingTable, Rule

ARABIC_SEMICOLON = "؛"


def apply_rules(text: str, rules: Iterable[Rule]) -> str:
    out = text
    for rule in rules:
        out = rule.apply(out)
    return out


def transpile(roman_code: str, table: MappingTable) -> str:
    """Return JavaScript source for ``roman_code``.

    Rules run strictly in table order over the whole text; afterwards the
    Arabic semicolon (U+061B) is normalized to ``;``. Pure for a given table
    state.
    """
    if not isinstance(roman_code, str):
        raise TypeError("roman_code must be a string")
    out = apply_rules(roman_code, table.rules)
    return out.replace(ARABIC_SEMICOLON, ";")
