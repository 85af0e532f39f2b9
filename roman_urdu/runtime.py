"""Process-wide mapping table and the public operations.

Module-level functions look ``ROMAN_MAP`` up at call time, so tests can swap
it with ``unittest.mock.patch.object``.
"""
from __future__ import annotations
from typing import Any, Dict, Mapping, Optional

from roman_urdu.config.env import get_vocabulary_config
from roman_urdu.executor.engine import ConsoleSink, GuardedExecutor
from roman_urdu.mapper.engine import Entries, MappingTable, load_vocabulary
from roman_urdu.transpiler.core import transpile as _transpile


def _build_default_table() -> MappingTable:
    table = MappingTable.with_defaults()
    cfg = get_vocabulary_config()
    if cfg.extra_path:
        table.extend(load_vocabulary(cfg.extra_path))
    return table


ROMAN_MAP: MappingTable = _build_default_table()


def transpile(roman_code: str) -> str:
    return _transpile(roman_code, ROMAN_MAP)


def execute(
    roman_code: str,
    context: Optional[Mapping[str, Any]] = None,
    console: Optional[ConsoleSink] = None,
    time_limit: Optional[float] = None,
) -> Any:
    executor = GuardedExecutor(ROMAN_MAP, console=console, time_limit=time_limit)
    return executor.execute(roman_code, context)


def extend(entries: Entries) -> None:
    ROMAN_MAP.extend(entries)


def mapping() -> Dict[str, str]:
    """Ordered copy of the current table."""
    return ROMAN_MAP.to_dict()
