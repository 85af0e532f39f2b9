from __future__ import annotations
from dataclasses import dataclass
from typing import Dict, Iterable, Iterator, List, Mapping, Pattern, Tuple, Union
import json
import re
import threading
from pathlib import Path

from roman_urdu.logger import get_logger
from roman_urdu.mapper.vocabulary import DEFAULT_ENTRIES

log = get_logger(__name__)

Entries = Union[Mapping[str, str], Iterable[Tuple[str, str]]]


@dataclass(frozen=True)
class Rule:
    token: str
    replacement: str
    pattern: Pattern[str]

    def apply(self, text: str) -> str:
        # Callable replacement so backslashes in the target text stay literal.
        return self.pattern.sub(lambda _m: self.replacement, text)


def word_pattern(token: str) -> Pattern[str]:
    """Whole-word, case-insensitive matcher for ``token``.

    ``str`` patterns use Unicode word characters, so punctuation such as the
    Arabic semicolon counts as a boundary.
    """
    return re.compile(r"\b" + re.escape(token) + r"\b", re.IGNORECASE)


def compile_rules(entries: Iterable[Tuple[str, str]]) -> Tuple[Rule, ...]:
    """One rule per entry, in the given order."""
    return tuple(Rule(token=t, replacement=r, pattern=word_pattern(t)) for t, r in entries)


def _normalize(entries: Entries) -> List[Tuple[str, str]]:
    items = entries.items() if isinstance(entries, Mapping) else entries
    out: List[Tuple[str, str]] = []
    for token, replacement in items:
        if not isinstance(token, str) or not token:
            raise ValueError(f"token must be a non-empty string, got {token!r}")
        if not isinstance(replacement, str):
            raise ValueError(f"replacement for {token!r} must be a string")
        out.append((token, replacement))
    return out


class MappingTable:
    """Ordered token → replacement table with its compiled rules.

    Mutation happens only through ``extend``; each call publishes a fresh
    rule tuple in a single assignment, so readers always see a complete
    snapshot.
    """

    def __init__(self, entries: Entries = ()):
        self._entries: Dict[str, str] = {}
        self._lock = threading.Lock()
        for token, replacement in _normalize(entries):
            self._entries[token] = replacement
        self._rules: Tuple[Rule, ...] = compile_rules(self._entries.items())

    @classmethod
    def with_defaults(cls) -> "MappingTable":
        return cls(DEFAULT_ENTRIES)

    @classmethod
    def from_json_path(cls, path: str | Path, defaults: bool = True) -> "MappingTable":
        table = cls.with_defaults() if defaults else cls()
        table.extend(load_vocabulary(path))
        return table

    @property
    def rules(self) -> Tuple[Rule, ...]:
        return self._rules

    def extend(self, entries: Entries) -> None:
        """Add or override mappings, then rebuild every rule once."""
        new = _normalize(entries)
        with self._lock:
            merged = dict(self._entries)
            for token, replacement in new:
                merged[token] = replacement
            rules = compile_rules(merged.items())
            self._entries = merged
            self._rules = rules
        log.info("Mapping extended with %d entries (%d total)", len(new), len(merged))

    def to_dict(self) -> Dict[str, str]:
        return dict(self._entries)

    def items(self) -> List[Tuple[str, str]]:
        return list(self._entries.items())

    def __getitem__(self, token: str) -> str:
        return self._entries[token]

    def __contains__(self, token: object) -> bool:
        return token in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._entries))


def load_vocabulary(path: str | Path) -> List[Tuple[str, str]]:
    """Read ``{"entries": [{"token": ..., "replacement": ...}]}`` in file order."""
    data = json.loads(Path(path).read_text(encoding="utf-8"))
    raw = data.get("entries", []) if isinstance(data, dict) else None
    if not isinstance(raw, list):
        raise ValueError(f"{path}: 'entries' must be a list")
    pairs = []
    for e in raw:
        if not isinstance(e, dict):
            raise ValueError(f"{path}: each entry must be an object")
        pairs.append((e.get("token"), e.get("replacement")))
    entries = _normalize(pairs)
    log.info("Loaded %d vocabulary entries from %s", len(entries), path)
    return entries
