from __future__ import annotations
from typing import Any, Callable, List, Mapping, Optional, Tuple
import json
import re
import sys

import quickjs

from roman_urdu.config.env import get_console_config
from roman_urdu.errors import RefusedUnsafeToken
from roman_urdu.logger import get_logger
from roman_urdu.mapper.engine import MappingTable, word_pattern
from roman_urdu.transpiler.core import transpile

log = get_logger(__name__)

DENYLIST: Tuple[str, ...] = ("process", "require", "child_process", "fs", "Function", "eval")

_DENY_PATTERNS = tuple((tok, word_pattern(tok)) for tok in DENYLIST)
_IDENTIFIER = re.compile(r"^[A-Za-z_$][A-Za-z0-9_$]*$")

ConsoleSink = Callable[[str, str], None]  # (level, line)

# Installs console.* over a host callable; non-string values print as JSON.
_CONSOLE_BRIDGE = """
(() => {
  const sink = globalThis.__roman_console;
  delete globalThis.__roman_console;
  const fmt = (v) => {
    if (typeof v === 'string') return v;
    try { return JSON.stringify(v) ?? String(v); } catch (e) { return String(v); }
  };
  const line = (level) => (...args) => { sink(level, args.map(fmt).join(' ')); };
  globalThis.console = {log: line('log'), info: line('info'), warn: line('warn'), error: line('error')};
})();
"""

# Compiles "function (...) {...}" and checks the result is that one function
# spanning the whole source; a stray "}" in the body that closes it early is a
# SyntaxError. eval and toString are captured before any generated text runs.
_COMPILE_BODY = """
(() => {
  const indirect = eval;
  const toSource = Function.prototype.toString;
  return (source) => {
    const fn = indirect("(" + source + ")");
    if (typeof fn !== "function" || toSource.call(fn) !== source) {
      throw new SyntaxError("unbalanced braces in function body");
    }
    return fn;
  };
})()
"""


def find_unsafe_token(js: str) -> Optional[str]:
    """First denylisted name present in ``js`` as a whole word, case-insensitive."""
    for tok, pattern in _DENY_PATTERNS:
        if pattern.search(js):
            return tok
    return None


def stdout_console(level: str, line: str) -> None:
    prefix = get_console_config().prefix
    stream = sys.stderr if level in ("warn", "error") else sys.stdout
    print(f"{prefix}{line}", file=stream)


class GuardedExecutor:
    def __init__(
        self,
        table: MappingTable,
        console: Optional[ConsoleSink] = None,
        time_limit: Optional[float] = None,
    ):
        self.table = table
        self.console = console or stdout_console
        self.time_limit = time_limit  # seconds; None runs unbounded

    def execute(self, roman_code: str, context: Optional[Mapping[str, Any]] = None) -> Any:
        """Transpile, scan, then run ``roman_code`` as a function body.

        ``context`` keys become the function's parameters (in order) and its
        values the arguments. Returns the body's ``return`` value, ``None``
        for ``undefined``. Raises RefusedUnsafeToken before running anything
        if the output mentions a denylisted name; errors thrown by the script
        propagate as ``quickjs.JSException``.
        """
        js = transpile(roman_code, self.table)
        token = find_unsafe_token(js)
        if token is not None:
            log.warning("Refused script mentioning %r", token)
            raise RefusedUnsafeToken(token)
        return self.run_js(js, context)

    def run_js(self, js: str, context: Optional[Mapping[str, Any]] = None) -> Any:
        ctx = dict(context or {})
        names: List[str] = list(ctx.keys())
        values: List[Any] = list(ctx.values())
        for name in names:
            if not isinstance(name, str) or not _IDENTIFIER.match(name):
                raise ValueError(f"context name {name!r} is not a valid JavaScript identifier")

        engine = quickjs.Context()
        if self.time_limit is not None:
            engine.set_time_limit(self.time_limit)

        # Compiled before any host callable exists, so text that escapes the
        # body cannot reach Python.
        compile_body = engine.eval(_COMPILE_BODY)
        func = compile_body("function (%s) {\n%s\n}" % (", ".join(names), js))

        engine.add_callable("__roman_console", self.console)
        engine.eval(_CONSOLE_BRIDGE)

        log.debug("Executing generated script with bindings %s", names)
        args = [_to_js(engine, i, v) for i, v in enumerate(values)]
        return _to_py(func(*args))


def _to_js(engine: quickjs.Context, index: int, value: Any) -> Any:
    if value is None or isinstance(value, (bool, int, float, str)):
        return value
    if callable(value):
        slot = f"__roman_arg_{index}"
        engine.add_callable(slot, value)
        return engine.get(slot)
    # Plain data (dicts, lists) crosses over as a JSON literal.
    return engine.eval("(" + json.dumps(value) + ")")


def _to_py(result: Any) -> Any:
    """Plain data comes back as Python values; functions and cyclic objects stay engine objects."""
    if not isinstance(result, quickjs.Object):
        return result
    try:
        text = result.json()
    except quickjs.JSException:
        return result
    if text is None:
        return result
    return json.loads(text)
