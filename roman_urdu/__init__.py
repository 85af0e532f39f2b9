"""Roman Urdu → JavaScript keyword transpiler.

Write small JavaScript programs with Roman Urdu keywords (``likho``,
``agar``, ``warna`` ...). The package rewrites whole-word tokens and runs the
generated source on an embedded JavaScript engine.

- mapper/: the mapping table and its compiled word-boundary rules
- transpiler/: applies the rules to source text
- executor/: denylist scan + execution on QuickJS
- runtime.py: the process-wide table and the four public operations
"""

from roman_urdu.errors import HostExecutionError, RefusedUnsafeToken
from roman_urdu.runtime import ROMAN_MAP, execute, extend, mapping, transpile

__all__ = [
    "ROMAN_MAP",
    "HostExecutionError",
    "RefusedUnsafeToken",
    "execute",
    "extend",
    "mapping",
    "transpile",
]
__version__ = "0.1.0"
