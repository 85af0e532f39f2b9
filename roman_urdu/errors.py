"""Error kinds raised by the executor.

``HostExecutionError`` is the embedded engine's own exception class; errors
from the executed script reach the caller unwrapped.
"""
from __future__ import annotations

from quickjs import JSException as HostExecutionError

__all__ = ["HostExecutionError", "RefusedUnsafeToken"]


class RefusedUnsafeToken(ValueError):
    """Generated source mentions a denylisted identifier; nothing was run."""

    def __init__(self, token: str):
        self.token = token
        super().__init__(f'Refusing to run code that mentions "{token}".')
