"""Guarded executor: denylist scan, then run the generated JavaScript.

The scan is an advisory string filter, NOT a sandbox. Code that passes it
runs with everything the embedded QuickJS engine exposes. Do not run
untrusted input on servers; isolate it in a separate process instead.
"""
