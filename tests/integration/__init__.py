"""Integration tests.

Purpose
- Run the bootstrap and the request lifecycle against the in-memory
  reference core, with its real hook registry and module source.

Guidelines
- Build a fresh core per test; the core keeps all state in memory.
- Mark as 'integration'.
"""
