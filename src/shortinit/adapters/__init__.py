"""Adapters (infrastructure) for SHORTINIT.

Provide concrete implementations of the interfaces: the in-memory hook
registry, module sources backed by importlib or an in-memory manifest, and an
in-memory reference content core used by the CLI and the tests.

Dependency rule: may import `shortinit.domain` and `shortinit.interfaces`;
neither may import this package.
"""
