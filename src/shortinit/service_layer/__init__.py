"""Service layer for SHORTINIT.

Implements the bootloader's use-cases: lazy subsystem loading, default hook
suppression, query-var registration, the request-parse override, the
not-found policy and the request lifecycle driver.

Dependency rule: may import `shortinit.domain` and `shortinit.interfaces`,
but not `shortinit.adapters` or `shortinit.entrypoints`.
"""
