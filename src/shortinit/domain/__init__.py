"""Domain layer for SHORTINIT.

Contains the vocabulary of the bootloader: hook specifications, capability
names and load targets, the default wiring contract of the content core,
and the request-scoped state (query slots, lifecycle states).

Dependency rule: do not import from `shortinit.adapters` or
`shortinit.entrypoints`.
"""
