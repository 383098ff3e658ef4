"""Entrypoints (inbound adapters) for SHORTINIT.

Expose the bootloader to the outside world through the command line. Parse
and validate inputs, bootstrap the core, run the request, and present the
result.

Dependency rule: may import `shortinit.bootstrap` and `shortinit.config`;
avoid importing `shortinit.service_layer` directly.
"""
