"""Interfaces (application boundary) for SHORTINIT.

Defines the contracts of the content core this bootloader drives: the hook
registry, the module source that loads subsystems, and the environment,
query and response objects of a request. Business rules stay out of this
package.

Dependency rule: may import `shortinit.domain` only. It may be imported by
`shortinit.service_layer`, `shortinit.adapters` and `shortinit.bootstrap`.
"""
