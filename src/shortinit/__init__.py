"""SHORTINIT

A selective bootstrap and minimal request pipeline for a content-management
core. It loads only the subsystems a deployment needs, unhooks default
behaviors whose modules were never loaded, and drives one request from
authentication context to terminal output.
"""

__all__ = ["__version__"]
__version__ = "0.1.0"
