"""Command-line interface for SHORTINIT."""
