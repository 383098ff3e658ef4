"""Unit tests.

Purpose
- Verify a single module/class/function in isolation.

Guidelines
- No real I/O; use fakes at the core boundary.
- Prefer behavior-centric assertions over implementation details.
- Keep tests small, fast, and deterministic.
"""
