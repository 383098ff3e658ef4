"""SHORTINIT test suite.

Folder taxonomy
- unit/         : Isolated, fast checks of a single module/class/function.
- integration/  : The bootstrap sequence wired against the in-memory reference core.
- e2e/          : The ``shortinit`` CLI driven through Click's CliRunner.

General guidance
- Keep unit fast and deterministic; prefer fakes over mocks at the core boundary.
- Integration asserts on what the core observed (loads, hooks, headers), not internals.
- Property-based tests live with the layer they exercise.
- Markers: unit, integration, e2e
"""
