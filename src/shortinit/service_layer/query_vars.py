"""Query-var extender: recognize the deployment's extra query variables."""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from shortinit.interfaces.hooks import AbstractHookRegistry


def extend_query_vars(public: Sequence[str], extras: Sequence[str]) -> list[str]:
    """Return `public` followed by `extras` as a new list.

    Duplicates are kept; the request parser removes them.
    """
    return [*public, *extras]


class QueryVarExtender:
    """``query_vars`` filter appending a fixed tuple of extra names."""

    def __init__(self, extras: Iterable[str]) -> None:
        self.extras = tuple(extras)

    def __call__(self, public_query_vars: Sequence[str] = ()) -> list[str]:
        return extend_query_vars(public_query_vars, self.extras)

    def __repr__(self) -> str:
        return f"QueryVarExtender({self.extras!r})"


def register_query_vars(
    hooks: AbstractHookRegistry, extras: Iterable[str]
) -> QueryVarExtender | None:
    """Register a `QueryVarExtender` on ``query_vars`` unless `extras` is empty."""
    extender = QueryVarExtender(extras)
    if not extender.extras:
        return None
    hooks.add_filter("query_vars", extender)
    return extender
