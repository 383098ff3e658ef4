"""Global pytest fixtures for SHORTINIT."""

from __future__ import annotations

import pytest

from shortinit.adapters.core import MemoryCore
from shortinit.config import Settings


@pytest.fixture
def core() -> MemoryCore:
    """A fresh in-memory reference core serving ``GET /``."""
    return MemoryCore()


@pytest.fixture
def settings() -> Settings:
    """Shipped default settings: parsing skipped, custom not-found policy."""
    return Settings()


@pytest.fixture
def parsing_settings() -> Settings:
    """Settings that let the core's request parser run."""
    return Settings(skip_request_parsing=False)


@pytest.fixture(autouse=True)
def clean_shortinit_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep SHORTINIT_* variables of the developer's shell out of the tests."""
    for name in (
        "SHORTINIT_BOOT_MODE",
        "SHORTINIT_EXTRA_QUERY_VARS",
        "SHORTINIT_SKIP_REQUEST_PARSING",
        "SHORTINIT_CUSTOM_NOT_FOUND",
        "SHORTINIT_LOAD_USER_SUBSYSTEM",
        "SHORTINIT_LOGGER_LEVELS",
    ):
        monkeypatch.delenv(name, raising=False)
