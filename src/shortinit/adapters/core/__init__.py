"""In-memory reference content core."""

from .memory import (
    MemoryContentQuery,
    MemoryCore,
    MemoryEnvironment,
    MemoryPost,
    MemoryRequest,
    MemoryRewrite,
    RecordingResponse,
)

__all__ = [
    "MemoryContentQuery",
    "MemoryCore",
    "MemoryEnvironment",
    "MemoryPost",
    "MemoryRequest",
    "MemoryRewrite",
    "RecordingResponse",
]
