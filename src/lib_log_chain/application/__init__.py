"""Application layer: the handler contract and the logger orchestrating it."""

from __future__ import annotations

from .handler import Handler, verify_levels
from .logger import Logger, default_handlers, sanitize_context

__all__ = ["Handler", "Logger", "default_handlers", "sanitize_context", "verify_levels"]
