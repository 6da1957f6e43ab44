"""Cross-cutting helpers shared by the entry points."""

from .logging import LOG_FORMAT, configure_logging

__all__ = ["LOG_FORMAT", "configure_logging"]
