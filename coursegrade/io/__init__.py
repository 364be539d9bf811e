"""Reading and writing courses."""

from . import tabular

__all__ = ["tabular"]
