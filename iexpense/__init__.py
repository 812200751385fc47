"""Mini README: Package initializer for the iExpense tracker.

Exposes the logging helper used across the package. The expense core lives
in ``iexpense.expenses`` and the web interface in ``iexpense.interface``;
neither is imported here so that importing the package stays cheap.
"""

from .logging_utils import get_logger

__all__ = ["get_logger"]
