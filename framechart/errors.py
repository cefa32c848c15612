"""
Exceptions raised by the charting layer.

Invalid arguments are reported with ``ValueError``; problems binding data to a
chart model or rendering it are reported with ``ChartError``.
"""


class ChartError(RuntimeError):
    """Raised when data cannot be bound to, or rendered by, a chart."""
