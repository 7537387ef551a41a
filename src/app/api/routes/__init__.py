"""Route group exports."""

from . import health, orders, regions, routes, vendors

__all__ = ["health", "orders", "regions", "routes", "vendors"]
