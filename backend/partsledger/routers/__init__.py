# Routers package — Thin Controllers (SRP / DIP)
from partsledger.routers import (
    inventory,
    orders,
    reorder,
)

__all__ = [
    "inventory",
    "orders",
    "reorder",
]
