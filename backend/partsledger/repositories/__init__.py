# Repository Layer — Data Access (Repository Pattern)
from partsledger.repositories.base import BaseRepository
from partsledger.repositories.part_repository import PartRepository, VendorRepository
from partsledger.repositories.inventory_repository import InventoryRepository
from partsledger.repositories.inventory_log_repository import InventoryLogRepository
from partsledger.repositories.order_repository import OrderRepository
from partsledger.repositories.reorder_alert_repository import ReorderAlertRepository

__all__ = [
    "BaseRepository",
    "PartRepository",
    "VendorRepository",
    "InventoryRepository",
    "InventoryLogRepository",
    "OrderRepository",
    "ReorderAlertRepository",
]
