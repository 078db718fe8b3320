from partsledger.models.vendor import Vendor
from partsledger.models.part import Part, Category
from partsledger.models.inventory import Inventory
from partsledger.models.inventory_log import InventoryLog
from partsledger.models.order import Order, OrderItem
from partsledger.models.reorder_alert import ReorderAlert

__all__ = [
    "Vendor",
    "Part",
    "Category",
    "Inventory",
    "InventoryLog",
    "Order",
    "OrderItem",
    "ReorderAlert",
]
