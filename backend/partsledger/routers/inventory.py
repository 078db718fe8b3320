"""
Inventory Router — Thin Controller (SRP / DIP)
"""
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from typing import Optional, List

from partsledger.database import get_db
from partsledger.schemas.inventory import (
    InventoryDetailResponse,
    InventoryListResponse,
    InventoryLogResponse,
    InventoryMutationResponse,
    InventoryAdjustRequest,
    InventoryReceiveRequest,
    InventoryShipRequest,
    InventoryCountRequest,
    InventorySettingsUpdate,
    InventoryResponse,
    InventorySummary,
    LowStockItem,
)
from partsledger.services.inventory_ledger_service import InventoryLedgerService, LedgerEntry

router = APIRouter(prefix="/inventory", tags=["Inventory"])


def get_inventory_service(db: Session = Depends(get_db)) -> InventoryLedgerService:
    return InventoryLedgerService(db)


def _mutation(entry: LedgerEntry) -> dict:
    return {"inventory": entry.inventory, "log": entry.log, "variance": entry.variance}


@router.get("", response_model=InventoryListResponse)
def list_inventory(
    low_stock: bool = False,
    location: Optional[str] = None,
    service: InventoryLedgerService = Depends(get_inventory_service),
):
    items = service.list_inventory(low_stock=low_stock, location=location)
    return {"items": items, "total": len(items)}


@router.get("/low-stock", response_model=List[LowStockItem])
def low_stock(service: InventoryLedgerService = Depends(get_inventory_service)):
    return service.get_low_stock()


@router.get("/summary", response_model=InventorySummary)
def inventory_summary(service: InventoryLedgerService = Depends(get_inventory_service)):
    return service.get_summary()


@router.get("/{part_id}", response_model=InventoryDetailResponse)
def get_inventory(part_id: int, service: InventoryLedgerService = Depends(get_inventory_service)):
    return service.get_inventory(part_id)


@router.get("/{part_id}/logs", response_model=List[InventoryLogResponse])
def inventory_logs(
    part_id: int,
    limit: int = Query(50, ge=1, le=500),
    offset: int = Query(0, ge=0),
    service: InventoryLedgerService = Depends(get_inventory_service),
):
    return service.list_logs(part_id, limit=limit, offset=offset)


@router.put("/{part_id}", response_model=InventoryResponse)
def update_settings(
    part_id: int,
    data: InventorySettingsUpdate,
    service: InventoryLedgerService = Depends(get_inventory_service),
):
    return service.update_settings(part_id, data)


@router.post("/{part_id}/adjust", response_model=InventoryMutationResponse)
def adjust_inventory(
    part_id: int,
    data: InventoryAdjustRequest,
    service: InventoryLedgerService = Depends(get_inventory_service),
):
    return _mutation(service.adjust(part_id, data.quantity, data.reason, performed_by=data.performed_by))


@router.post("/{part_id}/receive", response_model=InventoryMutationResponse)
def receive_inventory(
    part_id: int,
    data: InventoryReceiveRequest,
    service: InventoryLedgerService = Depends(get_inventory_service),
):
    return _mutation(service.receive(
        part_id, data.quantity, order_id=data.order_id, performed_by=data.performed_by,
    ))


@router.post("/{part_id}/ship", response_model=InventoryMutationResponse)
def ship_inventory(
    part_id: int,
    data: InventoryShipRequest,
    service: InventoryLedgerService = Depends(get_inventory_service),
):
    return _mutation(service.ship(
        part_id, data.quantity, reason=data.reason, performed_by=data.performed_by,
    ))


@router.post("/{part_id}/count", response_model=InventoryMutationResponse)
def count_inventory(
    part_id: int,
    data: InventoryCountRequest,
    service: InventoryLedgerService = Depends(get_inventory_service),
):
    return _mutation(service.count(part_id, data.actual_quantity, performed_by=data.performed_by))
