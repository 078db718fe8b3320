"""
Orders Router — Thin Controller (SRP / DIP)
"""
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session
from typing import Optional

from partsledger.database import get_db
from partsledger.schemas.order import (
    STATUS_PATTERN,
    OrderCreate,
    OrderStatusUpdate,
    OrderResponse,
    OrderDetailResponse,
    OrderListResponse,
    OrderSummary,
)
from partsledger.services.order_service import OrderService

router = APIRouter(prefix="/orders", tags=["Orders"])


def get_order_service(db: Session = Depends(get_db)) -> OrderService:
    return OrderService(db)


@router.get("", response_model=OrderListResponse)
def list_orders(
    page: int = Query(1, ge=1),
    page_size: int = Query(50, ge=1, le=200),
    status: Optional[str] = Query(None, pattern=STATUS_PATTERN),
    vendor_id: Optional[int] = None,
    service: OrderService = Depends(get_order_service),
):
    return service.list_orders(page=page, page_size=page_size, status=status, vendor_id=vendor_id)


@router.get("/summary", response_model=OrderSummary)
def order_summary(service: OrderService = Depends(get_order_service)):
    return service.get_summary()


@router.get("/{order_id}", response_model=OrderDetailResponse)
def get_order(order_id: int, service: OrderService = Depends(get_order_service)):
    order = service.get_order(order_id)
    detail = OrderResponse.model_validate(order).model_dump()
    detail["inventory_logs"] = service.get_order_logs(order_id)
    return detail


@router.post("", response_model=OrderResponse, status_code=status.HTTP_201_CREATED)
def create_order(data: OrderCreate, service: OrderService = Depends(get_order_service)):
    return service.create_order(data)


@router.patch("/{order_id}/status", response_model=OrderResponse)
def update_order_status(
    order_id: int,
    data: OrderStatusUpdate,
    service: OrderService = Depends(get_order_service),
):
    return service.update_status(
        order_id, data.status,
        tracking_number=data.tracking_number,
        performed_by=data.performed_by,
    )


@router.delete("/{order_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_order(order_id: int, service: OrderService = Depends(get_order_service)):
    service.delete_order(order_id)
