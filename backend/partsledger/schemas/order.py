from pydantic import BaseModel, Field
from typing import Optional, List, Dict
from datetime import datetime
from decimal import Decimal

from partsledger.schemas.inventory import InventoryLogResponse

STATUS_PATTERN = "^(DRAFT|PENDING|APPROVED|ORDERED|SHIPPED|RECEIVED|CANCELLED)$"


class OrderItemCreate(BaseModel):
    part_id: int
    quantity: int = Field(..., ge=1)
    unit_price: Optional[Decimal] = Field(None, ge=0)
    notes: Optional[str] = Field(None, max_length=1000)


class OrderCreate(BaseModel):
    vendor_id: int
    items: List[OrderItemCreate] = Field(..., min_length=1)
    notes: Optional[str] = Field(None, max_length=2000)
    shipping_address: Optional[str] = Field(None, max_length=1000)
    tax: Decimal = Field(Decimal("0"), ge=0)
    shipping: Decimal = Field(Decimal("0"), ge=0)


class OrderStatusUpdate(BaseModel):
    status: str = Field(..., pattern=STATUS_PATTERN)
    tracking_number: Optional[str] = Field(None, max_length=100)
    performed_by: Optional[str] = Field(None, max_length=100)


class OrderItemResponse(BaseModel):
    id: int
    part_id: int
    part_number: Optional[str] = None
    part_name: Optional[str] = None
    quantity: int
    unit_price: Decimal
    total_price: Decimal
    quantity_received: int
    notes: Optional[str] = None

    class Config:
        from_attributes = True


class OrderResponse(BaseModel):
    id: int
    order_number: str
    vendor_id: int
    vendor_name: Optional[str] = None
    status: str
    order_date: Optional[datetime] = None
    expected_date: Optional[datetime] = None
    received_date: Optional[datetime] = None
    subtotal: Decimal
    tax: Decimal
    shipping: Decimal
    total: Decimal
    notes: Optional[str] = None
    shipping_address: Optional[str] = None
    tracking_number: Optional[str] = None
    is_auto_generated: bool
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    items: List[OrderItemResponse] = []

    class Config:
        from_attributes = True


class OrderDetailResponse(OrderResponse):
    inventory_logs: List[InventoryLogResponse] = []


class OrderListResponse(BaseModel):
    items: List[OrderResponse]
    total: int
    page: int
    page_size: int
    total_pages: int


class OrderSummary(BaseModel):
    total: int
    by_status: Dict[str, int]
    total_value: Decimal
    this_month: int
    this_month_value: Decimal
