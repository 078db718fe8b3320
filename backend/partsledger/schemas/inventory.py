from pydantic import BaseModel, Field, field_validator
from typing import Optional, List
from datetime import datetime
from decimal import Decimal


class InventoryBase(BaseModel):
    part_id: int
    quantity_on_hand: int = 0
    quantity_reserved: int = 0
    reorder_point: int = 10
    reorder_quantity: int = 50
    max_quantity: Optional[int] = None
    location: Optional[str] = None
    last_count_date: Optional[datetime] = None
    last_order_date: Optional[datetime] = None


class InventoryResponse(InventoryBase):
    id: int
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class InventoryLogResponse(BaseModel):
    id: int
    part_id: int
    change_type: str
    quantity_change: int
    previous_qty: int
    new_qty: int
    order_id: Optional[int] = None
    reason: Optional[str] = None
    performed_by: Optional[str] = None
    created_at: datetime

    class Config:
        from_attributes = True


class InventoryMutationResponse(BaseModel):
    inventory: InventoryResponse
    log: InventoryLogResponse
    variance: Optional[int] = None


class InventoryAdjustRequest(BaseModel):
    quantity: int
    reason: str = Field(..., min_length=1, max_length=500)
    performed_by: Optional[str] = Field(None, max_length=100)


class InventoryReceiveRequest(BaseModel):
    quantity: int = Field(..., ge=1)
    order_id: Optional[int] = None
    performed_by: Optional[str] = Field(None, max_length=100)


class InventoryShipRequest(BaseModel):
    quantity: int = Field(..., ge=1)
    reason: Optional[str] = Field(None, max_length=500)
    performed_by: Optional[str] = Field(None, max_length=100)


class InventoryCountRequest(BaseModel):
    actual_quantity: int = Field(..., ge=0)
    performed_by: Optional[str] = Field(None, max_length=100)


class InventorySettingsUpdate(BaseModel):
    reorder_point: Optional[int] = Field(None, ge=0)
    reorder_quantity: Optional[int] = Field(None, ge=0)
    max_quantity: Optional[int] = Field(None, ge=0)
    location: Optional[str] = Field(None, max_length=100)

    @field_validator("reorder_point", "reorder_quantity")
    @classmethod
    def thresholds_not_null(cls, v: Optional[int]) -> Optional[int]:
        if v is None:
            raise ValueError("must not be null")
        return v


class InventoryPartView(BaseModel):
    id: int
    part_number: str
    name: str
    unit_price: Decimal
    is_active: bool
    vendor_id: Optional[int] = None
    category_id: Optional[int] = None

    class Config:
        from_attributes = True


class InventoryDetailResponse(InventoryResponse):
    part: Optional[InventoryPartView] = None


class LowStockItem(InventoryDetailResponse):
    shortfall: int
    available: int


class InventorySummary(BaseModel):
    total_items: int
    total_value: Decimal
    low_stock_count: int
    out_of_stock_count: int
    healthy_stock_count: int


class InventoryListResponse(BaseModel):
    items: List[InventoryDetailResponse]
    total: int
