from pydantic import BaseModel
from typing import Optional, List
from datetime import datetime
from decimal import Decimal

from partsledger.schemas.order import OrderResponse


class ReorderAlertResponse(BaseModel):
    id: int
    part_id: int
    part_number: str
    part_name: str
    current_qty: int
    reorder_point: int
    reorder_qty: int
    vendor_id: Optional[int] = None
    vendor_name: Optional[str] = None
    status: str
    order_id: Optional[int] = None
    created_at: datetime
    processed_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class ReorderScanResponse(BaseModel):
    message: str
    alerts: List[ReorderAlertResponse]


class PendingAlertsResponse(BaseModel):
    count: int
    alerts: List[ReorderAlertResponse]


class AlertProcessResult(BaseModel):
    alert_id: int
    part_number: Optional[str] = None
    success: bool
    error: Optional[str] = None
    order: Optional[OrderResponse] = None


class ProcessAllResponse(BaseModel):
    message: str
    processed: int
    successful: int
    failed: int
    results: List[AlertProcessResult]


class CreateVendorOrdersRequest(BaseModel):
    vendor_ids: Optional[List[int]] = None


class CreateVendorOrdersResponse(BaseModel):
    message: str
    orders: List[OrderResponse]


class ReorderSuggestion(BaseModel):
    part_id: int
    part_number: str
    part_name: str
    vendor_id: Optional[int] = None
    vendor_name: Optional[str] = None
    current_quantity: int
    reorder_point: int
    reorder_quantity: int
    shortfall: int
    estimated_cost: Decimal
    lead_time_days: int


class VendorSuggestionGroup(BaseModel):
    vendor_id: int
    vendor_name: Optional[str] = None
    items: List[ReorderSuggestion]
    total_estimated_cost: Decimal


class ReorderSuggestionSummary(BaseModel):
    total_items: int
    total_estimated_cost: Decimal
    vendor_count: int


class ReorderSuggestionsResponse(BaseModel):
    suggestions: List[ReorderSuggestion]
    by_vendor: List[VendorSuggestionGroup]
    summary: ReorderSuggestionSummary
