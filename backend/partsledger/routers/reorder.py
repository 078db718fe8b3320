"""
Reorder Router — Thin Controller (SRP / DIP)
"""
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from typing import Optional, List

from partsledger.database import get_db
from partsledger.schemas.order import OrderResponse
from partsledger.schemas.reorder import (
    ReorderAlertResponse,
    ReorderScanResponse,
    PendingAlertsResponse,
    ProcessAllResponse,
    CreateVendorOrdersRequest,
    CreateVendorOrdersResponse,
    ReorderSuggestionsResponse,
)
from partsledger.services.alert_processor_service import AlertProcessorService
from partsledger.services.reorder_monitor_service import ReorderMonitorService

router = APIRouter(prefix="/reorder", tags=["Reorder"])

ALERT_STATUS_PATTERN = "^(PENDING|ORDERED|DISMISSED)$"


def get_monitor_service(db: Session = Depends(get_db)) -> ReorderMonitorService:
    return ReorderMonitorService(db)


def get_processor_service(db: Session = Depends(get_db)) -> AlertProcessorService:
    return AlertProcessorService(db)


@router.post("/check", response_model=ReorderScanResponse)
def run_reorder_scan(service: ReorderMonitorService = Depends(get_monitor_service)):
    alerts = service.scan()
    return {"message": f"Created {len(alerts)} new reorder alerts", "alerts": alerts}


@router.get("/alerts", response_model=List[ReorderAlertResponse])
def list_alerts(
    status: Optional[str] = Query(None, pattern=ALERT_STATUS_PATTERN),
    limit: int = Query(50, ge=1, le=500),
    service: ReorderMonitorService = Depends(get_monitor_service),
):
    return service.list_alerts(status=status, limit=limit)


@router.get("/alerts/pending", response_model=PendingAlertsResponse)
def pending_alerts(service: ReorderMonitorService = Depends(get_monitor_service)):
    count, alerts = service.get_pending()
    return {"count": count, "alerts": alerts}


@router.get("/suggestions", response_model=ReorderSuggestionsResponse)
def reorder_suggestions(service: ReorderMonitorService = Depends(get_monitor_service)):
    return service.get_suggestions()


@router.post("/alerts/{alert_id}/process", response_model=OrderResponse)
def process_alert(alert_id: int, service: AlertProcessorService = Depends(get_processor_service)):
    _, order = service.process_alert(alert_id)
    return order


@router.post("/alerts/{alert_id}/dismiss", response_model=ReorderAlertResponse)
def dismiss_alert(alert_id: int, service: AlertProcessorService = Depends(get_processor_service)):
    return service.dismiss_alert(alert_id)


@router.post("/process-all", response_model=ProcessAllResponse)
def process_all_alerts(service: AlertProcessorService = Depends(get_processor_service)):
    return service.process_all()


@router.post("/create-orders", response_model=CreateVendorOrdersResponse)
def create_vendor_orders(
    data: Optional[CreateVendorOrdersRequest] = None,
    service: AlertProcessorService = Depends(get_processor_service),
):
    orders = service.create_orders_for_vendors(data.vendor_ids if data else None)
    return {"message": f"Created {len(orders)} orders", "orders": orders}
