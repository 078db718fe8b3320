"""
In-process domain event bus (Observer pattern).

Services publish events after their transaction commits. Handlers are
side-channel only: a failing handler is logged and never propagates into the
operation that published the event.
"""
import logging
import threading
from dataclasses import dataclass, field, asdict
from datetime import datetime
from typing import Callable, Dict, List, Optional, Type

from partsledger.utils.logging import AUDIT_LOGGER_NAME

logger = logging.getLogger(__name__)


@dataclass
class DomainEvent:
    occurred_at: datetime = field(default_factory=datetime.utcnow, init=False)

    @property
    def name(self) -> str:
        return type(self).__name__

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass
class InventoryChangedEvent(DomainEvent):
    part_id: int = 0
    change_type: str = ""
    quantity_change: int = 0
    previous_qty: int = 0
    new_qty: int = 0
    log_id: Optional[int] = None
    order_id: Optional[int] = None
    performed_by: Optional[str] = None


@dataclass
class OrderCreatedEvent(DomainEvent):
    order_id: int = 0
    order_number: str = ""
    vendor_id: int = 0
    status: str = ""
    total: str = "0.00"
    is_auto_generated: bool = False


@dataclass
class OrderStatusChangedEvent(DomainEvent):
    order_id: int = 0
    order_number: str = ""
    old_status: str = ""
    new_status: str = ""
    performed_by: Optional[str] = None


@dataclass
class OrderDeletedEvent(DomainEvent):
    order_id: int = 0
    order_number: str = ""


@dataclass
class ReorderAlertCreatedEvent(DomainEvent):
    alert_id: int = 0
    part_id: int = 0
    part_number: str = ""
    current_qty: int = 0
    reorder_point: int = 0


@dataclass
class ReorderAlertResolvedEvent(DomainEvent):
    alert_id: int = 0
    part_id: int = 0
    status: str = ""
    order_id: Optional[int] = None


Handler = Callable[[DomainEvent], None]


class EventBus:

    def __init__(self):
        self._handlers: Dict[Type[DomainEvent], List[Handler]] = {}
        self._lock = threading.Lock()

    def subscribe(self, event_type: Type[DomainEvent], handler: Handler) -> None:
        with self._lock:
            self._handlers.setdefault(event_type, []).append(handler)

    def clear(self) -> None:
        with self._lock:
            self._handlers.clear()

    def publish(self, event: DomainEvent) -> None:
        with self._lock:
            handlers = [
                h
                for event_type, registered in self._handlers.items()
                if isinstance(event, event_type)
                for h in registered
            ]
        for handler in handlers:
            try:
                handler(event)
            except Exception:  # noqa: BLE001
                logger.exception("event_handler_failed event=%s", event.name)


class AuditLogHandler:
    """Writes every domain event as one structured record on the audit logger."""

    def __init__(self, audit_logger: Optional[logging.Logger] = None):
        self._logger = audit_logger or logging.getLogger(AUDIT_LOGGER_NAME)

    def __call__(self, event: DomainEvent) -> None:
        self._logger.info(event.name, extra={"event": event.name, "payload": event.to_dict()})


_event_bus = EventBus()


def get_event_bus() -> EventBus:
    return _event_bus


def configure_event_bus() -> EventBus:
    bus = get_event_bus()
    bus.clear()
    bus.subscribe(DomainEvent, AuditLogHandler())
    return bus
